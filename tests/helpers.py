"""Shared test helpers for TirTimer."""

from tirtimer.timer.ticks import TickCallback


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualTickSource:
    """Tick source driven by the test instead of a QTimer."""

    def __init__(self, interval_ms: int = 100):
        self.interval_ms = interval_ms
        self._callback: TickCallback | None = None
        self.starts = 0
        self.cancels = 0

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self.starts += 1
        self._callback = callback

    def cancel(self) -> None:
        self.cancels += 1
        self._callback = None

    def tick(self, elapsed_ms: int | None = None) -> None:
        """Deliver one tick to whatever callback is current."""
        callback = self._callback
        if callback is not None:
            callback(self.interval_ms if elapsed_ms is None else elapsed_ms)

    def advance(self, ms: int) -> None:
        """Tick in ``interval_ms`` steps until *ms* has passed or nothing listens."""
        passed = 0
        while passed < ms and self._callback is not None:
            step = min(self.interval_ms, ms - passed)
            self.tick(step)
            passed += step
