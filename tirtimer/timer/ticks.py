"""Periodic tick sources that drive a countdown.

A tick source calls its callback with the milliseconds elapsed since
the previous tick (or since ``start``).  ``cancel`` guarantees that no
further callback is delivered for that start.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer


TickCallback = Callable[[int], None]

TICK_INTERVAL_MS = 16


class TickSource(Protocol):
    @property
    def is_active(self) -> bool: ...

    def start(self, callback: TickCallback) -> None: ...

    def cancel(self) -> None: ...


class QtTickSource(QObject):
    """``QTimer``-backed tick source measuring real elapsed time."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback: TickCallback | None = None
        self._clock = QElapsedTimer()
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._callback is not None and self._timer.isActive()

    def start(self, callback: TickCallback) -> None:
        self._timer.stop()
        self._callback = callback
        self._clock.start()
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        callback = self._callback
        if callback is None:
            return
        callback(self._clock.restart())
