"""Named timer presets and the built-in catalog."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from ..timer.state import TimerConfiguration


DEFAULT_COMPETITION_ID = "default_competition"
DEFAULT_PRACTICE_ID = "default_practice"
DEFAULT_QUICK_ID = "default_quick"


def _new_id() -> str:
    return str(uuid.uuid4())


def _fmt_duration(seconds: int) -> str:
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class TimerPreset:
    """A named configuration.  ``id`` is stable across edits."""

    name: str
    configuration: TimerConfiguration
    id: str = field(default_factory=_new_id)
    is_default: bool = False

    @property
    def timing_description(self) -> str:
        """e.g. ``"Prep: 5:00, Shoot: 3:00"``."""
        config = self.configuration
        return (
            f"Prep: {_fmt_duration(config.stage_one_duration_seconds)}, "
            f"Shoot: {_fmt_duration(config.stage_two_duration_seconds)}"
        )

    def is_valid(self) -> bool:
        return bool(self.name.strip()) and self.configuration.is_valid()


def default_presets() -> list[TimerPreset]:
    """Built-in presets, rebuilt on every call."""
    return [
        TimerPreset(
            id=DEFAULT_COMPETITION_ID,
            name="Competition",
            configuration=TimerConfiguration(300, 180),   # 5:00 / 3:00
            is_default=True,
        ),
        TimerPreset(
            id=DEFAULT_PRACTICE_ID,
            name="Practice",
            configuration=TimerConfiguration(180, 120),   # 3:00 / 2:00
            is_default=True,
        ),
        TimerPreset(
            id=DEFAULT_QUICK_ID,
            name="Quick Session",
            configuration=TimerConfiguration(60, 30),     # 1:00 / 0:30
            is_default=True,
        ),
    ]


def default_preset_ids() -> frozenset[str]:
    return frozenset(p.id for p in default_presets())
