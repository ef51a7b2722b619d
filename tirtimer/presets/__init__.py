"""Presets package."""

from .models import (
    TimerPreset,
    default_presets,
    default_preset_ids,
    DEFAULT_COMPETITION_ID,
    DEFAULT_PRACTICE_ID,
    DEFAULT_QUICK_ID,
)
from .store import PresetStore

__all__ = [
    "TimerPreset",
    "default_presets",
    "default_preset_ids",
    "DEFAULT_COMPETITION_ID",
    "DEFAULT_PRACTICE_ID",
    "DEFAULT_QUICK_ID",
    "PresetStore",
]
