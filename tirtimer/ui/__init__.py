"""UI package."""

from .timer_widget import TimerWidget
from .progress_ring import ProgressRing
from .preset_dialog import PresetDialog, PresetEditorDialog
from .settings_dialog import SettingsDialog

__all__ = [
    "TimerWidget",
    "ProgressRing",
    "PresetDialog",
    "PresetEditorDialog",
    "SettingsDialog",
]
