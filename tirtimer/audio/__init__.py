"""Audio package."""

from .announcer import StageAnnouncer, ANNOUNCEMENT_TEXT
from .sounds import SoundManager, SOUND_NAMES

__all__ = ["StageAnnouncer", "ANNOUNCEMENT_TEXT", "SoundManager", "SOUND_NAMES"]
