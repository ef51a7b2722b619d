"""Application settings with JSON persistence.

Settings are stored at:
    ~/.tirtimer/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)

Stage durations and presets live in the database (see
``tirtimer.preferences`` and ``tirtimer.presets``), not here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields

from .database.db import APP_SUPPORT_DIR

logger = logging.getLogger(__name__)


SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 80                 # 0-100
    announcements_enabled: bool = True     # PREPARATION / SHOOT / STOP cues

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 440
    window_height: int = 640
    always_on_top: bool = False


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except Exception:
        logger.warning("could not read %s; using defaults", SETTINGS_PATH)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
