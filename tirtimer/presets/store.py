"""Preset persistence and selection.

Built-in presets are never stored.  ``get_all_presets`` regenerates them
and removes two kinds:

- ids in the soft-delete list (``deleted_default_presets``);
- ids that a custom preset reuses.  Editing a built-in saves a custom
  copy under the same id, and that copy hides ("shadows") the original.

The custom presets follow the remaining built-ins.  The current
selection is a separate ``current_preset_id`` value.

Reads never raise: malformed JSON and storage errors read as empty.
Writes report failure by returning ``False``.  Mutations read through
the raising ``_load_*`` helpers, so a failed read never gets written
back as an empty list.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..preferences import Preferences
from ..timer.state import TimerConfiguration
from .models import TimerPreset, default_preset_ids, default_presets

logger = logging.getLogger(__name__)


class PresetStore:
    NAMESPACE = "timer_presets"
    KEY_CUSTOM_PRESETS = "custom_presets"
    KEY_DELETED_DEFAULTS = "deleted_default_presets"
    KEY_CURRENT_PRESET_ID = "current_preset_id"

    def __init__(self, preferences: Preferences | None = None) -> None:
        self._prefs = preferences or Preferences(self.NAMESPACE)

    # ══════════════════════════════════════════════════════════════════
    #  QUERIES
    # ══════════════════════════════════════════════════════════════════

    def get_all_presets(self) -> list[TimerPreset]:
        deleted = self.get_deleted_default_preset_ids()
        custom = self.get_custom_presets()
        custom_ids = {p.id for p in custom}
        builtins = [
            p for p in default_presets()
            if p.id not in deleted and p.id not in custom_ids
        ]
        return builtins + custom

    def get_custom_presets(self) -> list[TimerPreset]:
        """Stored presets; invalid entries are dropped."""
        try:
            return self._load_custom()
        except SQLAlchemyError:
            logger.exception("could not read custom presets")
            return []

    def get_preset_by_id(self, preset_id: str) -> TimerPreset | None:
        return next(
            (p for p in self.get_all_presets() if p.id == preset_id), None,
        )

    def get_deleted_default_preset_ids(self) -> set[str]:
        try:
            return self._load_deleted()
        except SQLAlchemyError:
            logger.exception("could not read deleted-preset list")
            return set()

    def is_preset_name_exists(
        self, name: str, exclude_id: str | None = None,
    ) -> bool:
        """Case-insensitive name clash, ignoring the preset being edited."""
        wanted = name.casefold()
        return any(
            p.name.casefold() == wanted and p.id != exclude_id
            for p in self.get_all_presets()
        )

    # ══════════════════════════════════════════════════════════════════
    #  MUTATIONS
    # ══════════════════════════════════════════════════════════════════

    def save_preset(self, preset: TimerPreset, is_editing: bool = False) -> bool:
        """Insert or replace *preset* by id.  Returns False if invalid."""
        try:
            if not preset.is_valid():
                logger.info("rejected invalid preset %r", preset.name)
                return False
            if is_editing and preset.id in default_preset_ids():
                preset = replace(preset, is_default=False)

            with self._prefs.edit():
                custom = self._load_custom()
                for index, existing in enumerate(custom):
                    if existing.id == preset.id:
                        custom[index] = preset
                        break
                else:
                    custom.append(preset)
                self._write_custom(custom)

            logger.info("saved preset %r (%s)", preset.name, preset.id)
            return True
        except Exception:
            logger.exception("failed to save preset %r", preset.name)
            return False

    def delete_preset(self, preset_id: str) -> bool:
        """Remove a custom preset, or hide a built-in one."""
        try:
            with self._prefs.edit():
                if preset_id in default_preset_ids():
                    deleted = self._load_deleted()
                    deleted.add(preset_id)
                    self._prefs.set_string(
                        self.KEY_DELETED_DEFAULTS, json.dumps(sorted(deleted)),
                    )
                else:
                    custom = self._load_custom()
                    kept = [p for p in custom if p.id != preset_id]
                    if len(kept) != len(custom):
                        self._write_custom(kept)

                if self._prefs.get_string(self.KEY_CURRENT_PRESET_ID) == preset_id:
                    self._prefs.remove(self.KEY_CURRENT_PRESET_ID)
            logger.info("deleted preset %s", preset_id)
            return True
        except Exception:
            logger.exception("failed to delete preset %s", preset_id)
            return False

    def restore_default_presets(self) -> bool:
        """Bring back every soft-deleted built-in."""
        try:
            self._prefs.remove(self.KEY_DELETED_DEFAULTS)
            return True
        except SQLAlchemyError:
            logger.exception("could not restore built-in presets")
            return False

    def create_preset_from_configuration(
        self, name: str, configuration: TimerConfiguration,
    ) -> TimerPreset:
        return TimerPreset(name=name, configuration=configuration)

    # ══════════════════════════════════════════════════════════════════
    #  CURRENT SELECTION
    # ══════════════════════════════════════════════════════════════════

    def set_current_preset(self, preset: TimerPreset | None) -> bool:
        try:
            self._prefs.set_string(
                self.KEY_CURRENT_PRESET_ID, preset.id if preset else None,
            )
            return True
        except SQLAlchemyError:
            logger.exception("could not store the current preset")
            return False

    def get_current_preset_id(self) -> str | None:
        try:
            return self._prefs.get_string(self.KEY_CURRENT_PRESET_ID)
        except SQLAlchemyError:
            logger.exception("could not read the current preset")
            return None

    def get_current_preset(self) -> TimerPreset | None:
        current_id = self.get_current_preset_id()
        if current_id is None:
            return None
        return self.get_preset_by_id(current_id)

    def resolve_configuration(
        self, fallback: TimerConfiguration,
    ) -> TimerConfiguration:
        """Configuration to run with at start-up.

        The current preset wins.  Without one, the first listed preset
        becomes current.  *fallback* is used only when no presets exist.
        """
        current = self.get_current_preset()
        if current is not None:
            return current.configuration

        presets = self.get_all_presets()
        if presets:
            self.set_current_preset(presets[0])
            return presets[0].configuration

        return fallback

    # ── internal ──────────────────────────────────────────────────────

    def _load_custom(self) -> list[TimerPreset]:
        raw = self._prefs.get_string(self.KEY_CUSTOM_PRESETS, "[]")
        try:
            items = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("custom presets are not valid JSON; ignoring them")
            return []
        if not isinstance(items, list):
            return []

        presets: list[TimerPreset] = []
        for item in items:
            preset = _preset_from_json(item)
            if preset is not None and preset.is_valid():
                presets.append(preset)
        return presets

    def _load_deleted(self) -> set[str]:
        raw = self._prefs.get_string(self.KEY_DELETED_DEFAULTS, "[]")
        try:
            items = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("deleted-preset list is not valid JSON; ignoring it")
            return set()
        if not isinstance(items, list):
            return set()
        return {item for item in items if isinstance(item, str)}

    def _write_custom(self, presets: list[TimerPreset]) -> None:
        self._prefs.set_string(
            self.KEY_CUSTOM_PRESETS,
            json.dumps([_preset_to_json(p) for p in presets]),
        )


# ── JSON mapping ──────────────────────────────────────────────────────────


def _preset_to_json(preset: TimerPreset) -> dict[str, Any]:
    return {
        "id": preset.id,
        "name": preset.name,
        "stageOneDuration": preset.configuration.stage_one_duration_seconds,
        "stageTwoDuration": preset.configuration.stage_two_duration_seconds,
        "isDefault": preset.is_default,
    }


def _preset_from_json(data: Any) -> TimerPreset | None:
    if not isinstance(data, dict):
        return None
    try:
        return TimerPreset(
            id=str(data["id"]),
            name=str(data["name"]),
            configuration=TimerConfiguration(
                stage_one_duration_seconds=int(data["stageOneDuration"]),
                stage_two_duration_seconds=int(data["stageTwoDuration"]),
            ),
            is_default=bool(data.get("isDefault", False)),
        )
    except (KeyError, TypeError, ValueError):
        return None
