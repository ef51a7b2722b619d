"""Tests for presets: the built-in catalog, custom presets, shadowing,
soft-deletion, the current selection, configuration resolution and
behavior when the database cannot be read or written."""

from __future__ import annotations

import json

import pytest
from sqlalchemy.exc import OperationalError

from tirtimer.database.db import configure_engine
from tirtimer.preferences import Preferences
from tirtimer.presets.models import (
    TimerPreset, default_presets, default_preset_ids,
    DEFAULT_COMPETITION_ID, DEFAULT_PRACTICE_ID, DEFAULT_QUICK_ID,
)
from tirtimer.presets.store import PresetStore
from tirtimer.timer.state import TimerConfiguration


def _raw(key: str, value: str) -> None:
    Preferences(PresetStore.NAMESPACE).set_string(key, value)


# ═══════════════════════════════════════════════════════════════════════
#  MODELS
# ═══════════════════════════════════════════════════════════════════════


class TestPresetModel:
    def test_builtin_catalog(self):
        presets = default_presets()
        assert [p.id for p in presets] == [
            DEFAULT_COMPETITION_ID, DEFAULT_PRACTICE_ID, DEFAULT_QUICK_ID,
        ]
        assert [p.name for p in presets] == ["Competition", "Practice", "Quick Session"]
        assert presets[0].configuration == TimerConfiguration(300, 180)
        assert presets[1].configuration == TimerConfiguration(180, 120)
        assert presets[2].configuration == TimerConfiguration(60, 30)
        assert all(p.is_default for p in presets)

    def test_builtin_ids(self):
        assert default_preset_ids() == {
            DEFAULT_COMPETITION_ID, DEFAULT_PRACTICE_ID, DEFAULT_QUICK_ID,
        }

    def test_timing_description(self):
        assert default_presets()[0].timing_description == "Prep: 5:00, Shoot: 3:00"
        p = TimerPreset("x", TimerConfiguration(65, 30))
        assert p.timing_description == "Prep: 1:05, Shoot: 0:30"

    def test_fresh_ids_are_unique(self):
        a = TimerPreset("a", TimerConfiguration())
        b = TimerPreset("b", TimerConfiguration())
        assert a.id != b.id

    @pytest.mark.parametrize("name, one, two, valid", [
        ("Ok", 1, 1, True),
        ("   ", 60, 30, False),
        ("Ok", 0, 30, False),
        ("Ok", 60, -1, False),
    ])
    def test_is_valid(self, name, one, two, valid):
        assert TimerPreset(name, TimerConfiguration(one, two)).is_valid() is valid


# ═══════════════════════════════════════════════════════════════════════
#  LISTING + SAVING
# ═══════════════════════════════════════════════════════════════════════


class TestPresetListing:
    def test_empty_store_lists_builtins(self, store):
        assert store.get_all_presets() == default_presets()
        assert store.get_custom_presets() == []

    def test_custom_presets_follow_builtins(self, store):
        custom = store.create_preset_from_configuration(
            "Indoor", TimerConfiguration(120, 240),
        )
        assert store.save_preset(custom)
        names = [p.name for p in store.get_all_presets()]
        assert names == ["Competition", "Practice", "Quick Session", "Indoor"]

    def test_create_preset_from_configuration(self, store):
        p = store.create_preset_from_configuration("X", TimerConfiguration(10, 20))
        assert p.name == "X"
        assert p.configuration == TimerConfiguration(10, 20)
        assert p.is_default is False
        assert p.id not in default_preset_ids()
        assert store.get_custom_presets() == []

    def test_save_replaces_by_id(self, store):
        p = store.create_preset_from_configuration("A", TimerConfiguration(10, 20))
        store.save_preset(p)
        edited = TimerPreset("B", TimerConfiguration(30, 40), id=p.id)
        store.save_preset(edited, is_editing=True)
        custom = store.get_custom_presets()
        assert len(custom) == 1
        assert custom[0].name == "B"
        assert custom[0].configuration == TimerConfiguration(30, 40)

    def test_save_invalid_returns_false(self, store):
        bad = TimerPreset("Bad", TimerConfiguration(0, 10))
        assert store.save_preset(bad) is False
        assert store.get_custom_presets() == []

    def test_stored_json_format(self, store):
        p = TimerPreset("A", TimerConfiguration(10, 20), id="abc")
        store.save_preset(p)
        raw = Preferences(PresetStore.NAMESPACE).get_string(
            PresetStore.KEY_CUSTOM_PRESETS,
        )
        assert json.loads(raw) == [{
            "id": "abc",
            "name": "A",
            "stageOneDuration": 10,
            "stageTwoDuration": 20,
            "isDefault": False,
        }]

    def test_get_preset_by_id(self, store):
        assert store.get_preset_by_id(DEFAULT_PRACTICE_ID).name == "Practice"
        assert store.get_preset_by_id("missing") is None


class TestShadowing:
    def test_editing_builtin_shadows_it(self, store):
        edited = TimerPreset(
            "Competition (long)",
            TimerConfiguration(400, 200),
            id=DEFAULT_COMPETITION_ID,
            is_default=True,
        )
        assert store.save_preset(edited, is_editing=True)

        all_presets = store.get_all_presets()
        matching = [p for p in all_presets if p.id == DEFAULT_COMPETITION_ID]
        assert len(matching) == 1
        assert matching[0].name == "Competition (long)"
        assert matching[0].is_default is False
        assert all_presets[-1].id == DEFAULT_COMPETITION_ID

    def test_ids_unique_in_listing(self, store):
        store.save_preset(
            TimerPreset("P", TimerConfiguration(1, 1), id=DEFAULT_PRACTICE_ID),
            is_editing=True,
        )
        ids = [p.id for p in store.get_all_presets()]
        assert len(ids) == len(set(ids))


# ═══════════════════════════════════════════════════════════════════════
#  DELETION
# ═══════════════════════════════════════════════════════════════════════


class TestDeletion:
    def test_delete_custom(self, store):
        p = store.create_preset_from_configuration("A", TimerConfiguration(10, 20))
        store.save_preset(p)
        assert store.delete_preset(p.id)
        assert store.get_custom_presets() == []
        assert store.get_deleted_default_preset_ids() == set()

    def test_delete_builtin_is_soft(self, store):
        assert store.delete_preset(DEFAULT_QUICK_ID)
        assert store.get_deleted_default_preset_ids() == {DEFAULT_QUICK_ID}
        assert DEFAULT_QUICK_ID not in [p.id for p in store.get_all_presets()]

    def test_deleted_builtin_stays_hidden(self, store):
        store.delete_preset(DEFAULT_QUICK_ID)
        assert DEFAULT_QUICK_ID not in [p.id for p in PresetStore().get_all_presets()]

    def test_delete_unknown_id_succeeds(self, store):
        assert store.delete_preset("does-not-exist") is True
        assert store.get_all_presets() == default_presets()

    def test_delete_current_clears_selection(self, store):
        store.set_current_preset(store.get_preset_by_id(DEFAULT_PRACTICE_ID))
        store.delete_preset(DEFAULT_PRACTICE_ID)
        assert store.get_current_preset_id() is None

    def test_delete_other_keeps_selection(self, store):
        store.set_current_preset(store.get_preset_by_id(DEFAULT_PRACTICE_ID))
        store.delete_preset(DEFAULT_QUICK_ID)
        assert store.get_current_preset_id() == DEFAULT_PRACTICE_ID

    def test_restore_default_presets(self, store):
        store.delete_preset(DEFAULT_COMPETITION_ID)
        store.delete_preset(DEFAULT_QUICK_ID)
        store.restore_default_presets()
        assert store.get_deleted_default_preset_ids() == set()
        assert store.get_all_presets() == default_presets()

    def test_delete_all_builtins(self, store):
        for preset_id in default_preset_ids():
            store.delete_preset(preset_id)
        assert store.get_all_presets() == []


# ═══════════════════════════════════════════════════════════════════════
#  NAMES
# ═══════════════════════════════════════════════════════════════════════


class TestNameExists:
    def test_case_insensitive(self, store):
        assert store.is_preset_name_exists("competition")
        assert store.is_preset_name_exists("QUICK SESSION")

    def test_unknown_name(self, store):
        assert not store.is_preset_name_exists("Field")

    def test_exclude_self(self, store):
        assert not store.is_preset_name_exists("Competition", DEFAULT_COMPETITION_ID)
        assert store.is_preset_name_exists("Competition", DEFAULT_PRACTICE_ID)

    def test_deleted_builtin_name_is_free(self, store):
        store.delete_preset(DEFAULT_PRACTICE_ID)
        assert not store.is_preset_name_exists("Practice")


# ═══════════════════════════════════════════════════════════════════════
#  MALFORMED STORAGE
# ═══════════════════════════════════════════════════════════════════════


class TestMalformedStorage:
    def test_custom_not_json(self, store):
        _raw(PresetStore.KEY_CUSTOM_PRESETS, "{not json")
        assert store.get_custom_presets() == []
        assert store.get_all_presets() == default_presets()

    def test_custom_not_a_list(self, store):
        _raw(PresetStore.KEY_CUSTOM_PRESETS, '{"id": "x"}')
        assert store.get_custom_presets() == []

    def test_bad_entries_dropped(self, store):
        _raw(PresetStore.KEY_CUSTOM_PRESETS, json.dumps([
            {"id": "ok", "name": "Ok", "stageOneDuration": 10, "stageTwoDuration": 5},
            {"id": "missing-fields"},
            {"id": "zero", "name": "Zero", "stageOneDuration": 0, "stageTwoDuration": 5},
            {"id": "text", "name": "T", "stageOneDuration": "ten", "stageTwoDuration": 5},
            "not a dict",
        ]))
        custom = store.get_custom_presets()
        assert [p.id for p in custom] == ["ok"]
        assert custom[0].is_default is False

    def test_deleted_list_not_json(self, store):
        _raw(PresetStore.KEY_DELETED_DEFAULTS, "garbage")
        assert store.get_deleted_default_preset_ids() == set()
        assert store.get_all_presets() == default_presets()

    def test_deleting_repairs_bad_list(self, store):
        _raw(PresetStore.KEY_DELETED_DEFAULTS, "garbage")
        assert store.delete_preset(DEFAULT_QUICK_ID)
        assert store.get_deleted_default_preset_ids() == {DEFAULT_QUICK_ID}


# ═══════════════════════════════════════════════════════════════════════
#  STORAGE ERRORS
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def no_tables():
    """An in-memory database without the preferences table."""
    configure_engine("sqlite:///:memory:")


def _fail_writes_to(monkeypatch, failing_key):
    """Make ``Preferences.set_string`` raise for *failing_key* only."""
    original = Preferences.set_string

    def set_string(self, key, value):
        if key == failing_key:
            raise OperationalError("UPDATE preferences", {}, Exception("disk I/O error"))
        return original(self, key, value)

    monkeypatch.setattr(Preferences, "set_string", set_string)


class TestUnreadableDatabase:
    def test_reads_fall_back_to_builtins(self, no_tables, store):
        assert store.get_custom_presets() == []
        assert store.get_deleted_default_preset_ids() == set()
        assert store.get_all_presets() == default_presets()

    def test_no_current_preset(self, no_tables, store):
        assert store.get_current_preset_id() is None
        assert store.get_current_preset() is None

    def test_pointer_write_reports_failure(self, no_tables, store):
        assert store.set_current_preset(default_presets()[0]) is False
        assert store.set_current_preset(None) is False

    def test_restore_reports_failure(self, no_tables, store):
        assert store.restore_default_presets() is False

    def test_resolve_uses_first_builtin(self, no_tables, store):
        config = store.resolve_configuration(TimerConfiguration(111, 22))
        assert config == TimerConfiguration(300, 180)

    def test_mutations_return_false(self, no_tables, store):
        custom = TimerPreset("Indoor", TimerConfiguration(120, 240))
        assert store.save_preset(custom) is False
        assert store.delete_preset(DEFAULT_QUICK_ID) is False
        assert store.delete_preset("custom-id") is False


class TestFailedWrites:
    def test_failed_save_keeps_existing(self, store, monkeypatch):
        kept = TimerPreset("Kept", TimerConfiguration(10, 20), id="kept")
        assert store.save_preset(kept)

        _fail_writes_to(monkeypatch, PresetStore.KEY_CUSTOM_PRESETS)
        new = TimerPreset("New", TimerConfiguration(30, 40), id="new")
        assert store.save_preset(new) is False
        assert store.get_custom_presets() == [kept]

    def test_failed_custom_delete_keeps_preset(self, store, monkeypatch):
        kept = TimerPreset("Kept", TimerConfiguration(10, 20), id="kept")
        store.save_preset(kept)

        _fail_writes_to(monkeypatch, PresetStore.KEY_CUSTOM_PRESETS)
        assert store.delete_preset("kept") is False
        assert store.get_custom_presets() == [kept]

    def test_failed_pointer_clear_rolls_back_delete(self, store, monkeypatch):
        competition = store.get_preset_by_id(DEFAULT_COMPETITION_ID)
        store.set_current_preset(competition)

        _fail_writes_to(monkeypatch, PresetStore.KEY_CURRENT_PRESET_ID)
        assert store.delete_preset(DEFAULT_COMPETITION_ID) is False

        assert store.get_deleted_default_preset_ids() == set()
        assert store.get_current_preset_id() == DEFAULT_COMPETITION_ID
        assert store.get_all_presets() == default_presets()

    def test_failed_pointer_write(self, store, monkeypatch):
        _fail_writes_to(monkeypatch, PresetStore.KEY_CURRENT_PRESET_ID)
        assert store.set_current_preset(default_presets()[1]) is False
        assert store.get_current_preset_id() is None

    def test_preset_without_a_name(self, store):
        nameless = TimerPreset(name=None, configuration=TimerConfiguration())
        assert store.save_preset(nameless) is False
        assert store.get_custom_presets() == []


# ═══════════════════════════════════════════════════════════════════════
#  CURRENT SELECTION
# ═══════════════════════════════════════════════════════════════════════


class TestCurrentPreset:
    def test_none_by_default(self, store):
        assert store.get_current_preset_id() is None
        assert store.get_current_preset() is None

    def test_set_and_get(self, store):
        practice = store.get_preset_by_id(DEFAULT_PRACTICE_ID)
        store.set_current_preset(practice)
        assert store.get_current_preset_id() == DEFAULT_PRACTICE_ID
        assert store.get_current_preset() == practice

    def test_clear(self, store):
        store.set_current_preset(store.get_all_presets()[0])
        store.set_current_preset(None)
        assert store.get_current_preset_id() is None

    def test_dangling_pointer(self, store):
        _raw(PresetStore.KEY_CURRENT_PRESET_ID, "gone")
        assert store.get_current_preset() is None


class TestResolveConfiguration:
    FALLBACK = TimerConfiguration(111, 22)

    def test_current_preset_wins(self, store):
        store.set_current_preset(store.get_preset_by_id(DEFAULT_QUICK_ID))
        assert store.resolve_configuration(self.FALLBACK) == TimerConfiguration(60, 30)

    def test_first_preset_becomes_current(self, store):
        config = store.resolve_configuration(self.FALLBACK)
        assert config == TimerConfiguration(300, 180)
        assert store.get_current_preset_id() == DEFAULT_COMPETITION_ID

    def test_fallback_when_no_presets(self, store):
        for preset_id in default_preset_ids():
            store.delete_preset(preset_id)
        assert store.resolve_configuration(self.FALLBACK) == self.FALLBACK
        assert store.get_current_preset_id() is None

    def test_dangling_pointer_resolves_to_first(self, store):
        _raw(PresetStore.KEY_CURRENT_PRESET_ID, "gone")
        store.delete_preset(DEFAULT_COMPETITION_ID)
        assert store.resolve_configuration(self.FALLBACK) == TimerConfiguration(180, 120)
        assert store.get_current_preset_id() == DEFAULT_PRACTICE_ID
