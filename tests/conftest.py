"""Shared pytest fixtures for TirTimer tests."""

import sys
import pytest

from PyQt6.QtWidgets import QApplication

from tirtimer.database.db import configure_engine, init_db
from tirtimer.preferences import Preferences, TimerPreferences
from tirtimer.presets.store import PresetStore
from tirtimer.timer.engine import TimerEngine
from tirtimer.timer.state import TimerConfiguration

from helpers import ManualTickSource


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    """Keep settings.json out of the real home directory."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("tirtimer.settings.SETTINGS_PATH", path)
    return path


@pytest.fixture
def ticks():
    return ManualTickSource()


@pytest.fixture
def engine(qapp, ticks):
    """Engine with a 5 s preparation and 3 s shooting stage, manual ticks."""
    return TimerEngine(TimerConfiguration(5, 3), tick_source=ticks)


@pytest.fixture
def store():
    return PresetStore()


@pytest.fixture
def prefs():
    return Preferences("test_namespace")


@pytest.fixture
def timer_prefs():
    return TimerPreferences()
