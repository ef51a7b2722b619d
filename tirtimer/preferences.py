"""Key-value preferences stored in the SQLite database.

Each store works inside its own *namespace*, so unrelated stores can use
the same key names::

    prefs = Preferences("timer_preferences")
    prefs.set_int("stage_one_duration_seconds", 240)
    prefs.get_int("stage_one_duration_seconds", 300)   # → 240

Several writes can share one transaction::

    with prefs.edit():
        prefs.set_string("a", "1")
        prefs.set_string("b", "2")
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session as OrmSession

from .database.db import get_session
from .database.models import Preference
from .timer.state import (
    DEFAULT_STAGE_ONE_SECONDS,
    DEFAULT_STAGE_TWO_SECONDS,
    TimerConfiguration,
)

logger = logging.getLogger(__name__)


class Preferences:
    """String/int values by key within one namespace."""

    def __init__(self, namespace: str) -> None:
        self._namespace = namespace
        self._batch: OrmSession | None = None

    @property
    def namespace(self) -> str:
        return self._namespace

    # ── reads ─────────────────────────────────────────────────────────

    def get_string(self, key: str, default: str | None = None) -> str | None:
        with self._session() as db:
            row = self._find(db, key)
            return row.value if row is not None else default

    def get_int(self, key: str, default: int) -> int:
        raw = self.get_string(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning(
                "%s/%s holds %r, not an integer; using %d",
                self._namespace, key, raw, default,
            )
            return default

    def contains(self, key: str) -> bool:
        with self._session() as db:
            return self._find(db, key) is not None

    # ── writes ────────────────────────────────────────────────────────

    def set_string(self, key: str, value: str | None) -> None:
        """Store *value*; ``None`` removes the key."""
        with self._session() as db:
            row = self._find(db, key)
            if value is None:
                if row is not None:
                    db.delete(row)
            elif row is not None:
                row.value = value
            else:
                db.add(Preference(namespace=self._namespace, key=key, value=value))

    def set_int(self, key: str, value: int) -> None:
        self.set_string(key, str(int(value)))

    def remove(self, key: str) -> None:
        self.set_string(key, None)

    @contextmanager
    def edit(self) -> Iterator[Preferences]:
        """Group writes into one transaction (all or nothing)."""
        if self._batch is not None:
            yield self
            return
        with get_session() as db:
            self._batch = db
            try:
                yield self
            finally:
                self._batch = None

    # ── internal ──────────────────────────────────────────────────────

    @contextmanager
    def _session(self) -> Iterator[OrmSession]:
        if self._batch is not None:
            yield self._batch
        else:
            with get_session() as db:
                yield db

    def _find(self, db: OrmSession, key: str) -> Preference | None:
        return (
            db.query(Preference)
            .filter_by(namespace=self._namespace, key=key)
            .one_or_none()
        )


class TimerPreferences:
    """The stage durations used when no preset is selected."""

    NAMESPACE = "timer_preferences"
    KEY_STAGE_ONE_DURATION = "stage_one_duration_seconds"
    KEY_STAGE_TWO_DURATION = "stage_two_duration_seconds"

    def __init__(self, preferences: Preferences | None = None) -> None:
        self._prefs = preferences or Preferences(self.NAMESPACE)

    def get_timer_configuration(self) -> TimerConfiguration:
        return TimerConfiguration(
            stage_one_duration_seconds=self._prefs.get_int(
                self.KEY_STAGE_ONE_DURATION, DEFAULT_STAGE_ONE_SECONDS,
            ),
            stage_two_duration_seconds=self._prefs.get_int(
                self.KEY_STAGE_TWO_DURATION, DEFAULT_STAGE_TWO_SECONDS,
            ),
        )

    def save_timer_configuration(self, configuration: TimerConfiguration) -> None:
        with self._prefs.edit():
            self._prefs.set_int(
                self.KEY_STAGE_ONE_DURATION,
                configuration.stage_one_duration_seconds,
            )
            self._prefs.set_int(
                self.KEY_STAGE_TWO_DURATION,
                configuration.stage_two_duration_seconds,
            )

    def reset_to_defaults(self) -> None:
        self.save_timer_configuration(TimerConfiguration())

    def has_custom_configuration(self) -> bool:
        return self.get_timer_configuration() != TimerConfiguration()
