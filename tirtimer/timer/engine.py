"""Two-stage countdown engine.

The engine holds exactly one current :class:`TimerState` and replaces it
wholesale on every change.  All stage logic goes through
:func:`~tirtimer.timer.state.transition`; the engine only adds the side
effects: emitting snapshots, scheduling the countdown for the current
stage, and firing completion once stage two runs out.

At most one countdown is live at a time.  Starting a stage countdown
cancels the previous one first, and a cancelled countdown ignores any
tick that still reaches it.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from .state import (
    TimerConfiguration,
    TimerEvent,
    TimerStage,
    TimerState,
    transition,
)
from .ticks import QtTickSource, TickSource


logger = logging.getLogger(__name__)


class _Countdown:
    """Millisecond budget for one stage."""

    __slots__ = ("stage", "ms_left", "cancelled")

    def __init__(self, stage: TimerStage, duration_seconds: int) -> None:
        self.stage = stage
        self.ms_left = duration_seconds * 1000
        self.cancelled = False

    @property
    def expired(self) -> bool:
        return self.ms_left <= 0

    @property
    def remaining_seconds(self) -> int:
        """Whole seconds left, never negative."""
        return max(0, self.ms_left // 1000)

    def advance(self, elapsed_ms: int) -> None:
        self.ms_left -= max(0, elapsed_ms)


class TimerEngine(QObject):
    """Preparation → shooting countdown with pause/resume.

    Signals
    -------
    state_updated(state: TimerState)
        Emitted on every tick and on every state change.
    completed()
        Emitted once when stage two runs out.

    ``on_update`` and ``on_complete`` are connected to these signals, so
    they run synchronously in whichever context drives the engine.
    """

    state_updated = pyqtSignal(object)
    completed = pyqtSignal()

    def __init__(
        self,
        configuration: TimerConfiguration,
        on_update: Callable[[TimerState], None] | None = None,
        on_complete: Callable[[], None] | None = None,
        parent: QObject | None = None,
        *,
        tick_source: TickSource | None = None,
    ) -> None:
        super().__init__(parent)
        self._configuration = configuration
        self._state = TimerState.initial(configuration)
        self._countdown: _Countdown | None = None
        self._ticks: TickSource = (
            tick_source if tick_source is not None else QtTickSource(self)
        )

        if on_update is not None:
            self.state_updated.connect(on_update)
        if on_complete is not None:
            self.completed.connect(on_complete)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def configuration(self) -> TimerConfiguration:
        return self._configuration

    @property
    def current_state(self) -> TimerState:
        return self._state

    def get_current_state(self) -> TimerState:
        return self._state

    @property
    def has_active_countdown(self) -> bool:
        return self._countdown is not None and not self._countdown.cancelled

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Restart from the beginning of stage one and run."""
        logger.debug("start: %s", self._configuration)
        self._cancel_countdown()
        self._apply(TimerEvent.START)
        self._start_countdown(
            TimerStage.STAGE_ONE, self._configuration.stage_one_duration_seconds,
        )

    def pause(self) -> None:
        """Freeze the countdown, keeping the remaining time."""
        logger.debug("pause at %ss", self._state.remaining_time_seconds)
        self._cancel_countdown()
        self._apply(TimerEvent.PAUSE)

    def resume(self) -> None:
        """Continue a paused countdown.  No-op while running or completed."""
        before = self._state
        after = transition(before, TimerEvent.RESUME)
        if after is before:
            return
        logger.debug("resume at %ss", after.remaining_time_seconds)
        self._set_state(after)
        self._start_countdown(after.current_stage, after.remaining_time_seconds)

    def stop(self) -> None:
        """Cancel and reset to the unstarted stage-one state."""
        logger.debug("stop")
        self._cancel_countdown()
        self._apply(TimerEvent.STOP)

    def update_configuration(self, configuration: TimerConfiguration) -> None:
        """Swap durations and reset (does not restart)."""
        logger.info(
            "configuration changed: %ss / %ss",
            configuration.stage_one_duration_seconds,
            configuration.stage_two_duration_seconds,
        )
        self._configuration = configuration
        self._cancel_countdown()
        self._set_state(TimerState.initial(configuration))

    def cleanup(self) -> None:
        """Release the countdown.  Safe to call any number of times."""
        self._cancel_countdown()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: countdown mechanics
    # ══════════════════════════════════════════════════════════════════

    def _start_countdown(self, stage: TimerStage, duration_seconds: int) -> None:
        self._cancel_countdown()
        countdown = _Countdown(stage, duration_seconds)
        self._countdown = countdown
        self._ticks.start(lambda elapsed: self._on_tick(countdown, elapsed))

    def _cancel_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancelled = True
            self._countdown = None
        self._ticks.cancel()

    def _on_tick(self, countdown: _Countdown, elapsed_ms: int) -> None:
        if countdown.cancelled or countdown is not self._countdown:
            return

        countdown.advance(elapsed_ms)
        self._apply(TimerEvent.TICK, countdown.remaining_seconds)

        # An update handler may have paused, stopped or restarted us.
        if countdown.cancelled:
            return

        if countdown.expired:
            self._finish_stage()

    def _finish_stage(self) -> None:
        self._cancel_countdown()

        if self._state.current_stage == TimerStage.COMPLETED:
            logger.warning("countdown expired in completed stage; ignored")
            return

        expired = transition(self._state, TimerEvent.EXPIRE)
        self._set_state(expired)

        if expired.current_stage == TimerStage.STAGE_TWO:
            if self._state is not expired:
                logger.debug("stage two not started; state changed on update")
                return
            logger.info("preparation over, shooting started")
            self._start_countdown(
                TimerStage.STAGE_TWO,
                self._configuration.stage_two_duration_seconds,
            )
        elif expired.current_stage == TimerStage.COMPLETED:
            logger.info("shooting over, timer completed")
            self.completed.emit()

    def _apply(self, event: TimerEvent, remaining: int | None = None) -> None:
        self._set_state(transition(self._state, event, remaining))

    def _set_state(self, state: TimerState) -> None:
        self._state = state
        self.state_updated.emit(state)
