"""Tests for the timer data model and the pure transition function."""

from __future__ import annotations

import pytest

from tirtimer.timer.state import (
    TimerConfiguration, TimerEvent, TimerStage, TimerState, transition,
    DEFAULT_STAGE_ONE_SECONDS, DEFAULT_STAGE_TWO_SECONDS,
)


CONFIG = TimerConfiguration(5, 3)


# ═══════════════════════════════════════════════════════════════════════
#  CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════


class TestConfiguration:
    def test_defaults(self):
        c = TimerConfiguration()
        assert c.stage_one_duration_seconds == DEFAULT_STAGE_ONE_SECONDS == 300
        assert c.stage_two_duration_seconds == DEFAULT_STAGE_TWO_SECONDS == 180

    def test_total_duration(self):
        assert TimerConfiguration(300, 180).total_duration == 480

    def test_valid(self):
        assert TimerConfiguration(1, 1).is_valid()

    @pytest.mark.parametrize("one, two", [(0, 10), (10, 0), (-5, 10), (10, -1)])
    def test_invalid(self, one, two):
        assert not TimerConfiguration(one, two).is_valid()

    def test_equality_by_value(self):
        assert TimerConfiguration(60, 30) == TimerConfiguration(60, 30)


# ═══════════════════════════════════════════════════════════════════════
#  STATE PROPERTIES
# ═══════════════════════════════════════════════════════════════════════


class TestStateProperties:
    def test_initial(self):
        s = TimerState.initial(CONFIG)
        assert s.current_stage == TimerStage.STAGE_ONE
        assert s.remaining_time_seconds == 5
        assert s.is_running is False
        assert s.configuration == CONFIG

    def test_initial_clamps_negative_duration(self):
        s = TimerState.initial(TimerConfiguration(-10, 3))
        assert s.remaining_time_seconds == 0

    @pytest.mark.parametrize("seconds, text", [
        (0, "00:00"), (5, "00:05"), (65, "01:05"), (300, "05:00"), (6000, "100:00"),
    ])
    def test_formatted_time(self, seconds, text):
        s = TimerState(remaining_time_seconds=seconds, configuration=CONFIG)
        assert s.formatted_time == text

    def test_progress_at_start_is_zero(self):
        assert TimerState.initial(CONFIG).current_stage_progress == 0.0

    def test_progress_midway(self):
        s = TimerState(
            current_stage=TimerStage.STAGE_TWO,
            remaining_time_seconds=1,
            configuration=TimerConfiguration(10, 4),
        )
        assert s.current_stage_progress == pytest.approx(0.75)

    def test_progress_completed_is_one(self):
        s = TimerState(current_stage=TimerStage.COMPLETED, configuration=CONFIG)
        assert s.current_stage_progress == 1.0

    def test_progress_zero_duration_is_one(self):
        s = TimerState.initial(TimerConfiguration(0, 3))
        assert s.current_stage_progress == 1.0

    def test_is_fresh(self):
        assert TimerState.initial(CONFIG).is_fresh

    def test_not_fresh_when_running(self):
        assert not TimerState.initial(CONFIG, running=True).is_fresh

    def test_not_fresh_after_a_tick(self):
        s = transition(TimerState.initial(CONFIG, running=True), TimerEvent.TICK, 4)
        s = transition(s, TimerEvent.PAUSE)
        assert not s.is_fresh

    def test_stage_labels(self):
        assert TimerStage.STAGE_ONE.label == "Preparation"
        assert TimerStage.STAGE_TWO.label == "Shooting"
        assert TimerStage.COMPLETED.label == "Completed!"

    def test_frozen(self):
        s = TimerState.initial(CONFIG)
        with pytest.raises(AttributeError):
            s.is_running = True  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════
#  TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════


def _state(stage, remaining, running):
    return TimerState(
        current_stage=stage,
        remaining_time_seconds=remaining,
        is_running=running,
        configuration=CONFIG,
    )


ALL_STATES = [
    _state(TimerStage.STAGE_ONE, 5, False),
    _state(TimerStage.STAGE_ONE, 2, True),
    _state(TimerStage.STAGE_TWO, 1, True),
    _state(TimerStage.STAGE_TWO, 3, False),
    _state(TimerStage.COMPLETED, 0, False),
]


class TestTransitions:
    @pytest.mark.parametrize("before", ALL_STATES)
    def test_start_from_any(self, before):
        after = transition(before, TimerEvent.START)
        assert after == _state(TimerStage.STAGE_ONE, 5, True)

    @pytest.mark.parametrize("before", ALL_STATES)
    def test_stop_from_any(self, before):
        after = transition(before, TimerEvent.STOP)
        assert after == TimerState.initial(CONFIG)

    def test_pause_keeps_stage_and_remaining(self):
        before = _state(TimerStage.STAGE_TWO, 2, True)
        after = transition(before, TimerEvent.PAUSE)
        assert after == _state(TimerStage.STAGE_TWO, 2, False)

    def test_resume_paused(self):
        before = _state(TimerStage.STAGE_TWO, 2, False)
        assert transition(before, TimerEvent.RESUME).is_running

    def test_resume_while_running_is_identity(self):
        before = _state(TimerStage.STAGE_ONE, 2, True)
        assert transition(before, TimerEvent.RESUME) is before

    def test_resume_completed_is_identity(self):
        before = _state(TimerStage.COMPLETED, 0, False)
        assert transition(before, TimerEvent.RESUME) is before

    def test_tick_sets_remaining(self):
        before = _state(TimerStage.STAGE_ONE, 5, True)
        assert transition(before, TimerEvent.TICK, 4).remaining_time_seconds == 4

    def test_tick_never_increases(self):
        before = _state(TimerStage.STAGE_ONE, 3, True)
        assert transition(before, TimerEvent.TICK, 4).remaining_time_seconds == 3

    def test_tick_clamps_at_zero(self):
        before = _state(TimerStage.STAGE_ONE, 1, True)
        assert transition(before, TimerEvent.TICK, -2).remaining_time_seconds == 0

    def test_tick_requires_remaining(self):
        with pytest.raises(ValueError):
            transition(ALL_STATES[1], TimerEvent.TICK)

    def test_expire_stage_one(self):
        before = _state(TimerStage.STAGE_ONE, 0, True)
        after = transition(before, TimerEvent.EXPIRE)
        assert after == _state(TimerStage.STAGE_TWO, 3, True)

    def test_expire_stage_two(self):
        before = _state(TimerStage.STAGE_TWO, 0, True)
        after = transition(before, TimerEvent.EXPIRE)
        assert after == _state(TimerStage.COMPLETED, 0, False)

    def test_expire_completed_is_noop(self):
        before = _state(TimerStage.COMPLETED, 0, False)
        assert transition(before, TimerEvent.EXPIRE) == before

    def test_expire_into_negative_stage_two_clamps(self):
        before = TimerState.initial(TimerConfiguration(5, -3), running=True)
        after = transition(before, TimerEvent.EXPIRE)
        assert after.remaining_time_seconds == 0

    def test_unknown_event(self):
        with pytest.raises(ValueError):
            transition(ALL_STATES[0], "bogus")  # type: ignore[arg-type]

    def test_configuration_carried_through(self):
        s = TimerState.initial(CONFIG)
        for event in (TimerEvent.START, TimerEvent.PAUSE, TimerEvent.RESUME,
                      TimerEvent.EXPIRE, TimerEvent.EXPIRE, TimerEvent.STOP):
            s = transition(s, event)
            assert s.configuration is CONFIG
