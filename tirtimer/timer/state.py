"""Timer data model and the pure transition function.

Stages
------
STAGE_ONE    Preparation countdown.
STAGE_TWO    Shooting countdown.
COMPLETED    Terminal; no further countdown.

Transitions
-----------
any       → STAGE_ONE (running)      (start)
any       → same stage, paused       (pause)
paused    → same stage, running      (resume; not from COMPLETED)
any       → STAGE_ONE (not running)  (stop)
STAGE_ONE → STAGE_TWO (running)      (stage one countdown expires)
STAGE_TWO → COMPLETED                (stage two countdown expires)

``transition`` only computes the next snapshot.  Scheduling and
callbacks belong to :class:`~tirtimer.timer.engine.TimerEngine`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


DEFAULT_STAGE_ONE_SECONDS = 300
DEFAULT_STAGE_TWO_SECONDS = 180


class TimerStage(Enum):
    STAGE_ONE = "stage_one"
    STAGE_TWO = "stage_two"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


_STAGE_LABELS: dict[TimerStage, str] = {
    TimerStage.STAGE_ONE: "Preparation",
    TimerStage.STAGE_TWO: "Shooting",
    TimerStage.COMPLETED: "Completed!",
}


class TimerEvent(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"
    TICK = "tick"
    EXPIRE = "expire"


@dataclass(frozen=True)
class TimerConfiguration:
    """Durations of the two stages, in seconds."""

    stage_one_duration_seconds: int = DEFAULT_STAGE_ONE_SECONDS
    stage_two_duration_seconds: int = DEFAULT_STAGE_TWO_SECONDS

    @property
    def total_duration(self) -> int:
        return self.stage_one_duration_seconds + self.stage_two_duration_seconds

    def is_valid(self) -> bool:
        """Both stages must last at least one second."""
        return (
            self.stage_one_duration_seconds > 0
            and self.stage_two_duration_seconds > 0
        )

    def duration_for(self, stage: TimerStage) -> int:
        if stage == TimerStage.STAGE_ONE:
            return self.stage_one_duration_seconds
        if stage == TimerStage.STAGE_TWO:
            return self.stage_two_duration_seconds
        return 1


@dataclass(frozen=True)
class TimerState:
    """Immutable snapshot of the timer."""

    current_stage: TimerStage = TimerStage.STAGE_ONE
    remaining_time_seconds: int = 0
    is_running: bool = False
    configuration: TimerConfiguration = TimerConfiguration()

    @classmethod
    def initial(
        cls, configuration: TimerConfiguration, *, running: bool = False,
    ) -> TimerState:
        """Stage one, full duration."""
        return cls(
            current_stage=TimerStage.STAGE_ONE,
            remaining_time_seconds=max(0, configuration.stage_one_duration_seconds),
            is_running=running,
            configuration=configuration,
        )

    @property
    def formatted_time(self) -> str:
        minutes, seconds = divmod(self.remaining_time_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def stage_duration(self) -> int:
        return self.configuration.duration_for(self.current_stage)

    @property
    def current_stage_progress(self) -> float:
        """0.0 → 1.0 through the current stage; 1.0 once completed."""
        total = self.stage_duration
        if total <= 0:
            return 1.0
        return 1.0 - self.remaining_time_seconds / total

    @property
    def is_fresh(self) -> bool:
        """True before the first start (or right after a stop)."""
        return (
            self.current_stage == TimerStage.STAGE_ONE
            and not self.is_running
            and self.remaining_time_seconds
            == max(0, self.configuration.stage_one_duration_seconds)
        )


def transition(
    state: TimerState, event: TimerEvent, remaining: int | None = None,
) -> TimerState:
    """Return the snapshot that follows *state* after *event*.

    *remaining* is only read for ``TimerEvent.TICK``.
    """
    config = state.configuration

    if event == TimerEvent.START:
        return TimerState.initial(config, running=True)

    if event == TimerEvent.STOP:
        return TimerState.initial(config)

    if event == TimerEvent.PAUSE:
        return replace(state, is_running=False)

    if event == TimerEvent.RESUME:
        if state.is_running or state.current_stage == TimerStage.COMPLETED:
            return state
        return replace(state, is_running=True)

    if event == TimerEvent.TICK:
        if remaining is None:
            raise ValueError("TICK needs a remaining value")
        return replace(
            state,
            remaining_time_seconds=max(
                0, min(state.remaining_time_seconds, remaining),
            ),
        )

    if event == TimerEvent.EXPIRE:
        if state.current_stage == TimerStage.STAGE_ONE:
            return replace(
                state,
                current_stage=TimerStage.STAGE_TWO,
                remaining_time_seconds=max(0, config.stage_two_duration_seconds),
                is_running=True,
            )
        if state.current_stage == TimerStage.STAGE_TWO:
            return replace(
                state,
                current_stage=TimerStage.COMPLETED,
                remaining_time_seconds=0,
                is_running=False,
            )
        return state

    raise ValueError(f"Unknown timer event: {event!r}")
