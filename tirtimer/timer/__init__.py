"""Timer package."""

from .engine import TimerEngine
from .state import (
    TimerConfiguration,
    TimerEvent,
    TimerStage,
    TimerState,
    transition,
    DEFAULT_STAGE_ONE_SECONDS,
    DEFAULT_STAGE_TWO_SECONDS,
)
from .ticks import QtTickSource, TickSource, TICK_INTERVAL_MS

__all__ = [
    "TimerEngine",
    "TimerConfiguration",
    "TimerEvent",
    "TimerStage",
    "TimerState",
    "transition",
    "DEFAULT_STAGE_ONE_SECONDS",
    "DEFAULT_STAGE_TWO_SECONDS",
    "QtTickSource",
    "TickSource",
    "TICK_INTERVAL_MS",
]
