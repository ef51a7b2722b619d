"""Phase announcements driven by observed timer snapshots.

The engine knows nothing about sound.  A caller feeds every snapshot to
:meth:`StageAnnouncer.observe`, which announces only on stage edges:

STAGE_ONE → STAGE_TWO    ``shoot``
STAGE_TWO → COMPLETED    ``stop``

``preparation`` is announced explicitly by the caller on a fresh start
(a resume is not announced).
"""

from __future__ import annotations

import logging
from typing import Callable

from ..timer.state import TimerStage, TimerState

logger = logging.getLogger(__name__)


ANNOUNCEMENT_TEXT: dict[str, str] = {
    "preparation": "PREPARATION!",
    "shoot": "SHOOT!",
    "stop": "STOP!",
}

_EDGE_CUES: dict[tuple[TimerStage, TimerStage], str] = {
    (TimerStage.STAGE_ONE, TimerStage.STAGE_TWO): "shoot",
    (TimerStage.STAGE_TWO, TimerStage.COMPLETED): "stop",
}


class StageAnnouncer:
    """Turns stage transitions into named cues for *sink*."""

    def __init__(self, sink: Callable[[str], None], *, enabled: bool = True) -> None:
        self._sink = sink
        self._previous: TimerStage | None = None
        self.enabled = enabled

    def observe(self, state: TimerState) -> str | None:
        """Record *state*; return the cue for this edge, if any."""
        previous = self._previous
        self._previous = state.current_stage
        if previous is None:
            return None
        cue = _EDGE_CUES.get((previous, state.current_stage))
        if cue is not None:
            self._announce(cue)
        return cue

    def announce_start(self) -> None:
        self._announce("preparation")

    def reset(self) -> None:
        self._previous = None

    def _announce(self, cue: str) -> None:
        if not self.enabled:
            return
        logger.info("announce %s", ANNOUNCEMENT_TEXT[cue])
        self._sink(cue)
