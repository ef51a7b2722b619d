"""Main timer display widget.

Layout (top → bottom):
    - ProgressRing (large, centred) with time and stage label
    - Stage info line ("Preparation: 5:00 · Shooting: 3:00")
    - Stop + Start/Pause/Resume/Reset buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QSizePolicy,
)

from ..audio.announcer import StageAnnouncer
from ..timer.engine import TimerEngine
from ..timer.state import TimerConfiguration, TimerStage, TimerState
from .progress_ring import ProgressRing
from .styles import display_phase


def _fmt_duration(seconds: int) -> str:
    m, s = divmod(max(0, seconds), 60)
    return f"{m}:{s:02d}"


def primary_action_label(state: TimerState) -> str:
    """Text for the start/pause button in *state*."""
    if state.current_stage == TimerStage.COMPLETED:
        return "Reset"
    if state.is_running:
        return "Pause"
    return "Start" if state.is_fresh else "Resume"


class TimerWidget(QWidget):
    """The main timer card."""

    def __init__(
        self,
        engine: TimerEngine,
        announcer: StageAnnouncer | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._announcer = announcer
        self._build_ui()
        self._connect_signals()
        self.refresh(engine.current_state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(28, 24, 28, 28)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── progress ring (centrepiece) ──────────────────────────────
        ring_container = QHBoxLayout()
        ring_container.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(320, 320)
        ring_container.addWidget(self._ring)
        layout.addLayout(ring_container)

        layout.addSpacing(8)

        # ── configured durations ─────────────────────────────────────
        self._stage_info = QLabel(card)
        self._stage_info.setObjectName("stageInfo")
        self._stage_info.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._stage_info)

        layout.addSpacing(16)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stop_btn = QPushButton("Stop", card)
        self._stop_btn.setObjectName("dangerButton")

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        btn_row.addWidget(self._stop_btn)
        btn_row.addWidget(self._start_pause_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle)
        self._stop_btn.clicked.connect(self._engine.stop)
        self._engine.state_updated.connect(self.refresh)

    # ── actions ───────────────────────────────────────────────────────────

    def toggle(self) -> None:
        """Primary button: reset, start, pause or resume."""
        state = self._engine.current_state
        if state.current_stage == TimerStage.COMPLETED:
            self._engine.stop()
        elif state.is_fresh:
            self._engine.start()
            if self._announcer is not None:
                self._announcer.announce_start()
        elif state.is_running:
            self._engine.pause()
        else:
            self._engine.resume()

    # ── display ───────────────────────────────────────────────────────────

    def refresh(self, state: TimerState) -> None:
        self._ring.set_time_text(state.formatted_time)
        self._ring.set_stage_label(state.current_stage.label)
        self._ring.set_percent(state.current_stage_progress)
        self._ring.apply_phase(display_phase(state), state.is_running)

        self._start_pause_btn.setText(primary_action_label(state))
        self._stop_btn.setEnabled(not state.is_fresh)
        self._set_stage_info(state.configuration)

    def _set_stage_info(self, config: TimerConfiguration) -> None:
        self._stage_info.setText(
            f"Preparation: {_fmt_duration(config.stage_one_duration_seconds)}"
            f"   ·   "
            f"Shooting: {_fmt_duration(config.stage_two_duration_seconds)}"
        )
