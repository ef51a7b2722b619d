"""QSS stylesheet and stage colors for TirTimer."""

from __future__ import annotations

from enum import Enum

from ..timer.state import TimerStage, TimerState


class DisplayPhase(Enum):
    """What the ring shows.  Splits STAGE_ONE into idle vs. running."""

    IDLE = "idle"
    PREPARATION = "preparation"
    SHOOTING = "shooting"
    COMPLETED = "completed"


# ── phase colors (ring gradient pairs) ───────────────────────────────────

PHASE_COLORS: dict[DisplayPhase, tuple[str, str]] = {
    DisplayPhase.IDLE:        ("#9C27B0", "#7B1FA2"),   # purple
    DisplayPhase.PREPARATION: ("#FF8A80", "#FF5252"),   # light red
    DisplayPhase.SHOOTING:    ("#81C784", "#4CAF50"),   # light green
    DisplayPhase.COMPLETED:   ("#9C27B0", "#7B1FA2"),   # purple
}


def display_phase(state: TimerState) -> DisplayPhase:
    """Preparation is only colored once the countdown has begun."""
    if state.current_stage == TimerStage.STAGE_TWO:
        return DisplayPhase.SHOOTING
    if state.current_stage == TimerStage.COMPLETED:
        return DisplayPhase.COMPLETED
    started = (
        state.is_running
        or state.remaining_time_seconds
        < state.configuration.stage_one_duration_seconds
    )
    return DisplayPhase.PREPARATION if started else DisplayPhase.IDLE


# ── palette ───────────────────────────────────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#CE93D8",
    "accent2":      "#BA68C8",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#dangerButton:hover {{
        background-color: {p['danger']};
        color: {p['bg']};
        border-color: {p['danger']};
    }}

    /* ── inputs ──────────────────────────────────── */
    QLineEdit, QSpinBox {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 12px;
        font-size: 13px;
    }}

    QLineEdit:focus, QSpinBox:focus {{
        border-color: {p['accent']};
    }}

    QListWidget {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
    }}

    QListWidget::item:selected {{
        background-color: {p['surface']};
        color: {p['accent']};
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    QLabel#stageInfo {{
        font-size: 13px;
        color: {p['text_muted']};
    }}
    """
