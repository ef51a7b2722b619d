"""Circular progress ring widget rendered with QPainter.

- Fills clockwise as the current stage progresses.
- Colour-coded by display phase (preparation=red, shooting=green).
- Shows MM:SS in bold text at the centre plus the stage label.
- Smooth animated transitions between phases.
"""

from __future__ import annotations

import math

from PyQt6.QtCore import Qt, QRectF, QTimer, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QConicalGradient, QFont
from PyQt6.QtWidgets import QWidget

from .styles import DisplayPhase, PHASE_COLORS


def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


class ProgressRing(QWidget):
    """Custom-painted circular timer ring."""

    RING_DIAMETER = 280
    RING_THICKNESS = 16
    GLOW_EXTRA = 6

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        # ── state ──────────────────────────────────────────────────────
        self._percent: float = 0.0
        self._display_percent: float = 0.0
        self._time_text: str = "00:00"
        self._stage_label: str = ""
        self._phase: DisplayPhase = DisplayPhase.IDLE

        primary, secondary = PHASE_COLORS[DisplayPhase.IDLE]
        self._primary_color = QColor(primary)
        self._secondary_color = QColor(secondary)
        self._old_primary = QColor(primary)
        self._old_secondary = QColor(secondary)
        self._target_primary = QColor(primary)
        self._target_secondary = QColor(secondary)

        self._text_color = QColor("#E2E2F0")

        # ── arc transition animation ───────────────────────────────────
        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.setDuration(200)
        self._arc_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

        # ── color transition animation ─────────────────────────────────
        self._color_anim = QVariantAnimation(self)
        self._color_anim.setDuration(400)
        self._color_anim.setStartValue(0.0)
        self._color_anim.setEndValue(1.0)
        self._color_anim.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._color_anim.valueChanged.connect(self._on_color_anim)

        # ── active glow pulse ──────────────────────────────────────────
        self._glow_phase: float = 0.0
        self._glow_timer = QTimer(self)
        self._glow_timer.setInterval(33)
        self._glow_timer.timeout.connect(self._on_glow_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> DisplayPhase:
        return self._phase

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def stage_label(self) -> str:
        return self._stage_label

    def set_percent(self, pct: float) -> None:
        """Update the arc fill (0..1).  Skips the animation for tiny steps."""
        pct = max(0.0, min(1.0, pct))
        if abs(pct - self._percent) < 0.002:
            return
        self._percent = pct
        self._arc_anim.stop()
        self._arc_anim.setStartValue(self._display_percent)
        self._arc_anim.setEndValue(pct)
        self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        if text != self._time_text:
            self._time_text = text
            self.update()

    def set_stage_label(self, text: str) -> None:
        self._stage_label = text
        self.update()

    def apply_phase(self, phase: DisplayPhase, running: bool) -> None:
        """Update colors (animated) and the glow for *phase*."""
        if phase != self._phase:
            self._phase = phase
            primary_hex, secondary_hex = PHASE_COLORS[phase]
            self._old_primary = QColor(self._primary_color)
            self._old_secondary = QColor(self._secondary_color)
            self._target_primary = QColor(primary_hex)
            self._target_secondary = QColor(secondary_hex)
            self._color_anim.stop()
            self._color_anim.start()

        if running and not self._glow_timer.isActive():
            self._glow_timer.start()
        elif not running:
            self._glow_timer.stop()
            self._glow_phase = 0.0
            self.update()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_arc_anim(self, value: object) -> None:
        self._display_percent = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_color_anim(self, value: object) -> None:
        t = float(value)  # type: ignore[arg-type]
        self._primary_color = _lerp_color(self._old_primary, self._target_primary, t)
        self._secondary_color = _lerp_color(self._old_secondary, self._target_secondary, t)
        self.update()

    def _on_glow_tick(self) -> None:
        self._glow_phase += 0.06
        if self._glow_phase > 2 * math.pi:
            self._glow_phase -= 2 * math.pi
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        cx, cy = w / 2, h / 2
        diameter = max(100, min(w, h) - 40)
        radius = diameter / 2
        thickness = self.RING_THICKNESS

        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── background track ─────────────────────────────────────────
        track_color = QColor(self._primary_color)
        track_color.setAlpha(35)
        track_pen = QPen(track_color, thickness, Qt.PenStyle.SolidLine)
        track_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── active arc ───────────────────────────────────────────────
        pct = self._display_percent
        if pct > 0.001:
            gradient = QConicalGradient(cx, cy, 90)
            gradient.setColorAt(0.0, self._primary_color)
            gradient.setColorAt(0.5, self._secondary_color)
            gradient.setColorAt(1.0, self._primary_color)

            arc_pen = QPen(gradient, thickness, Qt.PenStyle.SolidLine)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)

            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            start_angle = 90 * 16
            span_angle = -int(pct * 360 * 16)
            painter.drawArc(ring_rect, start_angle, span_angle)

            if self._glow_timer.isActive():
                glow_color = QColor(self._primary_color)
                glow_color.setAlpha(int(20 + 15 * math.sin(self._glow_phase)))
                glow_pen = QPen(glow_color, thickness + self.GLOW_EXTRA, Qt.PenStyle.SolidLine)
                glow_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
                painter.setPen(glow_pen)
                painter.drawArc(ring_rect, start_angle, span_angle)

        # ── centre text: time ────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(60)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._text_color)

        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 14)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        # ── centre text: stage label ─────────────────────────────────
        label_font = QFont()
        label_font.setPixelSize(15)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 3)
        painter.setFont(label_font)
        painter.setPen(self._primary_color)

        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 38)
        painter.drawText(
            label_rect, Qt.AlignmentFlag.AlignCenter, self._stage_label.upper(),
        )

        painter.end()
