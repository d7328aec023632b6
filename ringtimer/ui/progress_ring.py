"""Circular progress ring widget rendered with QPainter.

- The arc depletes clockwise from 12 o'clock as the countdown runs.
- Colour follows the timer state; a completion flash turns it green.
- The remaining time is drawn in the centre with a state label below.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget

from ..timer.engine import TimerState
from .styles import STATE_COLORS, COMPLETE_FLASH_COLOR, PALETTE


class ProgressRing(QWidget):
    """Custom-painted countdown ring."""

    RING_DIAMETER = 260
    RING_THICKNESS = 12

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        self._ring_fraction: float = 0.0     # elapsed share, 0..1
        self._time_text: str = "0:00"
        self._state_label: str = ""
        self._timer_state: TimerState = TimerState.IDLE
        self._flashing: bool = False

        self._text_color = QColor(PALETTE["text"])
        self._muted_color = QColor(PALETTE["text_muted"])

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def ring_fraction(self) -> float:
        return self._ring_fraction

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def flashing(self) -> bool:
        return self._flashing

    def set_ring_fraction(self, fraction: float) -> None:
        self._ring_fraction = max(0.0, min(1.0, fraction))
        self.update()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_state_label(self, text: str) -> None:
        self._state_label = text
        self.update()

    def apply_state(self, state: TimerState) -> None:
        self._timer_state = state
        self.update()

    def set_flashing(self, flashing: bool) -> None:
        self._flashing = flashing
        self.update()

    def arc_color(self) -> QColor:
        if self._flashing:
            return QColor(COMPLETE_FLASH_COLOR)
        return QColor(STATE_COLORS.get(self._timer_state, PALETTE["accent"]))

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        cx, cy = self.width() / 2, self.height() / 2
        diameter = max(100, min(self.width(), self.height()) - 40)
        radius = diameter / 2
        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)
        color = self.arc_color()

        # ── background track ─────────────────────────────────────────
        track_color = QColor(color)
        track_color.setAlpha(35)
        painter.setPen(QPen(track_color, self.RING_THICKNESS))
        painter.drawEllipse(ring_rect)

        # ── remaining arc ────────────────────────────────────────────
        remaining_share = 1.0 - self._ring_fraction
        if remaining_share > 0.001:
            arc_pen = QPen(color, self.RING_THICKNESS)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)
            # Qt arcs: 12 o'clock is 90*16; negative spans run clockwise
            painter.drawArc(ring_rect, 90 * 16, -int(remaining_share * 360 * 16))

        # ── centre text ──────────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(52)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._text_color)
        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 12)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        label_font = QFont()
        label_font.setPixelSize(13)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 3)
        painter.setFont(label_font)
        painter.setPen(self._muted_color)
        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 34)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._state_label)

        painter.end()
