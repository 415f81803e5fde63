"""Circular progress ring widget rendered with QPainter.

- Fills clockwise as the current phase elapses.
- Colour-coded by status and mode (work=cyan, rest=green, long rest=violet).
- Shows HH:MM:SS at the centre plus a mode label and the loop counter.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QConicalGradient, QFont
from PyQt6.QtWidgets import QWidget

from .styles import IDLE_COLORS, PALETTE


class ProgressRing(QWidget):
    """Custom-painted circular timer ring."""

    RING_DIAMETER = 300
    RING_THICKNESS = 6

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        self._percent: float = 0.0
        self._display_percent: float = 0.0
        self._time_text: str = "00:25:00"
        self._label: str = "WORK"
        self._loop_text: str = ""

        self._primary_color = QColor(IDLE_COLORS[0])
        self._secondary_color = QColor(IDLE_COLORS[1])
        self._text_color = QColor(PALETTE["text"])
        self._muted_color = QColor(PALETTE["text_muted"])
        self._track_color = QColor(PALETTE["border"])

        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.setDuration(400)
        self._arc_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

    # ── public API ───────────────────────────────────────────────────────

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def label(self) -> str:
        return self._label

    @property
    def loop_text(self) -> str:
        return self._loop_text

    def set_percent(self, pct: float) -> None:
        """Update the arc fill (0..1).  Animates unless jumping backwards."""
        pct = max(0.0, min(1.0, pct))
        self._percent = pct
        self._arc_anim.stop()
        if pct < self._display_percent:
            # New phase: snap instead of sweeping back.
            self._display_percent = pct
            self.update()
            return
        self._arc_anim.setStartValue(self._display_percent)
        self._arc_anim.setEndValue(pct)
        self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_label(self, text: str) -> None:
        self._label = text
        self.update()

    def set_loop_text(self, text: str) -> None:
        self._loop_text = text
        self.update()

    def set_colors(self, colors: tuple[str, str]) -> None:
        self._primary_color = QColor(colors[0])
        self._secondary_color = QColor(colors[1])
        self.update()

    def _on_arc_anim(self, value: object) -> None:
        self._display_percent = float(value)  # type: ignore[arg-type]
        self.update()

    # ── painting ─────────────────────────────────────────────────────────

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
        track_pen = QPen(self._track_color, thickness, Qt.PenStyle.SolidLine)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── elapsed arc ──────────────────────────────────────────────
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
            painter.drawArc(ring_rect, 90 * 16, -int(pct * 360 * 16))

        # ── centre text ──────────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(44)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._text_color)
        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 10)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        label_font = QFont()
        label_font.setPixelSize(13)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 3)
        painter.setFont(label_font)
        painter.setPen(self._primary_color)
        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() - 60)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._label)

        loop_font = QFont()
        loop_font.setPixelSize(12)
        painter.setFont(loop_font)
        painter.setPen(self._muted_color)
        loop_rect = QRectF(ring_rect)
        loop_rect.moveTop(loop_rect.top() + 40)
        painter.drawText(loop_rect, Qt.AlignmentFlag.AlignCenter, self._loop_text)

        painter.end()
