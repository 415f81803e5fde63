"""Monthly calendar of worked time — the Statistics tab.

Each day cell shows the day number and, when any work was logged that
day, the total as HH:MM:SS.  The header switches months; the footer
shows the month total.
"""

from __future__ import annotations

import logging
from datetime import date

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QFrame,
)

from ..database.store import LogEntry, WorkLogStore
from ..errors import WorkLogStoreError
from ..stats import (
    WEEKDAY_LABELS,
    daily_totals,
    format_duration,
    format_hhmmss,
    month_grid,
    monthly_total,
    shift_month,
)
from .styles import PALETTE

logger = logging.getLogger(__name__)


class DayCell(QFrame):
    """One calendar day: number on top, worked time below."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(56, 44)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)
        layout.setSpacing(0)
        self._day_label = QLabel("", self)
        self._day_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._total_label = QLabel("", self)
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._total_label.setStyleSheet(f"color: {PALETTE['accent']}; font-size: 11px;")
        layout.addWidget(self._day_label)
        layout.addWidget(self._total_label)

    @property
    def day_text(self) -> str:
        return self._day_label.text()

    @property
    def total_text(self) -> str:
        return self._total_label.text()

    def set_day(self, day: date | None, seconds: int = 0, today: bool = False) -> None:
        if day is None:
            self._day_label.setText("")
            self._total_label.setText("")
            self.setStyleSheet("border: none;")
            return
        self._day_label.setText(str(day.day))
        self._total_label.setText(format_hhmmss(seconds) if seconds > 0 else "")
        bg = PALETTE["today"] if today else PALETTE["surface"]
        border = PALETTE["accent"] if today else PALETTE["border"]
        self.setStyleSheet(
            f"DayCell {{ background: {bg}; border: 1px solid {border};"
            f" border-radius: 8px; }}"
        )


class CalendarWidget(QWidget):
    """Month view over the work log."""

    def __init__(
        self,
        store: WorkLogStore,
        parent: QWidget | None = None,
        *,
        today: date | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._today = today
        anchor = today or date.today()
        self._year, self._month = anchor.year, anchor.month
        self._entries: list[LogEntry] = []
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(16, 16, 16, 16)

        # ── header: month switch ─────────────────────────────────────
        header = QHBoxLayout()
        self._prev_btn = QPushButton("‹", card)
        self._next_btn = QPushButton("›", card)
        self._title = QLabel("", card)
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._title.setStyleSheet("font-size: 18px; font-weight: bold;")
        header.addWidget(self._prev_btn)
        header.addWidget(self._title, 1)
        header.addWidget(self._next_btn)
        layout.addLayout(header)

        # ── grid ─────────────────────────────────────────────────────
        self._grid = QGridLayout()
        self._grid.setSpacing(4)
        for col, name in enumerate(WEEKDAY_LABELS):
            lbl = QLabel(name, card)
            lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
            if col == 0:
                lbl.setStyleSheet(f"color: {PALETTE['sunday']}; font-weight: bold;")
            elif col == 6:
                lbl.setStyleSheet(f"color: {PALETTE['saturday']}; font-weight: bold;")
            else:
                lbl.setObjectName("muted")
            self._grid.addWidget(lbl, 0, col)
        # Six weeks covers every month layout.
        self._cells: list[DayCell] = []
        for i in range(6 * 7):
            cell = DayCell(card)
            self._cells.append(cell)
            self._grid.addWidget(cell, 1 + i // 7, i % 7)
        layout.addLayout(self._grid)

        # ── footer: month total ──────────────────────────────────────
        footer = QHBoxLayout()
        caption = QLabel("Month total", card)
        caption.setObjectName("muted")
        self._total_label = QLabel("", card)
        self._total_label.setStyleSheet("font-size: 16px; font-weight: bold;")
        footer.addWidget(caption)
        footer.addStretch(1)
        footer.addWidget(self._total_label)
        layout.addLayout(footer)

        self._prev_btn.clicked.connect(lambda: self.change_month(-1))
        self._next_btn.clicked.connect(lambda: self.change_month(1))

    # ── public API ────────────────────────────────────────────────────────

    @property
    def year_month(self) -> tuple[int, int]:
        return self._year, self._month

    @property
    def title_text(self) -> str:
        return self._title.text()

    @property
    def total_text(self) -> str:
        return self._total_label.text()

    @property
    def cells(self) -> list[DayCell]:
        return self._cells

    def refresh(self) -> None:
        """Reload the log from the store and redraw."""
        try:
            self._entries = self._store.list()
        except WorkLogStoreError:
            logger.exception("Could not load work logs for the calendar")
            self._entries = []
        self._render()

    def change_month(self, delta: int) -> None:
        self._year, self._month = shift_month(self._year, self._month, delta)
        self._render()

    # ── rendering ─────────────────────────────────────────────────────────

    def _render(self) -> None:
        self._title.setText(date(self._year, self._month, 1).strftime("%B %Y"))
        totals = daily_totals(self._entries, self._year, self._month)
        today = self._today or date.today()

        days = [d for week in month_grid(self._year, self._month) for d in week]
        for i, cell in enumerate(self._cells):
            day = days[i] if i < len(days) else None
            cell.set_day(day, totals.get(day, 0) if day else 0, day == today)

        self._total_label.setText(
            format_duration(monthly_total(self._entries, self._year, self._month))
        )
