"""Main timer display widget — the Timer tab.

Layout (top → bottom):
    - ProgressRing (large, centred)
    - Number inputs: loops / work / rest / long rest (editable only when idle)
    - Main action button row (context-dependent)

When the session finishes the card flips to a result page showing the
worked time and a button back to the idle screen.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRegularExpression, pyqtSignal
from PyQt6.QtGui import QRegularExpressionValidator
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QStackedWidget,
    QLabel, QPushButton, QLineEdit, QFrame, QCheckBox, QSizePolicy,
)

from ..stats import format_duration, format_hhmmss
from ..timer.engine import TimerEngine
from ..timer.machine import (
    Mode, SessionConfig, Status, TimerState, clamp_setting,
    SETTING_MAX, SETTING_MIN,
)
from .progress_ring import ProgressRing
from .styles import ring_colors


MODE_LABELS: dict[Mode, str] = {
    Mode.WORK: "WORK",
    Mode.REST: "REST",
}


class NumberInput(QWidget):
    """Two-digit field with up/down steppers, clamped to 1..99 on commit."""

    committed = pyqtSignal(int)

    def __init__(self, label: str, value: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        caption = QLabel(label, self)
        caption.setObjectName("muted")
        caption.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._up = QPushButton("▲", self)
        self._up.setFlat(True)
        self._up.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._edit = QLineEdit(str(clamp_setting(value)), self)
        self._edit.setObjectName("numberInput")
        self._edit.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._edit.setMaxLength(2)
        self._edit.setFixedWidth(64)
        self._edit.setValidator(
            QRegularExpressionValidator(QRegularExpression(r"\d{0,2}"), self._edit)
        )

        self._down = QPushButton("▼", self)
        self._down.setFlat(True)
        self._down.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        for w in (caption, self._up, self._edit, self._down):
            layout.addWidget(w, alignment=Qt.AlignmentFlag.AlignCenter)

        self._up.clicked.connect(lambda: self.step(1))
        self._down.clicked.connect(lambda: self.step(-1))
        self._edit.editingFinished.connect(self.commit)

    @property
    def text(self) -> str:
        return self._edit.text()

    def value(self) -> int:
        return clamp_setting(self._edit.text())

    def set_value(self, value: int) -> None:
        self._edit.setText(str(clamp_setting(value)))

    def set_text(self, text: str) -> None:
        """Raw text, as if typed.  Not clamped until ``commit``."""
        self._edit.setText(text)

    def step(self, delta: int) -> None:
        try:
            current = int(self._edit.text())
        except ValueError:
            current = 0
        self._edit.setText(str(max(SETTING_MIN, min(SETTING_MAX, current + delta))))
        self.committed.emit(self.value())

    def commit(self) -> int:
        """Clamp whatever was typed and write it back."""
        value = self.value()
        self._edit.setText(str(value))
        self.committed.emit(value)
        return value


class TimerWidget(QWidget):
    """The timer card shown in the Timer tab."""

    config_changed = pyqtSignal(object)  # SessionConfig

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 20, 24, 24)

        self._pages = QStackedWidget(card)
        card_layout.addWidget(self._pages)

        self._pages.addWidget(self._build_timer_page())
        self._pages.addWidget(self._build_result_page())

    def _build_timer_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(0)

        # ── progress ring (centrepiece) ──────────────────────────────
        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(page)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(340, 340)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        layout.addSpacing(12)

        # ── settings ─────────────────────────────────────────────────
        config = self._engine.config
        inputs_row = QHBoxLayout()
        inputs_row.setSpacing(16)
        inputs_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._loops_input = NumberInput("Loops", config.target_loops, page)
        self._work_input = NumberInput("Work (min)", config.work_minutes, page)
        self._rest_input = NumberInput("Rest (min)", config.rest_minutes, page)
        self._long_rest_input = NumberInput(
            "Long rest (min)", config.long_rest_minutes, page,
        )
        for w in self._inputs:
            inputs_row.addWidget(w)
        layout.addLayout(inputs_row)

        self._long_rest_check = QCheckBox("Long rest every 4th loop", page)
        self._long_rest_check.setChecked(config.supports_long_rest)
        layout.addWidget(self._long_rest_check, alignment=Qt.AlignmentFlag.AlignCenter)
        self._long_rest_input.setVisible(config.supports_long_rest)

        layout.addSpacing(16)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._finish_btn = QPushButton("Finish", page)
        self._start_pause_btn = QPushButton("Start", page)
        self._start_pause_btn.setObjectName("primaryButton")
        self._skip_btn = QPushButton("Skip", page)

        btn_row.addWidget(self._finish_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._skip_btn)
        layout.addLayout(btn_row)
        return page

    def _build_result_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(8)

        title = QLabel("SESSION END", page)
        title.setObjectName("muted")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        caption = QLabel("Time worked this session", page)
        caption.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._result_label = QLabel("0h 0m 0s", page)
        self._result_label.setObjectName("headline")
        self._result_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._back_btn = QPushButton("Back to top", page)

        layout.addWidget(title)
        layout.addWidget(caption)
        layout.addWidget(self._result_label)
        layout.addSpacing(16)
        layout.addWidget(self._back_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        return page

    @property
    def _inputs(self) -> tuple[NumberInput, ...]:
        return (
            self._loops_input,
            self._work_input,
            self._rest_input,
            self._long_rest_input,
        )

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle_start_pause)
        self._skip_btn.clicked.connect(self._engine.skip)
        self._finish_btn.clicked.connect(self._engine.finish)
        self._back_btn.clicked.connect(self._engine.reset_to_idle)

        for w in self._inputs:
            w.committed.connect(self._on_input_committed)
        self._long_rest_check.toggled.connect(self._on_long_rest_toggled)

        self._engine.tick.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle_start_pause(self) -> None:
        """Start with the edited settings, or pause / resume."""
        status = self._engine.status
        if status == Status.RUNNING:
            self._engine.pause()
        elif status == Status.PAUSED:
            self._engine.resume()
        elif status == Status.IDLE:
            self._push_config()
            self._engine.start()

    def _on_input_committed(self, _value: int) -> None:
        if self._engine.status == Status.IDLE:
            self._push_config()

    def _on_long_rest_toggled(self, checked: bool) -> None:
        self._long_rest_input.setVisible(checked)
        if self._engine.status == Status.IDLE:
            self._push_config()

    def _current_config(self) -> SessionConfig:
        return SessionConfig(
            target_loops=self._loops_input.commit(),
            work_minutes=self._work_input.commit(),
            rest_minutes=self._rest_input.commit(),
            long_rest_minutes=self._long_rest_input.commit(),
            supports_long_rest=self._long_rest_check.isChecked(),
        )

    def _push_config(self) -> None:
        # Block re-entry: commit() emits committed, which lands here again.
        for w in self._inputs:
            w.blockSignals(True)
        try:
            config = self._current_config()
        finally:
            for w in self._inputs:
                w.blockSignals(False)
        if config != self._engine.config:
            self._engine.configure(config)
            self.config_changed.emit(config)

    def _on_state_changed(self, state: TimerState) -> None:
        status = state.status

        if status == Status.FINISHED:
            self._result_label.setText(format_duration(state.accumulated_work_seconds))
            self._pages.setCurrentIndex(1)
            return
        self._pages.setCurrentIndex(0)

        # ── button labels ────────────────────────────────────────────
        if status == Status.RUNNING:
            self._start_pause_btn.setText("Pause")
        elif status == Status.PAUSED:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")

        active = state.is_active
        self._skip_btn.setVisible(active)
        self._finish_btn.setVisible(active)
        for w in self._inputs:
            w.setEnabled(not active)
        self._long_rest_check.setEnabled(not active)

        # ── ring ─────────────────────────────────────────────────────
        label = MODE_LABELS[state.mode]
        if state.is_long_rest:
            label = "LONG REST"
        if status == Status.PAUSED:
            label = f"{label} · PAUSED"
        self._ring.set_label(label)
        self._ring.set_colors(ring_colors(status, state.mode, state.is_long_rest))
        if status == Status.IDLE:
            self._ring.set_loop_text(f"{state.config.target_loops} loops")
        else:
            self._ring.set_loop_text(
                f"Loop {state.current_loop} / {state.config.target_loops}"
            )

        self._refresh_display(state.time_left_seconds)

    def _refresh_display(self, time_left: int) -> None:
        self._ring.set_time_text(format_hhmmss(time_left))
        self._ring.set_percent(self._engine.progress)
