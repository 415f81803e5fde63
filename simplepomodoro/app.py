"""Main application window for SimplePomodoro."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QLabel, QTabWidget

from .database.store import WorkLogStore
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.machine import SessionConfig, TimerState
from .ui.calendar_widget import CalendarWidget
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)

TIMER_TAB = 0
STATS_TAB = 1


class SimplePomodoroApp(QMainWindow):
    """Main window: a Timer tab and a Statistics tab.

    The Statistics tab is locked while a session is running or paused.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        store: WorkLogStore | None = None,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Simple Pomodoro")
        self.setMinimumSize(440, 640)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._persist_settings = persist_settings
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── engine ────────────────────────────────────────────────────
        self._store = store or WorkLogStore()
        self._timer_engine = TimerEngine(
            self,
            config=self._settings.session_config(),
            store=self._store,
        )

        # ── layout ────────────────────────────────────────────────────
        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(20, 16, 20, 20)

        title = QLabel("Simple Pomodoro", central)
        title.setObjectName("headline")
        root.addWidget(title)

        self._tabs = QTabWidget(central)
        self._timer_widget = TimerWidget(self._timer_engine, self._tabs)
        self._calendar = CalendarWidget(self._store, self._tabs)
        self._tabs.addTab(self._timer_widget, "Timer")
        self._tabs.addTab(self._calendar, "Statistics")
        root.addWidget(self._tabs)

        self.setCentralWidget(central)
        self.setStyleSheet(build_stylesheet())

        # ── wire signals ──────────────────────────────────────────────
        self._timer_engine.state_changed.connect(self._on_state_changed)
        self._timer_engine.log_failed.connect(self._on_log_failed)
        self._timer_widget.config_changed.connect(self._on_config_changed)
        self._tabs.currentChanged.connect(self._on_tab_changed)

        space = QShortcut(QKeySequence("Space"), self)
        space.activated.connect(self._on_space)

    # ── properties ────────────────────────────────────────────────────────

    @property
    def timer_engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def tabs(self) -> QTabWidget:
        return self._tabs

    @property
    def calendar(self) -> CalendarWidget:
        return self._calendar

    @property
    def settings(self) -> Settings:
        return self._settings

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        locked = state.is_active
        self._tabs.setTabEnabled(STATS_TAB, not locked)
        if locked and self._tabs.currentIndex() == STATS_TAB:
            self._tabs.setCurrentIndex(TIMER_TAB)

    def _on_tab_changed(self, index: int) -> None:
        if index == STATS_TAB:
            self._calendar.refresh()

    def _on_config_changed(self, config: SessionConfig) -> None:
        self._settings.update_from_config(config)
        self._save_settings()

    def _on_log_failed(self, message: str) -> None:
        self.statusBar().showMessage(f"Work time was not saved: {message}", 8000)

    def _on_space(self) -> None:
        """Space acts like the Start / Pause / Resume button."""
        self._timer_widget.toggle_start_pause()

    def _save_settings(self) -> None:
        if not self._persist_settings:
            return
        try:
            save_settings(self._settings)
        except OSError:
            logger.exception("Could not save settings")

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        self._save_settings()
        event.accept()
