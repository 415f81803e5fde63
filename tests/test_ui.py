"""Tests for the timer card, the calendar view and the main window."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from simplepomodoro.app import STATS_TAB, SimplePomodoroApp
from simplepomodoro.settings import Settings
from simplepomodoro.timer.machine import Mode, SessionConfig, Status
from simplepomodoro.ui.calendar_widget import CalendarWidget
from simplepomodoro.ui.progress_ring import ProgressRing
from simplepomodoro.ui.timer_widget import NumberInput, TimerWidget

from helpers import finish_phase, run_ticks


# ═══════════════════════════════════════════════════════════════════════
#  NUMBER INPUT
# ═══════════════════════════════════════════════════════════════════════


class TestNumberInput:

    def test_commit_clamps_low(self, qapp):
        w = NumberInput("Work", 25)
        w.set_text("0")
        assert w.commit() == 1
        assert w.text == "1"

    def test_commit_defaults_empty_to_one(self, qapp):
        w = NumberInput("Work", 25)
        w.set_text("")
        assert w.commit() == 1

    def test_step_is_clamped(self, qapp):
        w = NumberInput("Loops", 99)
        w.step(1)
        assert w.value() == 99
        w.set_value(1)
        w.step(-1)
        assert w.value() == 1

    def test_step_emits_committed(self, qapp):
        w = NumberInput("Loops", 4)
        seen = []
        w.committed.connect(seen.append)
        w.step(1)
        assert seen == [5]


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_initial_display(self, engine):
        w = TimerWidget(engine)
        assert w._ring.time_text == "00:02:00"
        assert w._ring.label == "WORK"
        assert w._start_pause_btn.text() == "Start"
        assert w._pages.currentIndex() == 0

    def test_start_pushes_edited_config(self, engine):
        w = TimerWidget(engine)
        w._work_input.set_text("0")
        w.toggle_start_pause()
        assert engine.status == Status.RUNNING
        assert engine.config.work_minutes == 1
        assert engine.time_left == 60
        assert w._work_input.text == "1"

    def test_start_pause_resume_cycle(self, engine):
        w = TimerWidget(engine)
        w.toggle_start_pause()
        assert w._start_pause_btn.text() == "Pause"
        w.toggle_start_pause()
        assert engine.status == Status.PAUSED
        assert w._start_pause_btn.text() == "Resume"
        w.toggle_start_pause()
        assert engine.status == Status.RUNNING

    def test_inputs_locked_while_active(self, engine):
        w = TimerWidget(engine)
        engine.start()
        assert not w._work_input.isEnabled()
        engine.pause()
        assert not w._work_input.isEnabled()
        engine.finish()
        engine.reset_to_idle()
        assert w._work_input.isEnabled()

    def test_tick_refreshes_ring(self, engine):
        w = TimerWidget(engine)
        engine.start()
        run_ticks(engine, 30)
        assert w._ring.time_text == "00:01:30"
        assert w._ring.percent == pytest.approx(0.25)

    def test_rest_label_and_loop_text(self, engine):
        w = TimerWidget(engine)
        engine.start()
        finish_phase(engine)
        assert w._ring.label == "REST"
        assert w._ring.loop_text == "Loop 1 / 4"

    def test_long_rest_label(self, engine):
        w = TimerWidget(engine)
        engine.start()
        for _ in range(7):
            finish_phase(engine)
        assert engine.current_loop == 4
        assert engine.mode == Mode.REST
        assert w._ring.label == "LONG REST"

    def test_result_page_on_finish(self, engine):
        w = TimerWidget(engine)
        engine.start()
        run_ticks(engine, 65)
        engine.finish()
        assert w._pages.currentIndex() == 1
        assert w._result_label.text() == "0h 1m 5s"

    def test_back_button_resets(self, engine):
        w = TimerWidget(engine)
        engine.start()
        engine.finish()
        w._back_btn.click()
        assert engine.status == Status.IDLE
        assert w._pages.currentIndex() == 0

    def test_config_changed_emitted_when_idle(self, engine):
        w = TimerWidget(engine)
        seen = []
        w.config_changed.connect(seen.append)
        w._rest_input.step(1)
        assert engine.config.rest_minutes == 2
        assert seen and seen[-1].rest_minutes == 2

    def test_long_rest_toggle(self, engine):
        w = TimerWidget(engine)
        w._long_rest_check.setChecked(False)
        assert engine.config.supports_long_rest is False
        assert w._long_rest_input.isHidden()


class TestProgressRing:

    def test_percent_clamped(self, qapp):
        ring = ProgressRing()
        ring.set_percent(1.7)
        assert ring.percent == 1.0
        ring.set_percent(-1)
        assert ring.percent == 0.0

    def test_paints_without_error(self, qapp):
        ring = ProgressRing()
        ring.resize(340, 340)
        ring.set_percent(0.5)
        ring.grab()


# ═══════════════════════════════════════════════════════════════════════
#  CALENDAR
# ═══════════════════════════════════════════════════════════════════════


class TestCalendarWidget:

    def test_renders_daily_and_month_totals(self, qapp, store):
        store.append(1500, datetime(2026, 10, 1, 9, 0))
        store.append(300, datetime(2026, 10, 1, 18, 0))
        store.append(60, datetime(2026, 9, 30, 9, 0))

        cal = CalendarWidget(store, today=date(2026, 10, 19))
        cal.refresh()

        assert cal.title_text == "October 2026"
        assert cal.total_text == "0h 30m 0s"
        oct1 = cal.cells[4]  # Thursday column of the first week
        assert oct1.day_text == "1"
        assert oct1.total_text == "00:30:00"
        assert cal.cells[0].day_text == ""
        oct2 = cal.cells[5]
        assert oct2.day_text == "2"
        assert oct2.total_text == ""

    def test_month_navigation(self, qapp, store):
        store.append(60, datetime(2026, 9, 30, 9, 0))
        cal = CalendarWidget(store, today=date(2026, 10, 19))
        cal.refresh()
        cal.change_month(-1)
        assert cal.year_month == (2026, 9)
        assert cal.title_text == "September 2026"
        assert cal.total_text == "0h 1m 0s"
        cal.change_month(4)
        assert cal.year_month == (2027, 1)

    def test_store_failure_shows_empty_calendar(self, qapp, broken_store):
        cal = CalendarWidget(broken_store, today=date(2026, 10, 19))
        cal.refresh()
        assert cal.total_text == "0h 0m 0s"


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def window(qapp, store):
    settings = Settings(work_minutes=1, rest_minutes=1, target_loops=1)
    win = SimplePomodoroApp(settings=settings, store=store, persist_settings=False)
    yield win
    win.timer_engine.reset_to_idle()
    win.close()


class TestMainWindow:

    def test_engine_uses_settings(self, window):
        assert window.timer_engine.config == SessionConfig(1, 1, 1, 15, True)

    def test_statistics_locked_while_active(self, window):
        engine = window.timer_engine
        engine.start()
        assert not window.tabs.isTabEnabled(STATS_TAB)
        engine.pause()
        assert not window.tabs.isTabEnabled(STATS_TAB)
        engine.finish()
        assert window.tabs.isTabEnabled(STATS_TAB)

    def test_space_toggles(self, window):
        window._on_space()
        assert window.timer_engine.status == Status.RUNNING
        window._on_space()
        assert window.timer_engine.status == Status.PAUSED
        window._on_space()
        assert window.timer_engine.status == Status.RUNNING

    def test_space_start_uses_edited_inputs(self, window):
        window._timer_widget._work_input.set_text("3")
        window._on_space()
        engine = window.timer_engine
        assert engine.status == Status.RUNNING
        assert engine.config.work_minutes == 3
        assert engine.time_left == 180
        assert window.settings.work_minutes == 3

    def test_finished_session_shows_in_calendar(self, window, store):
        engine = window.timer_engine
        engine.start()
        while engine.status == Status.RUNNING:
            finish_phase(engine)
        assert [e.duration_seconds for e in store.list()] == [60]
        window.tabs.setCurrentIndex(STATS_TAB)
        assert window.calendar.total_text == "0h 1m 0s"

    def test_config_change_updates_settings(self, window):
        window._timer_widget._work_input.step(1)
        assert window.settings.work_minutes == 2
