"""Tests for calendar aggregation and duration formatting."""

from datetime import date, datetime

import pytest

from simplepomodoro.database.store import LogEntry
from simplepomodoro.stats import (
    daily_totals,
    format_duration,
    format_hhmmss,
    month_grid,
    monthly_total,
    shift_month,
)


def entry(when: datetime, seconds: int, id_: int = 0) -> LogEntry:
    return LogEntry(id=id_, occurred_at=when, duration_seconds=seconds)


@pytest.fixture
def entries():
    return [
        entry(datetime(2026, 10, 1, 9, 0), 1500),
        entry(datetime(2026, 10, 1, 23, 59), 300),
        entry(datetime(2026, 10, 15, 0, 0), 3600),
        entry(datetime(2026, 9, 30, 23, 59), 1000),
        entry(datetime(2025, 10, 1, 12, 0), 999),
    ]


class TestDailyTotals:

    def test_buckets_by_day(self, entries):
        totals = daily_totals(entries, 2026, 10)
        assert totals == {date(2026, 10, 1): 1800, date(2026, 10, 15): 3600}

    def test_other_months_and_years_excluded(self, entries):
        assert daily_totals(entries, 2026, 9) == {date(2026, 9, 30): 1000}
        assert daily_totals(entries, 2025, 10) == {date(2025, 10, 1): 999}

    def test_empty_month(self, entries):
        assert daily_totals(entries, 2026, 11) == {}


class TestMonthlyTotal:

    def test_sum(self, entries):
        assert monthly_total(entries, 2026, 10) == 5400

    def test_empty(self):
        assert monthly_total([], 2026, 10) == 0


class TestMonthGrid:

    def test_sunday_first_with_blanks(self):
        # October 2026 starts on a Thursday.
        weeks = month_grid(2026, 10)
        assert weeks[0][:4] == [None, None, None, None]
        assert weeks[0][4] == date(2026, 10, 1)
        assert all(len(w) == 7 for w in weeks)

    def test_contains_every_day_once(self):
        days = [d for w in month_grid(2024, 2) for d in w if d is not None]
        assert days[0] == date(2024, 2, 1)
        assert days[-1] == date(2024, 2, 29)
        assert len(days) == 29


class TestShiftMonth:

    @pytest.mark.parametrize("start, delta, expected", [
        ((2026, 10), 1, (2026, 11)),
        ((2026, 12), 1, (2027, 1)),
        ((2026, 1), -1, (2025, 12)),
        ((2026, 5), -17, (2024, 12)),
        ((2026, 5), 0, (2026, 5)),
    ])
    def test_shift(self, start, delta, expected):
        assert shift_month(*start, delta) == expected


class TestFormatting:

    def test_hhmmss(self):
        assert format_hhmmss(0) == "00:00:00"
        assert format_hhmmss(1500) == "00:25:00"
        assert format_hhmmss(3661) == "01:01:01"
        assert format_hhmmss(360000) == "100:00:00"

    def test_hhmmss_negative(self):
        assert format_hhmmss(-5) == "00:00:00"

    def test_duration(self):
        assert format_duration(0) == "0h 0m 0s"
        assert format_duration(6000) == "1h 40m 0s"
        assert format_duration(3725) == "1h 2m 5s"
