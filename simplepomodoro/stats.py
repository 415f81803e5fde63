"""Read-side aggregation of the work log for the calendar view.

All bucketing happens on the naive local timestamps the store records,
so a session logged at 23:59 counts toward that calendar day.
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from .database.store import LogEntry

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


def _in_month(entry: LogEntry, year: int, month: int) -> bool:
    return entry.occurred_at.year == year and entry.occurred_at.month == month


def daily_totals(
    entries: Iterable[LogEntry], year: int, month: int,
) -> dict[date, int]:
    """Seconds worked per day of *year*/*month*.  Days without work are absent."""
    totals: dict[date, int] = defaultdict(int)
    for entry in entries:
        if _in_month(entry, year, month):
            totals[entry.occurred_at.date()] += entry.duration_seconds
    return {day: secs for day, secs in totals.items() if secs > 0}


def monthly_total(entries: Iterable[LogEntry], year: int, month: int) -> int:
    return sum(e.duration_seconds for e in entries if _in_month(e, year, month))


def month_grid(year: int, month: int) -> list[list[date | None]]:
    """Sunday-first weeks for the month, padded with ``None``."""
    return [
        [day if day.month == month else None for day in week]
        for week in _CALENDAR.monthdatescalendar(year, month)
    ]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """(year, month) moved by *delta* months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def format_hhmmss(seconds: int) -> str:
    """``HH:MM:SS``; hours may exceed two digits."""
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_duration(seconds: int) -> str:
    """Human-readable total, e.g. ``1h 40m 5s``."""
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h}h {m}m {s}s"
