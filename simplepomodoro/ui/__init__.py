"""UI package."""

from .timer_widget import NumberInput, TimerWidget
from .calendar_widget import CalendarWidget, DayCell
from .progress_ring import ProgressRing

__all__ = [
    "NumberInput",
    "TimerWidget",
    "CalendarWidget",
    "DayCell",
    "ProgressRing",
]
