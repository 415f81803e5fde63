"""Timer package."""

from .machine import (
    Intent,
    IntentKind,
    Mode,
    SessionConfig,
    Status,
    TimerState,
    Transition,
    clamp_setting,
    LONG_REST_EVERY,
    SETTING_MAX,
    SETTING_MIN,
)
from .engine import TimerEngine

__all__ = [
    "Intent",
    "IntentKind",
    "Mode",
    "SessionConfig",
    "Status",
    "TimerState",
    "Transition",
    "TimerEngine",
    "clamp_setting",
    "LONG_REST_EVERY",
    "SETTING_MAX",
    "SETTING_MIN",
]
