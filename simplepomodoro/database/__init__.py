"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import WorkLog
from .store import LogEntry, WorkLogStore

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "WorkLog",
    "LogEntry",
    "WorkLogStore",
]
