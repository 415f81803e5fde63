"""Exception hierarchy for SimplePomodoro."""

from __future__ import annotations


class PomodoroError(Exception):
    """Base class for every error raised by this package."""


class InvalidStateTransition(PomodoroError):
    """A timer operation was called outside the states that allow it."""

    def __init__(self, operation: str, status: object) -> None:
        self.operation = operation
        self.status = status
        name = getattr(status, "value", status)
        super().__init__(f"cannot {operation} while timer is {name}")


class InvalidDuration(PomodoroError):
    """A work log was given a duration that is not a positive integer."""


class WorkLogStoreError(PomodoroError):
    """The work-log store could not read or write its records."""
