"""Append-only work-log store.

The timer hands every finished session's worked seconds to
``WorkLogStore.append``; the statistics view reads them back with
``WorkLogStore.list``.  Callers only ever see ``LogEntry`` values,
never ORM rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from ..errors import InvalidDuration, WorkLogStoreError
from .db import get_session
from .models import WorkLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    id: int
    occurred_at: datetime
    duration_seconds: int


def _to_entry(row: WorkLog) -> LogEntry:
    return LogEntry(
        id=row.id,
        occurred_at=row.occurred_at,
        duration_seconds=row.duration_seconds,
    )


class WorkLogStore:
    """SQLite-backed log of worked durations."""

    def append(
        self, duration_seconds: int, occurred_at: datetime | None = None,
    ) -> LogEntry:
        """Record *duration_seconds* of work at *occurred_at* (default: now).

        Raises ``InvalidDuration`` for anything but a positive int and
        ``WorkLogStoreError`` when the database cannot be written.
        """
        if (
            isinstance(duration_seconds, bool)
            or not isinstance(duration_seconds, int)
            or duration_seconds <= 0
        ):
            raise InvalidDuration(
                f"duration must be a positive integer, got {duration_seconds!r}"
            )
        occurred_at = occurred_at or datetime.now()

        try:
            with get_session() as db:
                row = WorkLog(
                    occurred_at=occurred_at,
                    duration_seconds=duration_seconds,
                )
                db.add(row)
                db.flush()
                entry = _to_entry(row)
        except SQLAlchemyError as exc:
            raise WorkLogStoreError("failed to save work log") from exc

        logger.info(
            "Logged %ss of work at %s (id=%s)",
            entry.duration_seconds, entry.occurred_at.isoformat(), entry.id,
        )
        return entry

    def list(self) -> list[LogEntry]:
        """All entries, newest first."""
        try:
            with get_session() as db:
                rows = (
                    db.query(WorkLog)
                    .order_by(WorkLog.occurred_at.desc(), WorkLog.id.desc())
                    .all()
                )
                return [_to_entry(r) for r in rows]
        except SQLAlchemyError as exc:
            raise WorkLogStoreError("failed to fetch work logs") from exc
