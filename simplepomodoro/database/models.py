"""SQLAlchemy ORM models for SimplePomodoro."""

from datetime import datetime

from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class WorkLog(Base):
    """One finished session: how long the user actually worked."""

    __tablename__ = "work_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    occurred_at = Column(DateTime, nullable=False, default=datetime.now, index=True)
    duration_seconds = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<WorkLog id={self.id} at={self.occurred_at:%Y-%m-%d %H:%M} "
            f"duration={self.duration_seconds}s>"
        )
