"""SQLAlchemy model for a single timed work session ("task")."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, text

from ..db.session import Base


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything we store is UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        # At most one running timer per user, also under concurrent starts.
        Index(
            "uq_tasks_one_open_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("end_time IS NULL"),
            postgresql_where=text("end_time IS NULL"),
        ),
    )

    task_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def started_at(self) -> datetime:
        return as_utc(self.start_time)

    @property
    def ended_at(self) -> datetime | None:
        return as_utc(self.end_time)


__all__ = ["Task", "as_utc"]
