"""Store operations for work sessions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError
from ..db.session import unit_of_work
from ..models.task import Task
from ..models.user import User


def get_task(db: Session, task_id: int) -> Task | None:
    with unit_of_work(db, "loading a session"):
        return db.get(Task, task_id, populate_existing=True)


def get_open_task(db: Session, user_id: int) -> Task | None:
    stmt = select(Task).where(Task.user_id == user_id, Task.end_time.is_(None))
    with unit_of_work(db, "loading the open session"):
        return db.execute(stmt).scalars().first()


def insert_task(db: Session, user_id: int, started_at: datetime) -> Task:
    task = Task(user_id=user_id, start_time=started_at, end_time=None)
    with unit_of_work(db, "starting a session"):
        db.add(task)
        try:
            db.flush()
        except IntegrityError as exc:
            # Either the open-session index or the users foreign key fired.
            db.rollback()
            if db.get(User, user_id) is None:
                raise NotFoundError(f"User with id {user_id} does not exist") from exc
            raise ConflictError(f"User {user_id} already has a running session") from exc
    return task


def close_task(db: Session, task_id: int, ended_at: datetime) -> int:
    """Set ``end_time`` only if the session is still open.

    The open-check and the write are one statement, so of two concurrent stops
    exactly one sees a row count of 1.
    """

    stmt = (
        update(Task)
        .where(Task.task_id == task_id, Task.end_time.is_(None))
        .values(end_time=ended_at)
        .execution_options(synchronize_session=False)
    )
    with unit_of_work(db, "stopping a session"):
        result = db.execute(stmt)
    return result.rowcount


def list_completed_tasks(
    db: Session,
    user_id: int,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[Task]:
    stmt = select(Task).where(Task.user_id == user_id, Task.end_time.is_not(None))
    if start is not None and end is not None:
        stmt = stmt.where(Task.start_time >= start, Task.start_time <= end)
    stmt = stmt.order_by(Task.task_id)
    with unit_of_work(db, "loading completed sessions"):
        return list(db.execute(stmt).scalars().all())
