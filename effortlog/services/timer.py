"""Start and stop a user's work-session timer."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..core.errors import AlreadyStoppedError, ConflictError, NotFoundError
from ..crud import tasks as task_store
from ..crud import users as user_store
from ..models.task import Task
from .timecalc import utcnow

logger = logging.getLogger(__name__)


def start_task(db: Session, user_id: int, now: datetime | None = None) -> Task:
    if not user_store.user_exists(db, user_id):
        raise NotFoundError(f"User with id {user_id} does not exist")
    running = task_store.get_open_task(db, user_id)
    if running is not None:
        raise ConflictError(
            f"User {user_id} already has a running session (task {running.task_id})"
        )
    task = task_store.insert_task(db, user_id, now or utcnow())
    logger.info(
        "Task timer started",
        extra={"extra_data": {"user_id": user_id, "task_id": task.task_id}},
    )
    return task


def stop_task(db: Session, task_id: int, now: datetime | None = None) -> Task:
    changed = task_store.close_task(db, task_id, now or utcnow())
    if changed == 0:
        existing = task_store.get_task(db, task_id)
        if existing is None:
            raise NotFoundError(f"Task with id {task_id} does not exist")
        raise AlreadyStoppedError(f"Task with id {task_id} is already stopped")
    task = task_store.get_task(db, task_id)
    logger.info(
        "Task timer stopped",
        extra={"extra_data": {"user_id": task.user_id, "task_id": task_id}},
    )
    return task
