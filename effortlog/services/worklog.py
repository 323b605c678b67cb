"""Completed-session retrieval and the ranked effort report built from it."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..crud import tasks as task_store
from ..models.task import Task
from .effort import UserEffort, compute_effort, rank_efforts
from .timecalc import resolve_period

logger = logging.getLogger(__name__)


def get_sessions(db: Session, user_id: int) -> list[Task]:
    return task_store.list_completed_tasks(db, user_id)


def get_sessions_by_period(db: Session, user_id: int, start: datetime, end: datetime) -> list[Task]:
    """Completed sessions whose start lies in ``[start, end]``, both inclusive."""
    return task_store.list_completed_tasks(db, user_id, start=start, end=end)


def build_worklog(
    db: Session,
    user_id: int,
    start_raw: str | None = None,
    end_raw: str | None = None,
) -> list[UserEffort]:
    period = resolve_period(start_raw, end_raw)
    if period is None:
        tasks = get_sessions(db, user_id)
    else:
        tasks = get_sessions_by_period(db, user_id, *period)
    efforts = rank_efforts(compute_effort(tasks))
    logger.info(
        "Work log built",
        extra={
            "extra_data": {
                "user_id": user_id,
                "sessions": len(efforts),
                "bounded": period is not None,
            }
        },
    )
    return efforts
