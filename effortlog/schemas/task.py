from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_id: int
    user_id: int
    start_time: datetime
    end_time: Optional[datetime] = None

    @classmethod
    def from_task(cls, task) -> "TaskOut":
        return cls(
            task_id=task.task_id,
            user_id=task.user_id,
            start_time=task.started_at,
            end_time=task.ended_at,
        )


class EffortOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    task_id: int
    hours: int
    minutes: int
