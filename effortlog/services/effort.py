"""Turn completed sessions into per-session effort figures and rank them.

``minutes`` is the *total* minute count of a session, not the remainder after
whole hours: a 90 minute session reports ``hours=1, minutes=90``. Reports
produced by earlier versions of the service used this shape and consumers
compare against it, so the ranking key ``hours * 60 + minutes`` keeps the same
arithmetic as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..models.task import Task


@dataclass(frozen=True)
class UserEffort:
    user_id: int
    task_id: int
    hours: int
    minutes: int

    @property
    def rank_key(self) -> int:
        return self.hours * 60 + self.minutes


def compute_effort(tasks: Iterable[Task]) -> list[UserEffort]:
    efforts: list[UserEffort] = []
    for task in tasks:
        if task.ended_at is None:
            # Open sessions carry no duration yet.
            continue
        seconds = (task.ended_at - task.started_at).total_seconds()
        efforts.append(
            UserEffort(
                user_id=task.user_id,
                task_id=task.task_id,
                hours=int(seconds // 3600),
                minutes=int(seconds // 60),
            )
        )
    return efforts


def rank_efforts(efforts: Sequence[UserEffort]) -> list[UserEffort]:
    """Order by ``rank_key`` descending; equal keys keep their input order."""
    if len(efforts) < 2:
        return list(efforts)
    return sorted(efforts, key=lambda effort: effort.rank_key, reverse=True)
