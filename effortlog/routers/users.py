from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ..db.session import MAX_INTEGER
from ..deps import get_db, get_passport_lookup
from ..schemas.task import EffortOut, TaskOut
from ..schemas.user import UserCreate, UserFields, UserOut
from ..services import directory, timer, worklog
from ..services.passport import PassportLookup

router = APIRouter(prefix="/users", tags=["users"])

UserId = Annotated[int, Path(ge=1, le=MAX_INTEGER, description="User id")]
TaskId = Annotated[int, Path(ge=0, le=MAX_INTEGER, description="Task (session) id")]


def _user_fields(
    surname: str | None = Query(default=None),
    name: str | None = Query(default=None),
    patronymic: str | None = Query(default=None),
    passport_number: str | None = Query(default=None, alias="passportNumber"),
    address: str | None = Query(default=None),
) -> UserFields:
    return UserFields(
        surname=surname,
        name=name,
        patronymic=patronymic,
        passport_number=passport_number,
        address=address,
    )


@router.get("", response_model=list[UserOut])
def api_list_users(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias="pageSize"),
    filters: UserFields = Depends(_user_fields),
    db: Session = Depends(get_db),
):
    pagination = directory.resolve_pagination(page, page_size)
    return directory.list_users(db, pagination, filters)


@router.post("/add", response_model=UserOut, status_code=201)
def api_add_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    lookup: PassportLookup = Depends(get_passport_lookup),
):
    return directory.add_user(db, lookup, payload.passport_number)


@router.put("/{user_id}", response_model=UserOut)
def api_update_user(
    user_id: UserId,
    changes: UserFields = Depends(_user_fields),
    db: Session = Depends(get_db),
):
    return directory.update_user(db, user_id, changes)


@router.delete("/{user_id}")
def api_delete_user(user_id: UserId, db: Session = Depends(get_db)):
    directory.delete_user(db, user_id)
    return {"status": "deleted"}


@router.post("/{user_id}/task/start", response_model=TaskOut, status_code=201)
def api_start_task(user_id: UserId, db: Session = Depends(get_db)):
    return TaskOut.from_task(timer.start_task(db, user_id))


@router.post("/task/{task_id}/stop", response_model=TaskOut)
def api_stop_task(task_id: TaskId, db: Session = Depends(get_db)):
    return TaskOut.from_task(timer.stop_task(db, task_id))


@router.get("/{user_id}/worklog", response_model=list[EffortOut])
def api_worklog(
    user_id: UserId,
    start_period: str | None = Query(default=None, alias="startPeriod"),
    end_period: str | None = Query(default=None, alias="endPeriod"),
    db: Session = Depends(get_db),
):
    return worklog.build_worklog(db, user_id, start_period, end_period)
