"""Store operations for users."""

from __future__ import annotations

from typing import Mapping

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError
from ..db.session import unit_of_work
from ..models.task import Task
from ..models.user import User
from .filters import assignments, equality_predicates


def list_users(db: Session, filters: Mapping[str, str], limit: int = 10, offset: int = 0) -> list[User]:
    stmt = select(User)
    predicates = equality_predicates(filters)
    if predicates:
        stmt = stmt.where(*predicates)
    stmt = stmt.order_by(User.id).limit(limit).offset(offset)
    with unit_of_work(db, "listing users"):
        return list(db.execute(stmt).scalars().all())


def get_user(db: Session, user_id: int) -> User | None:
    with unit_of_work(db, "loading a user"):
        return db.get(User, user_id, populate_existing=True)


def user_exists(db: Session, user_id: int) -> bool:
    with unit_of_work(db, "checking a user"):
        return bool(db.execute(select(exists().where(User.id == user_id))).scalar())


def passport_exists(db: Session, passport_number: str) -> bool:
    with unit_of_work(db, "checking a passport number"):
        stmt = select(exists().where(User.passport_number == passport_number))
        return bool(db.execute(stmt).scalar())


def create_user(db: Session, payload: Mapping[str, str | None]) -> User:
    user = User(
        surname=payload["surname"],
        name=payload["name"],
        patronymic=payload.get("patronymic") or None,
        address=payload.get("address") or None,
        passport_number=payload["passport_number"],
    )
    with unit_of_work(db, "saving a user"):
        db.add(user)
        try:
            db.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"User with passport {payload['passport_number']} already exists"
            ) from exc
    return user


def update_user(db: Session, user_id: int, values: Mapping[str, str]) -> int:
    """Write the non-empty ``values``; returns the number of rows changed."""

    changes = assignments(values)
    if not changes:
        return 0
    stmt = update(User).where(User.id == user_id).values(**changes)
    with unit_of_work(db, "updating a user"):
        try:
            result = db.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError(
                f"User with passport {changes.get('passport_number')} already exists"
            ) from exc
    return result.rowcount


def delete_user(db: Session, user_id: int) -> int:
    """Remove the user's sessions and then the user, atomically."""

    with unit_of_work(db, "deleting a user"):
        db.execute(delete(Task).where(Task.user_id == user_id))
        result = db.execute(delete(User).where(User.id == user_id))
    return result.rowcount
