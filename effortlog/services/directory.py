"""User listing, creation from a passport lookup, update and deletion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..crud import users as user_store
from ..db.session import MAX_INTEGER
from ..models.user import User
from ..schemas.user import UserFields
from .passport import PassportLookup

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def _positive_or_default(raw: str | None, default: int, label: str) -> int:
    try:
        value = int(raw) if raw is not None else None
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r, defaulting to %d", label, raw, default)
        return default
    if value is None:
        return default
    if value < 1:
        logger.warning("%s %d less than 1, defaulting to %d", label.capitalize(), value, default)
        return default
    if value > MAX_INTEGER:
        logger.warning("%s %d out of range, defaulting to %d", label.capitalize(), value, default)
        return default
    return value


def resolve_pagination(page_raw: str | None, page_size_raw: str | None) -> Pagination:
    return Pagination(
        page=_positive_or_default(page_raw, DEFAULT_PAGE, "page"),
        page_size=_positive_or_default(page_size_raw, DEFAULT_PAGE_SIZE, "page size"),
    )


def split_passport(passport_number: str) -> tuple[str, str]:
    """Return ``(series, number)``; anything but exactly two tokens is rejected."""
    parts = (passport_number or "").split()
    if len(parts) != 2:
        raise ValidationError(f"Invalid passport number format: {passport_number!r}")
    return parts[0], parts[1]


def list_users(db: Session, pagination: Pagination, filters: UserFields) -> list[User]:
    users = user_store.list_users(
        db, filters.supplied(), limit=pagination.page_size, offset=pagination.offset
    )
    logger.info(
        "Users listed",
        extra={
            "extra_data": {
                "page": pagination.page,
                "page_size": pagination.page_size,
                "count": len(users),
            }
        },
    )
    return users


def add_user(db: Session, lookup: PassportLookup, passport_number: str) -> User:
    series, number = split_passport(passport_number)
    normalized = f"{series} {number}"
    if user_store.passport_exists(db, normalized):
        raise ConflictError(f"User with passport {normalized} already exists")

    record = lookup.fetch(series, number)
    user = user_store.create_user(
        db, {**record.model_dump(), "passport_number": normalized}
    )
    logger.info("User added", extra={"extra_data": {"user_id": user.id}})
    return user


def update_user(db: Session, user_id: int, changes: UserFields) -> User:
    if not user_store.user_exists(db, user_id):
        raise NotFoundError(f"User with id {user_id} does not exist")

    values = changes.supplied()
    if "passport_number" in values:
        values["passport_number"] = " ".join(split_passport(values["passport_number"]))
    user_store.update_user(db, user_id, values)
    user = user_store.get_user(db, user_id)
    if user is None:
        # Deleted by a concurrent request after the existence check.
        raise NotFoundError(f"User with id {user_id} does not exist")
    logger.info(
        "User updated",
        extra={"extra_data": {"user_id": user_id, "fields": sorted(values)}},
    )
    return user


def delete_user(db: Session, user_id: int) -> None:
    if user_store.delete_user(db, user_id) == 0:
        raise NotFoundError(f"User with id {user_id} does not exist")
    logger.info("User deleted", extra={"extra_data": {"user_id": user_id}})
