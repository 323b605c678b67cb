"""Structured WHERE/SET builders for the optional user columns.

Values only ever travel as bound parameters; column names come from the
whitelist below, never from the request.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.sql.elements import ColumnElement

from ..models.user import User

USER_COLUMNS = {
    "surname": User.surname,
    "name": User.name,
    "patronymic": User.patronymic,
    "passport_number": User.passport_number,
    "address": User.address,
}


def _known(values: Mapping[str, Any]) -> dict[str, Any]:
    unknown = set(values) - set(USER_COLUMNS)
    if unknown:
        raise KeyError(f"unsupported user fields: {', '.join(sorted(unknown))}")
    return {key: value for key, value in values.items() if value not in (None, "")}


def equality_predicates(values: Mapping[str, Any]) -> list[ColumnElement[bool]]:
    """One ``column = :value`` predicate per non-empty value; callers AND them."""

    return [USER_COLUMNS[key] == value for key, value in _known(values).items()]


def assignments(values: Mapping[str, Any]) -> dict[str, Any]:
    """Column/value pairs for ``UPDATE users SET ...`` restricted to non-empty values."""

    return {USER_COLUMNS[key].key: value for key, value in _known(values).items()}
