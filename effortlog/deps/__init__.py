"""FastAPI dependencies that hand request handlers the process-wide resources."""

from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from ..services.passport import PassportLookup


def get_db(request: Request) -> Iterator[Session]:
    """Yield a session from the app's factory and guarantee cleanup."""

    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_passport_lookup(request: Request) -> PassportLookup:
    return request.app.state.passport_lookup


__all__ = ["get_db", "get_passport_lookup"]
