"""Application factory and top-level wiring for the effortlog service.

``create_app`` owns the lifecycle of the two process-wide resources, the
database engine and the passport-service client. Both are built here, parked on
``app.state`` for the request dependencies in :mod:`effortlog.deps`, and
released when the application shuts down. Tests pass their own engine or
client to swap either one out.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, get_settings
from .core.errors import (
    ServiceError,
    http_exception_handler,
    service_error_handler,
    validation_exception_handler,
)
from .db.session import Base, build_engine, build_session_factory
from .middlewares import RequestIdMiddleware
from .services.passport import PassportLookup

# Importing the SQLAlchemy models registers them with the metadata. Without
# this step ``Base.metadata.create_all`` would not know about our tables.
from .models import task as _task  # noqa: F401
from .models import user as _user  # noqa: F401

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    engine: Engine | None = None,
    passport_lookup: PassportLookup | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    engine = engine or build_engine(
        settings.DB_URL, echo=settings.DB_ECHO, pool_timeout=settings.DB_POOL_TIMEOUT
    )
    passport_lookup = passport_lookup or PassportLookup(
        settings.PASSPORT_API_URL, timeout=settings.PASSPORT_API_TIMEOUT
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        passport_lookup.close()
        engine.dispose()
        logger.info("Resources released")

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.passport_lookup = passport_lookup

    Base.metadata.create_all(bind=engine)

    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    from .routers import users as users_router

    app.include_router(users_router.router)
    return app


__all__ = ["create_app"]
