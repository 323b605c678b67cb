"""Error taxonomy shared by the services and its HTTP rendering.

Services raise a :class:`ServiceError` subclass; the handlers registered in
``create_app`` translate them into a plain-text response carrying the status
code declared on the class.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("effortlog.errors")


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "service_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed client input: ids, passport numbers, timestamps."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class AlreadyStoppedError(ConflictError):
    """The session exists but its timer has already been stopped."""

    code = "already_stopped"


class UpstreamError(ServiceError):
    """The passport service was unreachable or answered with a non-200 status."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "upstream_error"


class DecodeError(UpstreamError):
    code = "decode_error"


class StorageError(ServiceError):
    code = "storage_error"


def _plain(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


async def service_error_handler(request: Request, exc: ServiceError):
    extra = {
        "extra_data": {
            "code": exc.code,
            "status": exc.status_code,
            "path": request.url.path,
        }
    }
    if exc.status_code >= 500:
        logger.error(exc.message, extra=extra, exc_info=exc)
    else:
        logger.warning(exc.message, extra=extra)
    return _plain(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Path ids that are not positive integers land here as well as bad bodies.
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg')}")
    message = "Invalid request: " + "; ".join(problems)
    logger.warning(message, extra={"extra_data": {"path": request.url.path}})
    return _plain(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else "Error"
    return _plain(exc.status_code, detail)
