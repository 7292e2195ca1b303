"""Exception handlers translating the fatal error families into HTTP answers.

Business failures of the token lifecycle never reach these handlers: they
come back as `AuthResult` values and the routes render them. What lands
here is what the lifecycle refuses to mask:

    DatabaseError        -> 503
    ConfigurationError   -> 500
    SessionGuardError    -> 400 (fallback)
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from src.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    SessionGuardError,
)

__all__ = [
    "database_error_handler",
    "configuration_error_handler",
    "sessionguard_error_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Storage faults answer 503 with a fixed body.

    The driver message is logged, never returned. Clients may retry once the
    store is back; no partial token pair is ever handed out.
    """
    logger.critical(
        "Storage fault while serving request",
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "A database error occurred."},
    )


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.critical(
        "Token signing is misconfigured",
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )


async def sessionguard_error_handler(request: Request, exc: SessionGuardError) -> JSONResponse:
    logger.warning(
        "Unhandled application error",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Installs the handlers on ``app``.

    Starlette resolves handlers along the exception's MRO, so the specific
    families take precedence over the `SessionGuardError` fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(SessionGuardError, sessionguard_error_handler)
