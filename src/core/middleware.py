"""Middleware configuration for the FastAPI application.

This module handles the configuration and registration of all middleware
components: CORS and request correlation.
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.core.config.settings import settings

CORRELATION_ID_HEADER = "X-Correlation-ID"


def configure_middleware(app: FastAPI) -> None:
    """Configure all middleware for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance
    """
    # CORS middleware configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation middleware
    app.middleware("http")(correlation_id_middleware)


async def correlation_id_middleware(request: Request, call_next):
    """Binds a correlation id to every log line emitted while serving the request.

    An incoming ``X-Correlation-ID`` header is reused; otherwise a new id is
    generated. The id is echoed back in the response headers.
    """
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)
    request.state.correlation_id = correlation_id
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.unbind_contextvars("correlation_id")
    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response
