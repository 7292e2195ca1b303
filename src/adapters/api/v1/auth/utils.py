"""Utility functions for authentication API routes.

Shared helpers so that every lifecycle endpoint logs and answers the same way.
"""

from __future__ import annotations

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status

from src.adapters.api.v1.auth.schemas import AuthResponse
from src.domain.value_objects.auth_result import AuthResult


def request_logger(request: Request, endpoint: str, logger: structlog.BoundLogger):
    """Bind the security context of ``request`` to ``logger``."""
    client_ip = request.client.host if request.client else "unknown"
    user_agent = request.headers.get("user-agent", "unknown")
    return logger.bind(
        client_ip=client_ip[:15] + "***" if len(client_ip) > 15 else client_ip,
        user_agent=user_agent[:50] + "***" if len(user_agent) > 50 else user_agent,
        endpoint=endpoint,
    )


def auth_result_response(result: AuthResult, failure_status: int) -> JSONResponse:
    """Render ``result`` as an `AuthResponse`.

    Successful results answer 200; failures answer ``failure_status`` with
    the same envelope, tokens empty and ``errors`` filled.
    """
    status_code = status.HTTP_200_OK if result.success else failure_status
    return JSONResponse(
        status_code=status_code,
        content=AuthResponse.from_result(result).model_dump(),
    )
