"""Login endpoint module.

Authenticates with email and password. A successful login revokes every
refresh token the user still holds before issuing the new pair.
"""

import structlog
from fastapi import APIRouter, Request, status

from src.adapters.api.v1.auth.schemas import AuthResponse, LoginRequest
from src.adapters.api.v1.auth.utils import auth_result_response, request_logger
from src.infrastructure.dependency_injection.auth_dependencies import TokenLifecycleServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate a user",
    description="Authenticates a user with email and password and issues a new token pair.",
    responses={401: {"model": AuthResponse, "description": "Invalid credentials"}},
)
async def login_user(
    request: Request,
    payload: LoginRequest,
    lifecycle: TokenLifecycleServiceDep,
):
    log = request_logger(request, "login", logger)
    log.info("Login attempt initiated", has_password=bool(payload.password))

    result = await lifecycle.login(email=payload.email, password=payload.password)

    if not result.success:
        log.warning("Login failed", error_code=result.error_code.value)
    return auth_result_response(result, status.HTTP_401_UNAUTHORIZED)
