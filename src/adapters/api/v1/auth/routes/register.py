"""/auth/register route module.

Creates an account with the default role and returns its first token pair.
"""

import structlog
from fastapi import APIRouter, Request, status

from src.adapters.api.v1.auth.schemas import AuthResponse, RegisterRequest
from src.adapters.api.v1.auth.utils import auth_result_response, request_logger
from src.infrastructure.dependency_injection.auth_dependencies import TokenLifecycleServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new user",
    description="Creates a user account and issues an access token and a refresh token.",
    responses={400: {"model": AuthResponse, "description": "Registration rejected"}},
)
async def register_user(
    request: Request,
    payload: RegisterRequest,
    lifecycle: TokenLifecycleServiceDep,
):
    """Register a new user with the provided credentials.

    Duplicate emails and password policy violations answer 400 with every
    reason listed in ``errors``.
    """
    log = request_logger(request, "register", logger)
    log.info("Registration attempt initiated", has_password=bool(payload.password))

    result = await lifecycle.register(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )

    if not result.success:
        log.info("Registration failed", error_code=result.error_code.value)
    return auth_result_response(result, status.HTTP_400_BAD_REQUEST)
