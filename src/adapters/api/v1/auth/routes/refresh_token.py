"""/auth/refresh-token route module.

Exchanges an access token (expired or not) and its paired refresh token for
a new pair. Each refresh token can be redeemed once.
"""

import structlog
from fastapi import APIRouter, Request, status

from src.adapters.api.v1.auth.schemas import AuthResponse, RefreshTokenRequest
from src.adapters.api.v1.auth.utils import auth_result_response, request_logger
from src.infrastructure.dependency_injection.auth_dependencies import TokenLifecycleServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Rotate the token pair",
    description=(
        "Redeems a refresh token once and issues a new access token and refresh token. "
        "The access token may be expired but must carry a valid signature."
    ),
    responses={401: {"model": AuthResponse, "description": "Refresh rejected"}},
)
async def refresh_token(
    request: Request,
    payload: RefreshTokenRequest,
    lifecycle: TokenLifecycleServiceDep,
):
    log = request_logger(request, "refresh_token", logger)

    result = await lifecycle.refresh(
        access_token=payload.token, refresh_token=payload.refresh_token
    )

    if not result.success:
        log.warning("Token refresh failed", error_code=result.error_code.value)
    return auth_result_response(result, status.HTTP_401_UNAUTHORIZED)
