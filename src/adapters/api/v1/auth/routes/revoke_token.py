"""/auth/revoke-token/{user_id} route module.

Ends every refresh chain of a user. Callers may revoke their own tokens;
administrators may revoke anyone's.
"""

from typing import Annotated, Any, Dict

import structlog
from fastapi import APIRouter, Depends, Request, status

from src.adapters.api.v1.auth.schemas import MessageResponse
from src.adapters.api.v1.auth.utils import request_logger
from src.core.dependencies.auth import require_self_or_admin
from src.infrastructure.dependency_injection.auth_dependencies import TokenLifecycleServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Revoke every refresh token of a user",
    responses={
        401: {"description": "Missing or invalid bearer token"},
        403: {"description": "Caller is neither the user nor an administrator"},
    },
)
async def revoke_token(
    request: Request,
    user_id: int,
    claims: Annotated[Dict[str, Any], Depends(require_self_or_admin)],
    lifecycle: TokenLifecycleServiceDep,
) -> MessageResponse:
    log = request_logger(request, "revoke_token", logger)

    await lifecycle.revoke(user_id)

    log.info("Refresh tokens revoked via API", user_id=user_id, requested_by=claims.get("sub"))
    return MessageResponse(detail="Token revoked successfully.")
