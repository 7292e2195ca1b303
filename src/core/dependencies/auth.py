from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.exceptions import InvalidTokenError
from src.domain.entities.user import Role
from src.domain.services.auth.access_token import AccessTokenValidator
from src.domain.services.auth.signing_keys import SigningKeyProvider
from src.infrastructure.dependency_injection.auth_dependencies import get_signing_key_provider

__all__ = [
    "get_access_token_validator",
    "get_current_claims",
    "require_self_or_admin",
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


_bearer_scheme = HTTPBearer(auto_error=False)


def _auth_fail(detail: str = "Invalid token.") -> HTTPException:
    """Consistently shaped *401* UNAUTHORIZED response."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ---------------------------------------------------------------------------
# Public dependencies
# ---------------------------------------------------------------------------


def get_access_token_validator(
    keys: SigningKeyProvider = Depends(get_signing_key_provider),
) -> AccessTokenValidator:
    return AccessTokenValidator(keys)


def get_current_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer_scheme)],
    validator: Annotated[AccessTokenValidator, Depends(get_access_token_validator)],
) -> Dict[str, Any]:
    """Return the claims of the bearer access token.

    Authentication only: the token is checked offline (signature, expiry,
    issuer, audience) and no role check is made here.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _auth_fail("Not authenticated.")
    try:
        return validator.validate(credentials.credentials)
    except InvalidTokenError as exc:
        raise _auth_fail(exc.message) from exc


def require_self_or_admin(
    user_id: int,
    claims: Annotated[Dict[str, Any], Depends(get_current_claims)],
) -> Dict[str, Any]:
    """Allow the caller to act on ``user_id`` only as that user or as an Admin."""
    roles = claims.get("roles") or []
    if str(claims.get("sub")) != str(user_id) and Role.ADMIN.value not in roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to revoke tokens of another user.",
        )
    return claims
