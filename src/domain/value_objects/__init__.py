"""Domain Value Objects for the session credential domain.

Value objects are immutable objects that describe domain concepts by their attributes
rather than their identity.
"""

from .auth_result import AuthErrorCode, AuthResult
from .jwt_token import AccessToken, RefreshTokenValue, TokenId

__all__ = [
    "AccessToken",
    "AuthErrorCode",
    "AuthResult",
    "RefreshTokenValue",
    "TokenId",
]
