"""Structured outcome of the token lifecycle operations.

Business-rule failures never leave the lifecycle service as exceptions;
they are reported through `AuthResult` so the transport layer can map every
failure uniformly (bad request for registration, unauthorized otherwise).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class AuthErrorCode(str, Enum):
    """Machine-readable failure categories of the lifecycle operations."""

    DUPLICATE_USER = "duplicate_user"
    REGISTRATION_REJECTED = "registration_rejected"
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_NOT_FOUND = "user_not_found"
    INACTIVE_ACCOUNT = "inactive_account"
    INVALID_TOKEN = "invalid_token"
    USER_NOT_FOUND_OR_INACTIVE = "user_not_found_or_inactive"
    REFRESH_TOKEN_NOT_FOUND = "refresh_token_not_found"
    REFRESH_TOKEN_EXPIRED = "refresh_token_expired"
    REFRESH_TOKEN_REUSED = "refresh_token_reused"

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    AuthErrorCode.DUPLICATE_USER: "User with this email already exists.",
    AuthErrorCode.REGISTRATION_REJECTED: "Registration was rejected.",
    AuthErrorCode.INVALID_CREDENTIALS: "Invalid credentials.",
    AuthErrorCode.USER_NOT_FOUND: "User does not exist.",
    AuthErrorCode.INACTIVE_ACCOUNT: "User account is inactive.",
    AuthErrorCode.INVALID_TOKEN: "Invalid token.",
    AuthErrorCode.USER_NOT_FOUND_OR_INACTIVE: "User not found or inactive.",
    AuthErrorCode.REFRESH_TOKEN_NOT_FOUND: "Refresh token not found.",
    AuthErrorCode.REFRESH_TOKEN_EXPIRED: "Refresh token expired.",
    AuthErrorCode.REFRESH_TOKEN_REUSED: "Refresh token has been used or revoked.",
}


@dataclass(frozen=True)
class AuthResult:
    """Response of register, login and refresh.

    Attributes:
        success: Whether a new token pair was issued.
        access_token: Encoded access token, empty on failure.
        refresh_token: Opaque refresh token value, empty on failure.
        errors: Human-readable reasons on failure.
        error_code: Failure category, `None` on success.
    """

    success: bool
    access_token: str = ""
    refresh_token: str = ""
    errors: List[str] = field(default_factory=list)
    error_code: Optional[AuthErrorCode] = None

    @classmethod
    def succeeded(cls, access_token: str, refresh_token: str) -> "AuthResult":
        return cls(success=True, access_token=access_token, refresh_token=refresh_token)

    @classmethod
    def failed(
        cls, code: AuthErrorCode, errors: Optional[Sequence[str]] = None
    ) -> "AuthResult":
        return cls(
            success=False,
            errors=list(errors) if errors else [code.default_message],
            error_code=code,
        )
