"""Response Pydantic model shared by register, login and refresh."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from src.domain.value_objects.auth_result import AuthResult


class AuthResponse(BaseModel):
    """Token pair envelope returned on success and on failure.

    On failure both tokens are empty strings and ``errors`` carries the
    reasons.
    """

    token: str = ""
    refresh_token: str = ""
    success: bool
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            token=result.access_token,
            refresh_token=result.refresh_token,
            success=result.success,
            errors=list(result.errors),
        )
