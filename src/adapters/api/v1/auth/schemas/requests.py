"""Request payload Pydantic models for authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Payload expected by ``POST /auth/register``.

    Password strength is checked by the identity store so that every unmet
    rule is reported in the response, not by this model.
    """

    email: EmailStr = Field(..., examples=["alice@example.com"])
    password: str = Field(..., min_length=1, examples=["P@ssw0rd!"])
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Alice"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Liddell"])


class LoginRequest(BaseModel):
    """Payload expected by ``POST /auth/login``."""

    email: EmailStr = Field(..., examples=["alice@example.com"])
    password: str = Field(..., min_length=1, examples=["P@ssw0rd!"])


class RefreshTokenRequest(BaseModel):
    """Payload expected by ``POST /auth/refresh-token``.

    ``token`` is the (usually expired) access token issued together with
    ``refresh_token``.
    """

    token: str = Field(..., min_length=1, examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."])
    refresh_token: str = Field(..., min_length=1, examples=["q4Rk0x...=="])
