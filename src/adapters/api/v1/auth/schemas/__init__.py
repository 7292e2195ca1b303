"""Authentication API schemas package.

Request models, the shared token pair response and the acknowledgment
envelope, re-exported so routes and tests import them from one place.
"""

# flake8: noqa: F401 - re-export

from .misc import MessageResponse
from .requests import LoginRequest, RefreshTokenRequest, RegisterRequest
from .responses.auth import AuthResponse

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "AuthResponse",
    "MessageResponse",
]
