"""Re-export response models for authentication endpoints."""

# flake8: noqa: F401 - re-export

from .auth import AuthResponse

__all__ = ["AuthResponse"]
