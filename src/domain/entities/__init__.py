"""Export the domain entities persisted by SessionGuard.

This module provides a clean interface for importing the User, UserRole and
RefreshToken models.
"""

from .refresh_token import RefreshToken
from .user import Role, User, UserRole

__all__ = ["User", "UserRole", "Role", "RefreshToken"]
