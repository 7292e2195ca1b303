"""Infrastructure Services.

Concrete implementations of the domain's service interfaces.
"""

from .user_manager import UserManager

__all__ = ["UserManager"]
