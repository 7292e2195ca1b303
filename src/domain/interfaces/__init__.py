"""Domain Interfaces for dependency inversion.

These interfaces define contracts that infrastructure and application
layers must implement:

- Repositories: user and refresh token persistence
- Services: the identity store collaborator
- Token Management: access token issuing, expired-token claims and the
  token lifecycle itself
"""

from .repositories import IRefreshTokenRepository, IUserRepository
from .services import IdentityResult, IUserManager
from .token_management import (
    IAccessTokenIssuer,
    IExpiredTokenClaimsExtractor,
    ITokenLifecycleService,
)

__all__ = [
    "IUserRepository",
    "IRefreshTokenRepository",
    "IdentityResult",
    "IUserManager",
    "IAccessTokenIssuer",
    "IExpiredTokenClaimsExtractor",
    "ITokenLifecycleService",
]
