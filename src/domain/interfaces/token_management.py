"""Token management service interfaces.

This module defines the contracts of the token lifecycle:

- Access Token Issuer: builds and signs access tokens.
- Expired-Token Claims Extractor: recovers claims from a signed but expired
  access token during refresh.
- Token Lifecycle Service: register, login, refresh and revoke flows.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from src.domain.entities.user import User
from src.domain.value_objects.auth_result import AuthResult
from src.domain.value_objects.jwt_token import AccessToken


class IAccessTokenIssuer(ABC):
    """Interface for building and signing access tokens."""

    @abstractmethod
    def issue(self, user: User, roles: Sequence[str]) -> AccessToken:
        """Creates a signed access token for ``user`` carrying ``roles``.

        Args:
            user: The identity the token asserts.
            roles: Role names, one claim entry per role.

        Returns:
            An `AccessToken` value object with a fresh ``jti``.
        """
        raise NotImplementedError


class IExpiredTokenClaimsExtractor(ABC):
    """Interface for reading claims out of an expired access token.

    Implementations verify the signature and algorithm but not the lifetime.
    The result must never be used to authorize a request; its only consumer
    is the refresh flow, which pairs it with a stored refresh token.
    """

    @abstractmethod
    def extract_claims(self, token: str) -> Dict[str, Any]:
        """Returns the claim set of ``token``.

        Raises:
            InvalidTokenError: If the token is malformed, badly signed, or
                signed with any algorithm other than HMAC-SHA-256.
        """
        raise NotImplementedError


class ITokenLifecycleService(ABC):
    """Interface for the session credential lifecycle.

    Business-rule failures are reported through `AuthResult`; only storage
    and configuration faults are raised.
    """

    @abstractmethod
    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> AuthResult:
        """Creates an account and returns its first token pair."""
        raise NotImplementedError

    @abstractmethod
    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticates and returns a new token pair, revoking every
        previously live refresh token of the user."""
        raise NotImplementedError

    @abstractmethod
    async def refresh(self, access_token: str, refresh_token: str) -> AuthResult:
        """Exchanges a refresh token exactly once for a new token pair."""
        raise NotImplementedError

    @abstractmethod
    async def revoke(self, user_id: int) -> bool:
        """Revokes every live refresh token of the user."""
        raise NotImplementedError
