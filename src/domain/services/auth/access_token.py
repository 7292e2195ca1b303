from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Sequence

from jwt import PyJWTError, decode as jwt_decode, encode as jwt_encode
from structlog import get_logger

from src.core.exceptions import ConfigurationError, InvalidTokenError
from src.domain.entities.user import User
from src.domain.interfaces.token_management import IAccessTokenIssuer
from src.domain.services.auth.signing_keys import SigningKeyProvider
from src.domain.value_objects.jwt_token import AccessToken, TokenId

logger = get_logger(__name__)


class AccessTokenIssuer(IAccessTokenIssuer):
    """Builds and signs access tokens with HMAC-SHA-256.

    The claim set carries everything a resource server needs to authorize a
    call without a database round trip:

    - ``sub``: user id (string)
    - ``email`` and ``unique_name``: the user's email
    - ``jti``: random UUID, shared with the paired refresh token record
    - ``first_name`` / ``last_name``
    - ``roles``: one entry per role membership
    - ``iss``, ``aud``, ``iat``, ``exp``

    Issuing has no side effects; apart from the ``jti`` and the timestamps the
    output is fully determined by its inputs.

    Attributes:
        keys (SigningKeyProvider): Secret, issuer, audience and lifetimes.
    """

    def __init__(self, keys: SigningKeyProvider):
        self.keys = keys

    def issue(self, user: User, roles: Sequence[str]) -> AccessToken:
        """Create a signed access token.

        Args:
            user (User): Identity the token asserts. Must be persisted (have an id).
            roles (Sequence[str]): Role names of the user.

        Returns:
            AccessToken: Encoded token with its jti, expiry and claims.

        Raises:
            ConfigurationError: If the token cannot be signed with the configured key.
        """
        token_id = TokenId.generate()
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(minutes=self.keys.access_token_lifetime_minutes)

        claims: Dict[str, Any] = {
            **self._identity_claims(user, token_id),
            "roles": [str(role) for role in roles],
            "iss": self.keys.issuer,
            "aud": self.keys.audience,
            "iat": issued_at,
            "exp": expires_at,
        }

        try:
            token = jwt_encode(claims, self.keys.key, algorithm=self.keys.algorithm)
        except PyJWTError as e:
            logger.error("Access token signing failed", error=str(e))
            raise ConfigurationError("Access token could not be signed with the configured key.") from e

        logger.debug(
            "Access token created",
            user_id=user.id,
            jti=token_id.mask_for_logging(),
            role_count=len(claims["roles"]),
        )
        return AccessToken(
            token=token,
            token_id=token_id,
            expires_at=expires_at,
            claims={
                **claims,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            },
        )

    @staticmethod
    def _identity_claims(user: User, token_id: TokenId) -> Dict[str, Any]:
        return {
            "sub": str(user.id),
            "email": user.email,
            "jti": str(token_id),
            "unique_name": user.email,
            "first_name": user.first_name or "",
            "last_name": user.last_name or "",
        }


class AccessTokenValidator:
    """Fully validates access tokens presented as bearer credentials.

    Unlike `ExpiredTokenClaimsExtractor` every registered claim is enforced:
    signature, algorithm, expiry, issuer and audience.
    """

    def __init__(self, keys: SigningKeyProvider):
        self.keys = keys

    def validate(self, token: str) -> Dict[str, Any]:
        """Return the claims of a valid, unexpired access token.

        Raises:
            InvalidTokenError: If any check fails.
        """
        if not token:
            raise InvalidTokenError()
        try:
            return jwt_decode(
                token,
                self.keys.key,
                algorithms=[self.keys.algorithm],
                audience=self.keys.audience,
                issuer=self.keys.issuer,
                options={"require": ["exp", "iat", "sub", "jti"]},
            )
        except PyJWTError as e:
            logger.info("Bearer token rejected", reason=type(e).__name__)
            raise InvalidTokenError() from e
