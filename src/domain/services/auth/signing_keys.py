"""Signing key provider for access tokens."""

from dataclasses import dataclass, field
from typing import ClassVar

from pydantic import SecretStr
from structlog import get_logger

from src.core.exceptions import ConfigurationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class SigningKeyProvider:
    """Holds the symmetric secret and signing parameters.

    Built once at startup and shared read-only by every request. The secret is
    kept as a `SecretStr` so it never shows up in reprs or logs.

    Attributes:
        secret: Raw HMAC key material.
        issuer: Value of the ``iss`` claim.
        audience: Value of the ``aud`` claim.
        access_token_lifetime_minutes: Access token lifetime.
        refresh_token_lifetime_days: Refresh token lifetime.

    Raises:
        ConfigurationError: If the secret is empty or a lifetime is not positive.
    """

    ALGORITHM: ClassVar[str] = "HS256"

    secret: SecretStr = field(repr=False)
    issuer: str
    audience: str
    access_token_lifetime_minutes: int
    refresh_token_lifetime_days: int

    def __post_init__(self):
        if not self.secret.get_secret_value():
            raise ConfigurationError("JWT signing secret is not configured.")
        if self.access_token_lifetime_minutes <= 0:
            raise ConfigurationError("Access token lifetime must be a positive number of minutes.")
        if self.refresh_token_lifetime_days <= 0:
            raise ConfigurationError("Refresh token lifetime must be a positive number of days.")

    @property
    def algorithm(self) -> str:
        return self.ALGORITHM

    @property
    def key(self) -> str:
        """The raw secret, for the signing library only."""
        return self.secret.get_secret_value()

    @classmethod
    def from_settings(cls, settings) -> "SigningKeyProvider":
        """Reads the signing configuration from application settings."""
        provider = cls(
            secret=settings.JWT_SECRET,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            access_token_lifetime_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_token_lifetime_days=settings.REFRESH_TOKEN_EXPIRE_DAYS,
        )
        logger.info(
            "Signing key provider initialized",
            algorithm=cls.ALGORITHM,
            issuer=provider.issuer,
            audience=provider.audience,
            access_token_minutes=provider.access_token_lifetime_minutes,
            refresh_token_days=provider.refresh_token_lifetime_days,
        )
        return provider
