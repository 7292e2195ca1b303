"""Authentication and token lifecycle settings.
"""

import logging

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines the signing material and lifetimes used to issue session credentials.

    Access tokens are signed with HMAC-SHA-256 over ``JWT_SECRET``; refresh
    tokens are opaque random values persisted server side. Every value here is
    read once at startup and never mutated afterwards.

    Security Note:
        - ``JWT_SECRET`` must be a high-entropy value of at least 32 bytes and must
          never be logged or committed (OWASP A02:2021 - Cryptographic Failures).
        - Rotating ``JWT_SECRET`` invalidates every outstanding access token, which
          in turn makes every outstanding refresh token unusable because the
          refresh flow requires a correctly signed (possibly expired) access token.
    """

    # JWT settings
    JWT_SECRET: SecretStr = SecretStr("")
    JWT_ISSUER: str = "https://api.example.com"
    JWT_AUDIENCE: str = "sessionguard:api:v1"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=15, gt=0)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, gt=0)

    # Role assigned to every self-registered account
    DEFAULT_USER_ROLE: str = "User"

    # When False, login answers "Invalid credentials." for unknown, inactive and
    # wrong-password attempts alike so the response cannot be used to enumerate accounts.
    AUTH_DISTINGUISH_LOGIN_ERRORS: bool = False

    # When True, presenting a used or revoked refresh token also revokes every
    # live refresh token of that user.
    AUTH_REVOKE_FAMILY_ON_REUSE: bool = False

    # Optional administrator account created at startup
    SEED_ADMIN_EMAIL: str = ""
    SEED_ADMIN_PASSWORD: SecretStr = SecretStr("")

    @model_validator(mode="after")
    def _validate_signing_configuration(self) -> "AuthSettings":
        """Refuses to start without a signing secret.

        Lifetimes are already bounded by the ``gt=0`` field constraints.

        Raises:
            ValueError: If ``JWT_SECRET`` is empty.
        """
        if not self.JWT_SECRET.get_secret_value():
            error_msg = (
                "JWT_SECRET not found. Please provide JWT_SECRET via environment "
                "variables or the .env file."
            )
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.info("JWT signing configuration validated successfully.")
        return self
