"""PostgreSQL connection settings."""

import logging

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """Where users, role memberships and refresh tokens are stored.

    ``DATABASE_URL`` wins when set. Otherwise it is assembled from the
    ``POSTGRES_*`` parts with the asyncpg driver. Every lifecycle operation
    holds a pooled connection for one short transaction, so the pool size
    bounds request concurrency rather than throughput.
    """

    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("")
    POSTGRES_DB: str = "sessionguard"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = Field(ge=1, le=65535, default=5432)
    POSTGRES_POOL_SIZE: int = Field(ge=1, default=10)
    POSTGRES_MAX_OVERFLOW: int = Field(ge=0, default=20)
    POSTGRES_POOL_TIMEOUT: float = Field(ge=1.0, default=5.0)
    DATABASE_URL: str = ""

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _assemble_url(cls, v, info: ValidationInfo) -> str:
        if v:
            return v

        parts = info.data
        password = parts.get("POSTGRES_PASSWORD")
        secret = password.get_secret_value() if password else ""
        if not secret:
            logger.warning("POSTGRES_PASSWORD is empty; connecting without a password.")

        return (
            f"postgresql+asyncpg://{parts.get('POSTGRES_USER')}:{secret}"
            f"@{parts.get('POSTGRES_HOST')}:{parts.get('POSTGRES_PORT')}"
            f"/{parts.get('POSTGRES_DB')}"
        )
