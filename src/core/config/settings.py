"""Process-wide settings for SessionGuard.

`Settings` merges the application, database and auth sections. A single
instance, ``settings``, is built when this module is first imported; the
signing material it carries is read once and never reloaded.

The env file is chosen from ``APP_ENV``:

    development -> .env
    test        -> .env.test
    staging     -> .env.staging
    production  -> .env.production

Variables already present in the process environment win over the file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import model_validator
from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logging.getLogger("passlib").setLevel(logging.ERROR)

ENV_FILES = {
    "development": ".env",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}

REQUIRED_FIELDS = ("PROJECT_NAME", "DATABASE_URL", "JWT_ISSUER", "JWT_AUDIENCE")


class Settings(AppSettings, DatabaseSettings, AuthSettings):
    """All configuration of the service in one object.

    Secrets (``JWT_SECRET``, ``POSTGRES_PASSWORD``, ``SEED_ADMIN_PASSWORD``)
    are `SecretStr` and render masked in reprs and logs.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @model_validator(mode="after")
    def _require_identity_of_service(self) -> "Settings":
        missing = [name for name in REQUIRED_FIELDS if not getattr(self, name, None)]
        if missing:
            error_msg = f"Missing required environment variables: {', '.join(missing)}"
            logger.error(error_msg)
            raise ValueError(error_msg)
        return self


def _env_file_for(app_env: str) -> Optional[str]:
    """Returns the env file to load for ``app_env``, or None when none exists."""
    candidate = ENV_FILES.get(app_env, ".env")
    if Path(candidate).exists():
        return candidate
    if Path(".env").exists():
        return ".env"
    return None


def create_settings() -> Settings:
    app_env = os.getenv("APP_ENV", "development")
    env_file = _env_file_for(app_env)
    if env_file is None:
        logger.warning("No env file found, reading the process environment only (APP_ENV=%s)", app_env)
    else:
        logger.info("Loading configuration from %s (APP_ENV=%s)", env_file, app_env)
    return Settings(_env_file=env_file)


settings = create_settings()

# Password rules applied by the identity store on account creation.
PASSWORD_MIN_LENGTH = 8
PASSWORD_REQUIRE_UPPERCASE = True
PASSWORD_REQUIRE_LOWERCASE = True
PASSWORD_REQUIRE_DIGIT = True
PASSWORD_REQUIRE_SPECIAL_CHAR = True

# Lowered in test runs; bcrypt accepts 4 to 31.
BCRYPT_WORK_FACTOR = int(os.getenv("BCRYPT_WORK_FACTOR", "12"))
