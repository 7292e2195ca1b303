"""HTTP process settings: identity of the service, server binding, logging, CORS."""

from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Settings that shape the HTTP process rather than the token lifecycle.

    ``DEBUG`` exposes the OpenAPI document and the interactive docs; keep it
    off outside development. ``ALLOWED_ORIGINS`` accepts a comma separated
    list and should name trusted front ends only.
    """

    PROJECT_NAME: str = "sessionguard"
    VERSION: str = "0.1.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(default=8000, ge=1, le=65535)

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    ALLOWED_ORIGINS: Union[str, List[str]] = Field(default="http://localhost:8000")

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v
