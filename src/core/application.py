"""FastAPI application factory."""

from fastapi import FastAPI

from src.adapters.api.v1 import api_router
from src.core.config.settings import settings
from src.core.handlers import register_exception_handlers
from src.core.lifecycle import create_lifespan_manager
from src.core.middleware import configure_middleware

API_V1_PREFIX = "/api/v1"


def create_application() -> FastAPI:
    """Builds the SessionGuard API.

    The interactive docs and the OpenAPI document are published only when
    ``DEBUG`` is on. Each call returns a fresh app, so tests can install
    their own dependency overrides without leaking into one another.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Session credential service: JWT access tokens with rotating refresh tokens.",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=create_lifespan_manager(),
    )

    configure_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix=API_V1_PREFIX)

    return app
