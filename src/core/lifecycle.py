"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config.settings import settings
from src.core.logging import logger
from src.infrastructure.database import (
    AsyncSessionFactory,
    check_database_health,
    create_async_db_and_tables,
    engine,
)
from src.infrastructure.dependency_injection.auth_dependencies import get_signing_key_provider
from src.infrastructure.repositories.user_repository import UserRepository
from src.infrastructure.services.seeding import seed_initial_data
from src.infrastructure.services.user_manager import UserManager


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager that handles startup and shutdown events.

        Startup builds the signing key provider (failing fast on a bad
        configuration), checks the database, creates tables outside
        production and seeds the administrator account.

        Args:
            app (FastAPI): The FastAPI application instance

        Raises:
            RuntimeError: If database is unavailable during startup
        """
        # Startup
        get_signing_key_provider()

        if not await check_database_health():
            logger.error("database_unavailable_on_startup")
            raise RuntimeError("Database unavailable")

        if settings.APP_ENV != "production":
            await create_async_db_and_tables()

        async with AsyncSessionFactory() as session:
            await seed_initial_data(UserManager(UserRepository(session)))

        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        # Shutdown
        await engine.dispose()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
