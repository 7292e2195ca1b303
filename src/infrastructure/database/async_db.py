"""
Asynchronous Database Utilities Module

This module provides the asynchronous database utilities used by every
repository, built on SQLAlchemy's asyncio support and the asyncpg driver.

**Security Note**: Ensure that the database connection URL (DATABASE_URL) is configured for SSL/TLS when
connecting over untrusted networks to prevent data interception (OWASP A02:2021 - Cryptographic Failures).
asyncpg does not understand 'sslmode' as a query parameter; it is stripped from the URL here. Avoid logging
sensitive connection details to prevent information disclosure.

Key Components:
    - engine: The asynchronous SQLAlchemy engine for PostgreSQL connections.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - get_async_db: A FastAPI dependency yielding async sessions.
    - create_async_db_and_tables: Utility to create tables using the async engine.
"""

from __future__ import annotations

import urllib.parse as urlparse
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from structlog import get_logger

from src.core.config.settings import settings

logger = get_logger(__name__)


def _build_async_url() -> str:
    """
    Build the asynchronous database URL.

    Synchronous driver names are swapped for asyncpg and ``sslmode`` is dropped
    from the query string.

    Returns:
        str: The cleaned asynchronous database URL.
    """
    async_url = settings.DATABASE_URL
    for sync_driver in ("postgresql+psycopg2://", "postgresql://"):
        if async_url.startswith(sync_driver):
            async_url = "postgresql+asyncpg://" + async_url[len(sync_driver):]
            break
    parsed = urlparse.urlparse(async_url)
    query = dict(urlparse.parse_qsl(parsed.query))
    query.pop("sslmode", None)
    parsed = parsed._replace(query=urlparse.urlencode(query))
    return urlparse.urlunparse(parsed)


# The engine connects lazily, on the first checkout.
engine = create_async_engine(
    make_url(_build_async_url()),
    echo=settings.DEBUG,
    pool_size=settings.POSTGRES_POOL_SIZE,
    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
    pool_timeout=settings.POSTGRES_POOL_TIMEOUT,
    pool_pre_ping=True,
)

AsyncSessionFactory: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    It rolls back the transaction if an exception escapes the request and
    always closes the session.

    Yields:
        AsyncSession: An asynchronous database session for use in FastAPI routes.
    """
    async with AsyncSessionFactory() as session:
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:  # noqa: BLE001 - any error must trigger rollback
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise
        finally:
            await session.close()
            logger.debug("Async database session closed")


async def create_async_db_and_tables() -> None:
    """
    Create tables using the async engine.

    Meant for development and throwaway databases; deployed databases are
    migrated with Alembic.
    """
    logger.info("Creating async database tables")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Async database tables created", tables=sorted(SQLModel.metadata.tables.keys()))
