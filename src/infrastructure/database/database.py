"""
Database health check.

Verifies connectivity at startup, retrying transient connection failures
with exponential backoff before giving up.
"""

import time

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from structlog import get_logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.infrastructure.database.async_db import engine

logger = get_logger(__name__)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(OperationalError),
    reraise=True,
)
async def _ping() -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def check_database_health() -> bool:
    """
    Performs a health check on the database connection.

    Returns:
        bool: True if database is healthy and responsive, False otherwise.
    """
    start_time = time.time()
    try:
        await _ping()
    except Exception as e:  # noqa: BLE001 - any failure means unhealthy
        logger.error(
            "database_health_check_failed",
            error=str(e),
            error_type=type(e).__name__,
            execution_time=time.time() - start_time,
        )
        return False

    logger.info("database_health_check_success", execution_time=time.time() - start_time)
    return True
