from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter
from pydantic import BaseModel

from src.core.config.settings import settings
from src.core.logging import logger
from src.infrastructure.database.database import check_database_health

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    env: str
    services: Dict[str, Any]
    timestamp: datetime


async def check_database_health_async() -> Dict[str, Any]:
    """Check database connection health."""
    try:
        is_healthy = await check_database_health()
        return {"status": "healthy" if is_healthy else "unhealthy"}
    except Exception as e:  # noqa: BLE001 - reported, not raised
        logger.error("database_health_check_failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}


@router.get("", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint that verifies the database dependency.
    """
    db_health = await check_database_health_async()
    overall_status = "ok" if db_health["status"] == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        env=settings.APP_ENV,
        services={"database": db_health},
        timestamp=datetime.now(timezone.utc),
    )
