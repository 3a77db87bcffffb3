"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import structlog
from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

logger = structlog.get_logger()

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    from productlists.infrastructure.config import settings

    return HealthResponse(
        status="healthy",
        service="productlists-api",
        version=settings.api_version,
    )


@router.get("/ready")
def readiness_check() -> dict[str, str]:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status, "unavailable" when the database cannot be reached.
    """
    from productlists.infrastructure.database import engine

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database not reachable", error=str(e))
        return {"status": "unavailable"}
    return {"status": "ready"}
