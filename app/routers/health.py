# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SettingsDep, StoreDep

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    success: bool = True
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    success: bool
    status: str
    storage: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status without touching storage or upstream.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version="1.0.0",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: StoreDep, app_settings: SettingsDep):
    """
    Readiness check endpoint.

    Makes one round trip to the history table.
    """
    try:
        await store.ping(app_settings.HISTORY_TABLE)
        storage = "healthy"
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        storage = f"unhealthy: {str(e)[:50]}"

    healthy = storage == "healthy"
    return ReadinessResponse(
        success=healthy,
        status="ready" if healthy else "degraded",
        storage=storage,
        timestamp=_now(),
    )
