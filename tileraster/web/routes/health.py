"""Health check endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel

from tileraster.config import get_config
from tileraster.exceptions import ConfigurationError
from tileraster.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    checks: dict


@router.get("/live")
async def health_live():
    """Basic liveness check."""
    return {"status": "alive"}


@router.get("/ready", response_model=HealthResponse)
async def health_ready():
    """Readiness check with component status."""
    try:
        config = get_config()
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error("Health check failed", error=str(e))
        return HealthResponse(status="not_ready", checks={"config": f"error: {e}"})

    checks = {
        "config": "ready",
        "root_pyramid": f"depths 0-{config.root.max_depth}",
    }
    return HealthResponse(status="ready", checks=checks)
