"""
Health Check API endpoints.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from ahp_service.config import settings
from ahp_service.api.schemas import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/",
    response_model=HealthResponse,
    summary="Health check",
    description="Check that the AHP engine can evaluate a reference problem.",
)
async def health_check():
    """
    Health check of the AHP engine.

    Runs a 2x2 reference matrix through the Priority Engine.
    """
    from ahp_service.modules.ahp_core import compute_priority

    services = {}

    try:
        result = compute_priority([[1.0, 3.0], [1.0 / 3.0, 1.0]], 2)
        services["ahp_engine"] = result.is_valid
    except Exception as e:
        logger.error(f"AHP engine health check failed: {e}")
        services["ahp_engine"] = False

    overall_status = "healthy" if all(services.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        services=services,
        version=settings.app_version,
    )


@router.get(
    "/live",
    summary="Liveness probe",
    description="Simple liveness check for Kubernetes.",
)
async def liveness():
    """Simple liveness probe - returns 200 if server is running."""
    return {"status": "alive"}


@router.get(
    "/ready",
    summary="Readiness probe",
    description="Readiness check for Kubernetes.",
)
async def readiness():
    """Readiness probe - the orchestrator must be available."""
    from ahp_service.modules.ahp_core import get_orchestrator

    try:
        get_orchestrator()
        return {"status": "ready"}
    except Exception as e:
        return {"status": "not_ready", "reason": str(e)}
