"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 when the SQL event store is unreachable;
      the memory backend is always ready
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from chorehub.api.dependencies import get_services
from chorehub.services.composition import Services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "chorehub-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check(services: Services = Depends(get_services)):
    """Readiness probe, including database connectivity."""
    if services.db is None:
        return {"status": "ready", "checks": {"event_store": "memory"}}
    if not await services.db.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
