"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 while the process is up and lists served API versions
    - GET /api/health/ready returns 503 when the engine is missing or the database is unreachable
    - Probes are anonymous and are not wrapped in the APIResponse envelope
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from villa_api import __version__
from villa_api.core.domain_types import ApiVersion
from villa_api.core.errors import DatabaseError
from villa_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {
        "status": "healthy",
        "service": "villa-api",
        "version": __version__,
        "apiVersions": [v.value for v in ApiVersion],
    }


@router.get("/ready")
async def readiness():
    # Looked up per call: the lifespan (or a test) replaces the manager.
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_unavailable")
    try:
        latency_ms = await manager.ping()
    except (DatabaseError, OSError) as e:
        logger.warning(f"Readiness check failed: {e}", extra={"path": "/api/health/ready"})
        return _not_ready("database_unavailable")
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "latencyMs": round(latency_ms, 2),
    }
