"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the database is unreachable or the
      lookup tables were not loaded (readiness)
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from pokebin.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pokebin-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe: database connectivity and lookup tables."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    tables_ok = getattr(request.app.state, "set_builder", None) is not None
    if not (db_ok and tables_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": {
                    "database": "healthy" if db_ok else "unavailable",
                    "lookup_tables": "loaded" if tables_ok else "missing",
                },
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "lookup_tables": "loaded"},
    }
