"""
PhotoStash Backend - Health Check Route
=========================================

What:  GET /health reports service status and database connectivity.
How:   Uptime counts from app.state.started_at, stamped by the lifespan.
Who:   Docker health checks and load balancer probes.

Status levels:
    - healthy:   database reachable
    - unhealthy: SELECT 1 failed
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from app import __version__
from app.database import Database
from app.dependencies import get_database
from app.schemas.photo import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    request: Request,
    database: Database = Depends(get_database),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.monotonic() - request.app.state.started_at, 2),
    )
