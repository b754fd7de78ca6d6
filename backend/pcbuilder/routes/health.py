"""
PC Builder Catalog API — Liveness & Health Check Routes
========================================================

What:  GET / (liveness) and GET /health (dependency check).
Why:   The hosting platform pings / to see that the process answers;
       monitoring uses /health to see that the database is reachable too.

Status levels:
    - healthy:   database answers SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from pcbuilder import __version__
from pcbuilder.schemas.catalog import HealthResponse, LivenessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_model=LivenessResponse, summary="Liveness check")
async def liveness() -> LivenessResponse:
    return LivenessResponse(success=True)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the service and its database. "
        "Used by container health checks and load balancers."
    ),
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Probe the database with a lightweight query and report aggregate status.

    The probe goes through `Database.ping()`, the same engine the request
    sessions use.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await request.app.state.db.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
