"""
DevCamper Backend — Health Check Route
========================================

What:  Liveness/readiness probe for Docker health checks and load balancers.
How:   Pings MongoDB through the connector stored on app.state.

Status levels:
    - healthy:   database reachable
    - unhealthy: no connector yet, or the ping failed
    Both answer HTTP 200; the body carries the verdict.
"""

import logging
import time

from fastapi import APIRouter, Request

from devcamper import __version__
from devcamper.database import get_connector
from devcamper.schemas.bootcamp import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: set once when the module loads
_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> HealthResponse:
    connector = get_connector(request.app.state)
    db_ok = connector is not None and await connector.ping()

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
