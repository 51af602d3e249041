"""
TurtleWatch Backend - Health Check Routes
==========================================

What:  GET /health for monitoring probes and a smoke test answered at both
       GET /test (root, as older clients call it) and GET /api/test.
How:   /health runs SELECT 1 through the shared engine; the smoke test
       never touches the database.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 200, status flag set)
"""

import logging
import time

from fastapi import APIRouter, Request

from turtlewatch import __version__
from turtlewatch.schemas.common import HealthResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get("/test", response_model=MessageResponse, include_in_schema=False)
@router.get("/api/test", response_model=MessageResponse, summary="Smoke test")
async def smoke_test() -> MessageResponse:
    return MessageResponse(message="Backend is working!")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Probe the database and report aggregate status and uptime.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        database = request.app.state.database
        if database is None:
            raise RuntimeError("database was not initialized at startup")
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
