"""
Lokasi API - Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the location store and reports the aggregate status.
Who:   Called by container health checks, load balancers and uptime monitors.

Status levels:
    - healthy:   Store answers a ping (HTTP 200)
    - unhealthy: Store not connected or not answering (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from lokasi import __version__
from lokasi.dependencies import get_location_store
from lokasi.schemas.location import HealthResponse
from lokasi.services.location_store import LocationStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(store: LocationStore = Depends(get_location_store)):
    """Probe the store with SELECT 1 and report uptime."""
    connected = await store.ping()
    if not connected:
        logger.warning("Health check: location store unreachable")

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if connected:
        return body
    return JSONResponse(status_code=503, content=body.model_dump())
