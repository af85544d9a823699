"""
Showcase Backend — Health Check Route
=====================================

What:  Health check endpoint for monitoring and load balancers.
Why:   Load balancers route away from instances that cannot serve requests.
How:   Pings MongoDB and the Cloudinary Admin API and aggregates the result.
Who:   Called by container health checks and uptime monitors.

Status levels:
    - healthy:   Database and media host reachable (HTTP 200)
    - degraded:  Media host unreachable or unconfigured; listing still works (HTTP 200)
    - unhealthy: Database unreachable; nothing works (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from app import __version__
from app.dependencies import get_media_uploader, get_record_store
from app.schemas.upload import HealthResponse
from app.services.media_base import MediaUploader
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the backend and its dependencies.",
)
async def health_check(
    response: Response,
    store: RecordStore = Depends(get_record_store),
    uploader: MediaUploader = Depends(get_media_uploader),
) -> HealthResponse:
    database = "connected"
    media = "available"
    overall = "healthy"

    if not await store.ping():
        database = "disconnected"
        overall = "unhealthy"

    if not await uploader.health_check():
        media = "unavailable"
        if overall != "unhealthy":
            overall = "degraded"

    if overall == "unhealthy":
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=database,
        media=media,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
