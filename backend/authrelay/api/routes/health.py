"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until a session token has been issued (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from authrelay.services.feed_service import FeedService, get_feed_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "authrelay-api",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check(service: FeedService = Depends(get_feed_service)):
    """Readiness probe: requires an issued session token."""
    if not service.tokens.has_session:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "no_session",
            },
        )
    return {"status": "ready", "checks": {"session": "issued"}}
