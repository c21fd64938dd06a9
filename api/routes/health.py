"""
Health check endpoints.

Provides endpoints for monitoring and load balancer health checks.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_dispatcher
from core.config import settings
from manager.dispatcher import RequestDispatcher


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Basic health check.

    Returns 200 if the service is running.
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }


@router.get("/ready")
async def readiness_check(
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
) -> dict:
    """
    Readiness check.

    Returns 200 once the store is wired up, with the current item count.
    """
    return {
        "status": "ready",
        "checks": {
            "storage": settings.storage_backend,
            "items": len(dispatcher.store),
        },
    }
