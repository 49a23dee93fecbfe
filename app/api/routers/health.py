"""
Health check router for observability.
"""
from fastapi import APIRouter

from app.api.dependencies import get_feed_cache
from app.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check() -> dict:
    """
    Readiness check for Kubernetes.
    Reports feed cache occupancy and the active feed defaults.
    """
    settings = get_settings()

    return {
        "status": "ready",
        "feed_cache": {
            "entries": len(get_feed_cache().keys()),
            "ttl_seconds": settings.FEED_CACHE_TTL_SEC,
        },
        "feed_defaults": {
            "backlog_ratio": settings.DEFAULT_BACKLOG_RATIO,
            "max_consecutive_from_source": settings.DEFAULT_MAX_CONSECUTIVE_FROM_SOURCE,
            "max_items": settings.MAX_ITEMS_IN_FEED,
        },
    }
