"""API package - FastAPI routes and dependencies."""
from .dependencies import get_feed_service
from .routers import (
    content_router,
    feed_router,
    filters_router,
    health_router,
    history_router,
    preferences_router,
    sources_router,
)

__all__ = [
    "content_router",
    "feed_router",
    "filters_router",
    "get_feed_service",
    "health_router",
    "history_router",
    "preferences_router",
    "sources_router",
]
