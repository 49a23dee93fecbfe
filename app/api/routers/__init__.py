"""API routers package."""
from .content import router as content_router
from .feed import router as feed_router
from .filters import router as filters_router
from .health import router as health_router
from .history import router as history_router
from .preferences import router as preferences_router
from .sources import router as sources_router

__all__ = [
    "content_router",
    "feed_router",
    "filters_router",
    "health_router",
    "history_router",
    "preferences_router",
    "sources_router",
]
