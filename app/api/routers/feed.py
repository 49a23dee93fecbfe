"""
Feed API router.
Implements GET /v1/feed and POST /v1/feed/refresh.
"""
import logging

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_current_user_id, get_feed_service
from app.config import get_settings
from app.models.schemas import FeedResponse
from app.services.feed import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["feed"])


@router.get(
    "/feed",
    response_model=FeedResponse,
    summary="Get Feed",
    description="""
    Retrieve the user's feed built from their subscribed sources.

    The feed:
    - excludes watched, saved, dismissed and blocked content
    - blends recent content with older backlog per the user's backlog ratio
    - limits consecutive items from the same source
    - brings back a few "not now" items at random positions
    """,
    responses={
        200: {"description": "Feed returned successfully"},
        422: {"description": "Missing X-User-ID header"},
    },
)
async def get_feed(
    response: Response,
    user_id: str = Depends(get_current_user_id),
    feed_service: FeedService = Depends(get_feed_service),
) -> FeedResponse:
    """Get feed endpoint."""
    settings = get_settings()
    feed_response = await feed_service.get_feed(user_id)

    # Feeds are per-user; never let shared caches store them
    response.headers["Cache-Control"] = f"private, max-age={settings.FEED_CACHE_TTL_SEC}"
    response.headers["Vary"] = "X-User-ID"
    response.headers["X-Feed-Cache"] = "hit" if feed_response.cached else "miss"

    return feed_response


@router.post(
    "/feed/refresh",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Refresh Feed",
)
async def refresh_feed(
    user_id: str = Depends(get_current_user_id),
    feed_service: FeedService = Depends(get_feed_service),
) -> dict:
    """Discard the cached feed; the next GET regenerates it."""
    await feed_service.refresh_feed(user_id)
    return {"message": "Feed refreshed"}
