"""
Source service - manages a user's subscribed sources.
Subscribing through a provider happens in ingestion; this service lists,
mutes/unmutes and removes existing subscriptions.
"""
import logging
from typing import List, Optional

from app.core.cache import CacheInterface, feed_cache_key
from app.core.exceptions import NotFoundError
from app.models.interfaces import SourceRepository
from app.models.schemas import ContentSource, FeedResponse, UpdateSourceRequest

logger = logging.getLogger(__name__)


class SourceService:
    """Reads and updates subscriptions."""

    def __init__(
        self,
        source_repo: SourceRepository,
        feed_cache: Optional[CacheInterface[FeedResponse]] = None,
    ) -> None:
        self._source_repo = source_repo
        self._feed_cache = feed_cache

    async def list_sources(self, user_id: str) -> List[ContentSource]:
        """All subscriptions, muted ones included."""
        return await self._source_repo.list_sources(user_id, include_muted=True)

    async def get_source(self, user_id: str, source_id: str) -> ContentSource:
        """
        Raises:
            NotFoundError: If the user has no such source
        """
        source = await self._source_repo.get_source(user_id, source_id)
        if source is None:
            raise NotFoundError("Content source", source_id)
        return source

    async def update_source(
        self, user_id: str, source_id: str, update: UpdateSourceRequest
    ) -> ContentSource:
        """
        Apply a partial update (mute/unmute, always-safe flag).

        Raises:
            NotFoundError: If the user has no such source
        """
        source = await self.get_source(user_id, source_id)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        logger.info(
            f"Updating source: user={user_id}, source={source_id}, "
            f"fields={sorted(changes)}"
        )

        updated = source.model_copy(update=changes)
        await self._source_repo.update_source(updated)
        self._invalidate_feed(user_id)
        return updated

    async def remove_source(self, user_id: str, source_id: str) -> None:
        """
        Unsubscribe. Catalog items stay; they just stop reaching the feed.

        Raises:
            NotFoundError: If the user has no such source
        """
        removed = await self._source_repo.remove_source(user_id, source_id)
        if not removed:
            raise NotFoundError("Content source", source_id)

        logger.info(f"Source removed: user={user_id}, source={source_id}")
        self._invalidate_feed(user_id)

    def _invalidate_feed(self, user_id: str) -> None:
        if self._feed_cache is not None:
            self._feed_cache.delete(feed_cache_key(user_id))
