"""
Interaction service - records user interactions with content.
Every recorded interaction invalidates the user's cached feed.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from app.core.cache import CacheInterface, feed_cache_key
from app.core.exceptions import NotFoundError, ValidationError
from app.core.telemetry import INTERACTIONS_RECORDED
from app.models.interfaces import ContentRepository, InteractionRepository
from app.models.schemas import (
    ContentInteraction,
    FeedResponse,
    HistoryEntry,
    InteractionType,
)

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


class InteractionService:
    """Appends interaction facts to the log and reads them back."""

    def __init__(
        self,
        interaction_repo: InteractionRepository,
        content_repo: ContentRepository,
        feed_cache: Optional[CacheInterface[FeedResponse]] = None,
    ) -> None:
        self._interaction_repo = interaction_repo
        self._content_repo = content_repo
        self._feed_cache = feed_cache

    async def record_watch(
        self,
        user_id: str,
        content_id: str,
        watch_duration: Optional[float] = None,
        completion_rate: Optional[float] = None,
    ) -> ContentInteraction:
        return await self._record(
            user_id,
            content_id,
            InteractionType.WATCHED,
            watch_duration=watch_duration,
            completion_rate=completion_rate,
        )

    async def save_content(
        self, user_id: str, content_id: str, collection: Optional[str] = None
    ) -> ContentInteraction:
        return await self._record(
            user_id, content_id, InteractionType.SAVED, collection=collection
        )

    async def dismiss(
        self, user_id: str, content_id: str, reason: Optional[str] = None
    ) -> ContentInteraction:
        return await self._record(
            user_id, content_id, InteractionType.DISMISSED, dismiss_reason=reason
        )

    async def not_now(self, user_id: str, content_id: str) -> ContentInteraction:
        """Defer an item; it may come back in a later feed."""
        return await self._record(user_id, content_id, InteractionType.NOT_NOW)

    async def block(self, user_id: str, content_id: str) -> ContentInteraction:
        return await self._record(user_id, content_id, InteractionType.BLOCKED)

    async def get_history(
        self,
        user_id: str,
        interaction_type: Optional[InteractionType] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> List[HistoryEntry]:
        """
        Interactions newest first, optionally of a single type.

        Raises:
            ValidationError: If limit is not positive
        """
        if limit < 1:
            raise ValidationError("limit must be positive", {"limit": limit})

        interactions = await self._interaction_repo.list_interactions(user_id)
        if interaction_type is not None:
            interactions = [i for i in interactions if i.type == interaction_type]
        return await self._with_content(interactions[:limit])

    async def get_saved(
        self, user_id: str, collection: Optional[str] = None
    ) -> List[HistoryEntry]:
        """Saved items newest first, one entry per item, optionally by collection."""
        interactions = await self._interaction_repo.list_interactions(user_id)

        # Newest first, so the first SAVED fact per item is its current one
        latest: Dict[str, ContentInteraction] = {}
        for interaction in interactions:
            if interaction.type == InteractionType.SAVED:
                latest.setdefault(interaction.content_id, interaction)

        saved = [
            i for i in latest.values()
            if collection is None or i.collection == collection
        ]
        return await self._with_content(saved)

    async def clear_interactions(self, user_id: str) -> int:
        removed = await self._interaction_repo.clear(user_id)
        logger.info(f"Interactions cleared: user={user_id}, removed={removed}")
        self._invalidate_feed(user_id)
        return removed

    async def _record(
        self,
        user_id: str,
        content_id: str,
        interaction_type: InteractionType,
        **context: Any,
    ) -> ContentInteraction:
        """
        Raises:
            NotFoundError: If the content item is unknown
        """
        if await self._content_repo.get_content(content_id) is None:
            raise NotFoundError("Content", content_id)

        interaction = ContentInteraction(
            id=uuid.uuid4().hex,
            user_id=user_id,
            content_id=content_id,
            type=interaction_type,
            **context,
        )
        await self._interaction_repo.add_interaction(interaction)
        INTERACTIONS_RECORDED.labels(type=interaction_type.value).inc()

        logger.info(
            f"Recorded {interaction_type.value} interaction: "
            f"user={user_id}, content={content_id}"
        )
        self._invalidate_feed(user_id)
        return interaction

    async def _with_content(
        self, interactions: List[ContentInteraction]
    ) -> List[HistoryEntry]:
        return [
            HistoryEntry(
                interaction=interaction,
                content=await self._content_repo.get_content(interaction.content_id),
            )
            for interaction in interactions
        ]

    def _invalidate_feed(self, user_id: str) -> None:
        if self._feed_cache is not None:
            self._feed_cache.delete(feed_cache_key(user_id))
