"""
Feed service - main business logic orchestrator.
Loads a user's sources, content, filters, preferences and interactions,
runs the feed generator and caches the result.
"""
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from app.config.settings import get_settings
from app.core.cache import CacheInterface, feed_cache_key
from app.core.telemetry import FEED_GENERATION_SECONDS, FEED_REQUESTS, FEED_SIZE
from app.models.interfaces import (
    ContentRepository,
    InteractionRepository,
    SourceRepository,
)
from app.models.schemas import FeedItem, FeedResponse
from app.services.filtering import FilterEngine, build_filter_rules
from app.services.filters import FilterService
from app.services.generator import FeedGenerator, resolve_interaction_state
from app.services.preferences import PreferencesService

logger = logging.getLogger(__name__)


class FeedService:
    """
    Main feed service orchestrating feed generation.

    Responsibilities:
    - Serve cached feeds
    - Load user data from repositories
    - Apply the user's filters
    - Run the feed generator and attach interaction state
    """

    def __init__(
            self,
            source_repo: SourceRepository,
            content_repo: ContentRepository,
            interaction_repo: InteractionRepository,
            preferences_service: PreferencesService,
            filter_service: FilterService,
            feed_generator: FeedGenerator,
            feed_cache: CacheInterface[FeedResponse],
    ) -> None:
        """
        Initialize feed service with dependencies.

        Args:
            source_repo: Repository for subscribed sources
            content_repo: Repository for the content catalog
            interaction_repo: Repository for the interaction log
            preferences_service: Service resolving feed preferences
            filter_service: Service resolving filter configuration
            feed_generator: Core feed generation pipeline
            feed_cache: Cache for generated feeds
        """
        self._source_repo = source_repo
        self._content_repo = content_repo
        self._interaction_repo = interaction_repo
        self._preferences_service = preferences_service
        self._filter_service = filter_service
        self._feed_generator = feed_generator
        self._feed_cache = feed_cache

    async def get_feed(
            self,
            user_id: str,
            now: Optional[datetime] = None,
    ) -> FeedResponse:
        """
        Get the user's feed, generating it when not cached.

        Args:
            user_id: User identifier
            now: Generation time (defaults to current UTC time)

        Returns:
            FeedResponse with ordered items
        """
        cached = self._feed_cache.get(feed_cache_key(user_id))
        if cached is not None:
            FEED_REQUESTS.labels(outcome="hit").inc()
            logger.info(f"Feed cache hit: user={user_id}, items={cached.total}")
            # generated_at stays the time the feed was built
            return cached.model_copy(update={"cached": True})

        FEED_REQUESTS.labels(outcome="miss").inc()
        start_time = time.perf_counter()
        now = now or datetime.now(timezone.utc)
        items = await self._generate(user_id, now)
        elapsed = time.perf_counter() - start_time

        FEED_GENERATION_SECONDS.observe(elapsed)
        FEED_SIZE.observe(len(items))

        feed_response = FeedResponse(
            items=items, total=len(items), generated_at=now, cached=False
        )
        settings = get_settings()
        self._feed_cache.set(
            feed_cache_key(user_id), feed_response, ttl_seconds=settings.FEED_CACHE_TTL_SEC
        )

        logger.info(
            f"Feed generated: user={user_id}, items={len(items)}, "
            f"elapsed_ms={elapsed * 1000:.2f}"
        )
        return feed_response

    async def refresh_feed(self, user_id: str) -> None:
        """Drop the cached feed so the next request regenerates it."""
        logger.info(f"Feed refresh requested: user={user_id}")
        self._feed_cache.delete(feed_cache_key(user_id))

    async def _generate(self, user_id: str, now: datetime) -> List[FeedItem]:
        settings = get_settings()

        sources = await self._source_repo.list_sources(user_id)
        if not sources:
            logger.info(f"No sources configured: user={user_id}")
            return []

        # Fetch extra items so filtering still leaves a full feed
        content = await self._content_repo.list_content(
            [source.source_key for source in sources],
            limit=settings.MAX_ITEMS_IN_FEED * 2,
        )
        if not content:
            logger.info(f"No content available: user={user_id}")
            return []

        filter_config = await self._filter_service.get_filter_configuration(user_id)
        filter_engine = FilterEngine(build_filter_rules(filter_config))
        filtered = filter_engine.evaluate_batch(content)
        logger.info(
            f"Content filtered: user={user_id}, rules={len(filter_engine.rules)}, "
            f"total={len(content)}, kept={len(filtered)}"
        )

        preferences = await self._preferences_service.get_preferences(user_id)
        interactions = await self._interaction_repo.list_interactions(user_id)

        feed = self._feed_generator.generate(
            sources=sources,
            all_content=filtered,
            preferences=preferences,
            interactions=interactions,
            now=now,
        )

        # Truncating keeps positions contiguous from zero
        return [
            item.model_copy(
                update={
                    "interaction_state": resolve_interaction_state(
                        item.content.id, interactions
                    )
                }
            )
            for item in feed[: settings.MAX_ITEMS_IN_FEED]
        ]
