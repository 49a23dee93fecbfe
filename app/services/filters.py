"""
Filter service - manages user content filters.
Keyword filters and content-type preferences live in the filter repository;
duration bounds are stored with the feed preferences.
"""
import logging
import uuid
from typing import List, Optional

from app.core.cache import CacheInterface, feed_cache_key
from app.core.exceptions import NotFoundError, ValidationError
from app.models.interfaces import FilterRepository
from app.models.schemas import (
    DurationRange,
    FeedResponse,
    FilterConfiguration,
    FilterKeyword,
    SourceType,
    UpdatePreferencesRequest,
)
from app.services.preferences import PreferencesService

logger = logging.getLogger(__name__)


class FilterService:
    """CRUD over a user's filter configuration."""

    def __init__(
        self,
        filter_repo: FilterRepository,
        preferences_service: PreferencesService,
        feed_cache: Optional[CacheInterface[FeedResponse]] = None,
    ) -> None:
        self._filter_repo = filter_repo
        self._preferences_service = preferences_service
        self._feed_cache = feed_cache

    async def add_keyword(
        self, user_id: str, keyword: str, is_wildcard: bool = False
    ) -> FilterKeyword:
        """
        Add a keyword filter.

        Raises:
            ValidationError: If the keyword is blank
        """
        keyword = keyword.strip()
        if not keyword:
            raise ValidationError("Keyword cannot be empty", {"field": "keyword"})

        logger.info(f"Adding filter keyword: user={user_id}, wildcard={is_wildcard}")
        entry = FilterKeyword(
            id=uuid.uuid4().hex, keyword=keyword, is_wildcard=is_wildcard
        )
        await self._filter_repo.add_keyword(user_id, entry)
        self._invalidate_feed(user_id)
        return entry

    async def remove_keyword(self, user_id: str, filter_id: str) -> None:
        """
        Remove a keyword filter.

        Raises:
            NotFoundError: If the user has no such filter
        """
        removed = await self._filter_repo.remove_keyword(user_id, filter_id)
        if not removed:
            raise NotFoundError("Filter keyword", filter_id)

        logger.info(f"Filter keyword removed: user={user_id}, filter={filter_id}")
        self._invalidate_feed(user_id)

    async def list_keywords(self, user_id: str) -> List[FilterKeyword]:
        return await self._filter_repo.list_keywords(user_id)

    async def update_duration_filter(
        self,
        user_id: str,
        min_duration: Optional[int],
        max_duration: Optional[int],
    ) -> DurationRange:
        """
        Set duration bounds (seconds). ``None`` clears a bound.

        Raises:
            ValidationError: If min_duration exceeds max_duration
        """
        if (
            min_duration is not None
            and max_duration is not None
            and min_duration > max_duration
        ):
            raise ValidationError(
                "min_duration must not exceed max_duration",
                {"min_duration": min_duration, "max_duration": max_duration},
            )

        await self._preferences_service.update_preferences(
            user_id,
            UpdatePreferencesRequest(min_duration=min_duration, max_duration=max_duration),
        )
        self._invalidate_feed(user_id)
        return DurationRange(min=min_duration, max=max_duration)

    async def update_content_types(
        self, user_id: str, content_types: List[SourceType]
    ) -> List[SourceType]:
        """Restrict the feed to the given source types (empty allows all)."""
        unique = list(dict.fromkeys(content_types))
        logger.info(
            f"Updating content types: user={user_id}, "
            f"types={[t.value for t in unique]}"
        )
        await self._filter_repo.set_content_types(user_id, unique)
        self._invalidate_feed(user_id)
        return unique

    async def get_filter_configuration(self, user_id: str) -> FilterConfiguration:
        keywords = await self._filter_repo.list_keywords(user_id)
        content_types = await self._filter_repo.get_content_types(user_id)
        preferences = await self._preferences_service.get_preferences(user_id)

        duration_range = None
        if preferences.min_duration is not None or preferences.max_duration is not None:
            duration_range = DurationRange(
                min=preferences.min_duration, max=preferences.max_duration
            )

        return FilterConfiguration(
            user_id=user_id,
            keywords=keywords,
            duration_range=duration_range,
            content_type_preferences=content_types,
        )

    def _invalidate_feed(self, user_id: str) -> None:
        if self._feed_cache is not None:
            self._feed_cache.delete(feed_cache_key(user_id))
