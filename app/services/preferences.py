"""
Preferences service.
Resolves per-user feed preferences and validates updates before they can
reach the feed pipeline.
"""
import logging
from typing import Optional

import pydantic

from app.config.settings import get_settings
from app.core.cache import CacheInterface, feed_cache_key
from app.core.exceptions import ConfigurationError
from app.models.interfaces import PreferencesRepository
from app.models.schemas import (
    FeedResponse,
    FeedPreferences,
    UpdatePreferencesRequest,
    utc_now,
)

logger = logging.getLogger(__name__)


class PreferencesService:
    """Reads and updates feed preferences."""

    def __init__(
        self,
        preferences_repo: PreferencesRepository,
        feed_cache: Optional[CacheInterface[FeedResponse]] = None,
    ) -> None:
        self._preferences_repo = preferences_repo
        self._feed_cache = feed_cache

    async def get_preferences(self, user_id: str) -> FeedPreferences:
        """Stored preferences, or the configured defaults."""
        stored = await self._preferences_repo.get_preferences(user_id)
        if stored is not None:
            return stored

        settings = get_settings()
        return FeedPreferences(
            user_id=user_id,
            backlog_ratio=settings.DEFAULT_BACKLOG_RATIO,
            max_consecutive_from_source=settings.DEFAULT_MAX_CONSECUTIVE_FROM_SOURCE,
        )

    async def update_preferences(
        self, user_id: str, update: UpdatePreferencesRequest
    ) -> FeedPreferences:
        """
        Apply a partial update.

        Raises:
            ConfigurationError: If the merged preferences are invalid
        """
        current = await self.get_preferences(user_id)
        changes = update.model_dump(exclude_unset=True)
        logger.info(f"Updating preferences: user={user_id}, fields={sorted(changes)}")

        merged = {**current.model_dump(), **changes, "updated_at": utc_now()}
        try:
            preferences = FeedPreferences.model_validate(merged)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            setting = ".".join(str(part) for part in first["loc"]) or "preferences"
            raise ConfigurationError(setting, first["msg"]) from e

        await self._preferences_repo.save_preferences(preferences)
        self._invalidate_feed(user_id)
        return preferences

    def _invalidate_feed(self, user_id: str) -> None:
        if self._feed_cache is not None:
            self._feed_cache.delete(feed_cache_key(user_id))
