"""
Dependency injection container.
Creates and wires all application components.
Uses FastAPI's dependency injection system.
"""
from functools import lru_cache

from fastapi import Depends, Header

from app.config import get_settings
from app.core.cache import InMemoryCache
from app.models.schemas import FeedResponse
from app.repositories.memory import (
    InMemoryContentRepository,
    InMemoryFilterRepository,
    InMemoryInteractionRepository,
    InMemoryPreferencesRepository,
    InMemorySourceRepository,
)
from app.services.diversity import DiversityEnforcer
from app.services.feed import FeedService
from app.services.filters import FilterService
from app.services.generator import FeedGenerator
from app.services.interactions import InteractionService
from app.services.mixing import BacklogMixer
from app.services.preferences import PreferencesService
from app.services.sources import SourceService


# =============================================================================
# Singleton Instances (Application Lifetime)
# =============================================================================


@lru_cache()
def get_source_repository() -> InMemorySourceRepository:
    """Get singleton source repository."""
    return InMemorySourceRepository()


@lru_cache()
def get_content_repository() -> InMemoryContentRepository:
    """Get singleton content repository."""
    return InMemoryContentRepository()


@lru_cache()
def get_interaction_repository() -> InMemoryInteractionRepository:
    """Get singleton interaction repository."""
    return InMemoryInteractionRepository()


@lru_cache()
def get_preferences_repository() -> InMemoryPreferencesRepository:
    """Get singleton preferences repository."""
    return InMemoryPreferencesRepository()


@lru_cache()
def get_filter_repository() -> InMemoryFilterRepository:
    """Get singleton filter repository."""
    return InMemoryFilterRepository()


@lru_cache()
def get_feed_cache() -> InMemoryCache[FeedResponse]:
    """Get singleton cache for generated feeds."""
    settings = get_settings()
    return InMemoryCache[FeedResponse](default_ttl_seconds=settings.FEED_CACHE_TTL_SEC)


@lru_cache()
def get_feed_generator() -> FeedGenerator:
    """Get singleton feed generator."""
    settings = get_settings()
    return FeedGenerator(
        diversity_enforcer=DiversityEnforcer(),
        backlog_mixer=BacklogMixer(),
        recent_window_days=settings.RECENT_WINDOW_DAYS,
        not_now_return_fraction=settings.NOT_NOW_RETURN_FRACTION,
    )


# =============================================================================
# Request-Scoped Dependencies (Per-Request Lifetime)
# =============================================================================


def get_current_user_id(
    x_user_id: str = Header(
        ...,
        alias="X-User-ID",
        min_length=1,
        description="Authenticated user identifier",
    ),
) -> str:
    """User identity, set by the authenticating gateway."""
    return x_user_id


def get_preferences_service(
    preferences_repo: InMemoryPreferencesRepository = Depends(get_preferences_repository),
) -> PreferencesService:
    return PreferencesService(
        preferences_repo=preferences_repo,
        feed_cache=get_feed_cache(),
    )


def get_filter_service(
    filter_repo: InMemoryFilterRepository = Depends(get_filter_repository),
    preferences_service: PreferencesService = Depends(get_preferences_service),
) -> FilterService:
    return FilterService(
        filter_repo=filter_repo,
        preferences_service=preferences_service,
        feed_cache=get_feed_cache(),
    )


def get_interaction_service(
    interaction_repo: InMemoryInteractionRepository = Depends(get_interaction_repository),
    content_repo: InMemoryContentRepository = Depends(get_content_repository),
) -> InteractionService:
    return InteractionService(
        interaction_repo=interaction_repo,
        content_repo=content_repo,
        feed_cache=get_feed_cache(),
    )


def get_source_service(
    source_repo: InMemorySourceRepository = Depends(get_source_repository),
) -> SourceService:
    return SourceService(
        source_repo=source_repo,
        feed_cache=get_feed_cache(),
    )


def get_feed_service(
    source_repo: InMemorySourceRepository = Depends(get_source_repository),
    content_repo: InMemoryContentRepository = Depends(get_content_repository),
    interaction_repo: InMemoryInteractionRepository = Depends(get_interaction_repository),
    preferences_service: PreferencesService = Depends(get_preferences_service),
    filter_service: FilterService = Depends(get_filter_service),
) -> FeedService:
    """
    Get feed service with all dependencies wired.
    This is the main entry point for the feed endpoint.
    """
    return FeedService(
        source_repo=source_repo,
        content_repo=content_repo,
        interaction_repo=interaction_repo,
        preferences_service=preferences_service,
        filter_service=filter_service,
        feed_generator=get_feed_generator(),
        feed_cache=get_feed_cache(),
    )


# =============================================================================
# Cleanup Functions
# =============================================================================


def clear_caches() -> None:
    """Clear all cached singleton instances (for testing)."""
    get_source_repository.cache_clear()
    get_content_repository.cache_clear()
    get_interaction_repository.cache_clear()
    get_preferences_repository.cache_clear()
    get_filter_repository.cache_clear()
    get_feed_cache.cache_clear()
    get_feed_generator.cache_clear()
