"""
Pytest configuration and fixtures.
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import (
    clear_caches,
    get_content_repository,
    get_filter_repository,
    get_interaction_repository,
    get_preferences_repository,
    get_source_repository,
)
from app.main import app
from app.models.schemas import (
    ContentInteraction,
    ContentItem,
    ContentSource,
    FeedPreferences,
    InteractionType,
    SourceType,
)
from app.repositories.memory import (
    InMemoryContentRepository,
    InMemoryFilterRepository,
    InMemoryInteractionRepository,
    InMemoryPreferencesRepository,
    InMemorySourceRepository,
)

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed generation time for deterministic age splits."""
    return FIXED_NOW


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def make_item(now) -> Callable[..., ContentItem]:
    """Factory for content items published ``age_days`` before ``now``."""

    def _make(
        item_id: str,
        source_id: str = "src_a",
        source_type: SourceType = SourceType.YOUTUBE,
        age_days: float = 1,
        title: Optional[str] = None,
        description: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> ContentItem:
        return ContentItem(
            id=item_id,
            source_type=source_type,
            source_id=source_id,
            original_id=f"orig_{item_id}",
            title=title or f"Item {item_id}",
            description=description,
            url=f"https://content.example.com/{item_id}",
            duration=duration,
            published_at=now - timedelta(days=age_days),
        )

    return _make


@pytest.fixture
def make_source() -> Callable[..., ContentSource]:
    def _make(
        source_id: str,
        display_name: str,
        source_type: SourceType = SourceType.YOUTUBE,
        user_id: str = "user_test",
        is_muted: bool = False,
    ) -> ContentSource:
        return ContentSource(
            id=f"sub_{source_id}",
            user_id=user_id,
            type=source_type,
            source_id=source_id,
            display_name=display_name,
            is_muted=is_muted,
        )

    return _make


@pytest.fixture
def make_interaction(now) -> Callable[..., ContentInteraction]:
    counter = iter(range(1, 10_000))

    def _make(
        content_id: str,
        interaction_type: InteractionType,
        user_id: str = "user_test",
        timestamp: Optional[datetime] = None,
        collection: Optional[str] = None,
    ) -> ContentInteraction:
        return ContentInteraction(
            id=f"i{next(counter)}",
            user_id=user_id,
            content_id=content_id,
            type=interaction_type,
            timestamp=timestamp or now - timedelta(hours=1),
            collection=collection,
        )

    return _make


@pytest.fixture
def preferences() -> FeedPreferences:
    return FeedPreferences(
        user_id="user_test",
        backlog_ratio=0.3,
        max_consecutive_from_source=2,
    )


@pytest.fixture
def assert_diversity() -> Callable[[Sequence[ContentItem], int], None]:
    """
    Check the diversity bound allowing only the documented fallback.

    A run longer than ``max_consecutive`` is accepted at position ``i`` only
    when every item from ``i`` onwards (the queue at that moment) shares the
    run's source.
    """

    def _check(items: Sequence[ContentItem], max_consecutive: int) -> None:
        for i in range(max_consecutive, len(items)):
            window = items[i - max_consecutive : i]
            source = window[0].source_key
            if all(item.source_key == source for item in window) and (
                items[i].source_key == source
            ):
                tail = [item.source_key for item in items[i:]]
                assert all(key == source for key in tail), (
                    f"run of {max_consecutive + 1} from {source} at index {i} "
                    f"while other sources were still queued"
                )

    return _check


# -----------------------------------------------------------------------------
# API fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def source_repo():
    return InMemorySourceRepository()


@pytest.fixture
def content_repo():
    return InMemoryContentRepository()


@pytest.fixture
def interaction_repo():
    return InMemoryInteractionRepository()


@pytest.fixture
def preferences_repo():
    return InMemoryPreferencesRepository()


@pytest.fixture
def filter_repo():
    return InMemoryFilterRepository()


@pytest.fixture
def test_client(
    source_repo,
    content_repo,
    interaction_repo,
    preferences_repo,
    filter_repo,
):
    """
    TestClient fixture with dependency overrides.
    Uses fresh in-memory repositories (seeded with demo data) per test.
    """
    clear_caches()
    app.dependency_overrides[get_source_repository] = lambda: source_repo
    app.dependency_overrides[get_content_repository] = lambda: content_repo
    app.dependency_overrides[get_interaction_repository] = lambda: interaction_repo
    app.dependency_overrides[get_preferences_repository] = lambda: preferences_repo
    app.dependency_overrides[get_filter_repository] = lambda: filter_repo

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    clear_caches()
