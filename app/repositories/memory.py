"""
In-memory repository implementations.
Used for prototyping and testing.
Production would replace these with Postgres implementations.
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Set

from app.core.cache import CacheInterface, InMemoryCache
from app.models.interfaces import SourceKey
from app.models.schemas import (
    ContentInteraction,
    ContentItem,
    ContentSource,
    FeedPreferences,
    FilterKeyword,
    InteractionType,
    SourceType,
)

DEMO_USER_ID = "user_demo"


class InMemorySourceRepository:
    """
    In-memory implementation of SourceRepository.
    Holds each user's subscriptions.
    """

    def __init__(
        self,
        cache: Optional[CacheInterface[List[ContentSource]]] = None,
        seed: bool = True,
    ) -> None:
        self._cache = cache or InMemoryCache[List[ContentSource]]()
        if seed:
            self._initialize_mock_data()

    def _initialize_mock_data(self) -> None:
        """Load mock subscriptions for the demo user."""
        sources = [
            ContentSource(
                id="s1",
                user_id=DEMO_USER_ID,
                type=SourceType.YOUTUBE,
                source_id="UC_science",
                display_name="Science Explained",
            ),
            ContentSource(
                id="s2",
                user_id=DEMO_USER_ID,
                type=SourceType.YOUTUBE,
                source_id="UC_cooking",
                display_name="Weeknight Cooking",
            ),
            ContentSource(
                id="s3",
                user_id=DEMO_USER_ID,
                type=SourceType.RSS,
                source_id="https://news.example.com/feed.xml",
                display_name="Example News",
            ),
            ContentSource(
                id="s4",
                user_id=DEMO_USER_ID,
                type=SourceType.PODCAST,
                source_id="pod_history",
                display_name="History Hour",
            ),
            ContentSource(
                id="s5",
                user_id=DEMO_USER_ID,
                type=SourceType.TWITCH,
                source_id="speedrunner42",
                display_name="Speedrunner42",
                is_muted=True,
            ),
        ]
        self._cache.set(DEMO_USER_ID, sources)

    async def list_sources(
        self, user_id: str, include_muted: bool = False
    ) -> List[ContentSource]:
        """Fetch the user's subscribed sources."""
        sources = self._cache.get(user_id) or []
        if include_muted:
            return list(sources)
        return [s for s in sources if not s.is_muted]

    async def get_source(
        self, user_id: str, source_id: str
    ) -> Optional[ContentSource]:
        for source in self._cache.get(user_id) or []:
            if source.id == source_id:
                return source
        return None

    async def add_source(self, source: ContentSource) -> None:
        sources = self._cache.get(source.user_id) or []
        self._cache.set(source.user_id, [*sources, source])

    async def update_source(self, source: ContentSource) -> None:
        """Replace in place so list order (and display-name precedence) holds."""
        sources = self._cache.get(source.user_id) or []
        self._cache.set(
            source.user_id,
            [source if s.id == source.id else s for s in sources],
        )

    async def remove_source(self, user_id: str, source_id: str) -> bool:
        sources = self._cache.get(user_id) or []
        remaining = [s for s in sources if s.id != source_id]
        self._cache.set(user_id, remaining)
        return len(remaining) != len(sources)


class InMemoryContentRepository:
    """
    In-memory implementation of ContentRepository.
    Simulates the catalog filled by the ingestion jobs.
    """

    def __init__(self, seed: bool = True) -> None:
        self._items: Dict[str, ContentItem] = {}
        if seed:
            self._initialize_mock_data()

    def _initialize_mock_data(self) -> None:
        """Load mock content: a week of fresh items plus an older backlog."""
        now = datetime.now(timezone.utc)
        day = timedelta(days=1)

        catalog = [
            # (source_id, source_type, title, duration, age)
            ("UC_science", SourceType.YOUTUBE, "Why the Sky Is Blue", 620, 1 * day),
            ("UC_science", SourceType.YOUTUBE, "Black Holes in 10 Minutes", 600, 2 * day),
            ("UC_science", SourceType.YOUTUBE, "The War on Superbugs", 1450, 3 * day),
            ("UC_science", SourceType.YOUTUBE, "Quantum Tunnelling Demo", 95, 40 * day),
            ("UC_science", SourceType.YOUTUBE, "Star Wars Physics Review", 780, 90 * day),
            ("UC_cooking", SourceType.YOUTUBE, "15 Minute Ramen", 900, 1 * day),
            ("UC_cooking", SourceType.YOUTUBE, "Knife Skills Basics", 480, 4 * day),
            ("UC_cooking", SourceType.YOUTUBE, "Sourdough From Scratch", 2400, 6 * day),
            ("UC_cooking", SourceType.YOUTUBE, "One Pan Pasta", 540, 30 * day),
            ("https://news.example.com/feed.xml", SourceType.RSS, "Markets Open Higher", None, 1 * day),
            ("https://news.example.com/feed.xml", SourceType.RSS, "Election Results Explained", None, 2 * day),
            ("https://news.example.com/feed.xml", SourceType.RSS, "City Council Approves Budget", None, 5 * day),
            ("https://news.example.com/feed.xml", SourceType.RSS, "Looking Back at the Decade", None, 60 * day),
            ("pod_history", SourceType.PODCAST, "The Fall of Rome", 3600, 2 * day),
            ("pod_history", SourceType.PODCAST, "Silk Road Traders", 3300, 20 * day),
            ("pod_history", SourceType.PODCAST, "Medieval Medicine", 3900, 45 * day),
            ("speedrunner42", SourceType.TWITCH, "Any% World Record Attempt", 7200, 1 * day),
        ]

        for index, (source_id, source_type, title, duration, age) in enumerate(catalog, 1):
            item = ContentItem(
                id=f"c{index}",
                source_type=source_type,
                source_id=source_id,
                original_id=f"orig_{index}",
                title=title,
                description=f"{title} - full episode",
                url=f"https://content.example.com/{index}",
                duration=duration,
                published_at=now - age,
                fetched_at=now,
            )
            self._items[item.id] = item

    async def list_content(
        self, source_keys: Iterable[SourceKey], limit: int
    ) -> List[ContentItem]:
        """Fetch content for the given sources, newest first."""
        wanted: Set[SourceKey] = set(source_keys)
        matching = [item for item in self._items.values() if item.source_key in wanted]
        matching.sort(key=lambda item: item.published_at, reverse=True)
        return matching[:limit]

    async def get_content(self, content_id: str) -> Optional[ContentItem]:
        return self._items.get(content_id)

    async def add_content(self, item: ContentItem) -> None:
        self._items[item.id] = item


class InMemoryInteractionRepository:
    """
    In-memory implementation of InteractionRepository.
    Interactions are appended per user and returned newest first.
    """

    def __init__(
        self,
        cache: Optional[CacheInterface[List[ContentInteraction]]] = None,
        seed: bool = True,
    ) -> None:
        self._cache = cache or InMemoryCache[List[ContentInteraction]]()
        if seed:
            self._initialize_mock_data()

    def _initialize_mock_data(self) -> None:
        """Demo user has watched one video and deferred another."""
        now = datetime.now(timezone.utc)
        self._cache.set(
            DEMO_USER_ID,
            [
                ContentInteraction(
                    id="i1",
                    user_id=DEMO_USER_ID,
                    content_id="c1",
                    type=InteractionType.WATCHED,
                    timestamp=now - timedelta(hours=5),
                    completion_rate=1.0,
                ),
                ContentInteraction(
                    id="i2",
                    user_id=DEMO_USER_ID,
                    content_id="c8",
                    type=InteractionType.NOT_NOW,
                    timestamp=now - timedelta(hours=2),
                ),
            ],
        )

    async def list_interactions(self, user_id: str) -> List[ContentInteraction]:
        interactions = self._cache.get(user_id) or []
        return sorted(interactions, key=lambda i: i.timestamp, reverse=True)

    async def add_interaction(self, interaction: ContentInteraction) -> None:
        interactions = self._cache.get(interaction.user_id) or []
        self._cache.set(interaction.user_id, [*interactions, interaction])

    async def clear(self, user_id: str) -> int:
        removed = len(self._cache.get(user_id) or [])
        self._cache.delete(user_id)
        return removed


class InMemoryPreferencesRepository:
    """In-memory implementation of PreferencesRepository."""

    def __init__(
        self,
        cache: Optional[CacheInterface[FeedPreferences]] = None,
    ) -> None:
        self._cache = cache or InMemoryCache[FeedPreferences]()

    async def get_preferences(self, user_id: str) -> Optional[FeedPreferences]:
        return self._cache.get(user_id)

    async def save_preferences(self, preferences: FeedPreferences) -> None:
        self._cache.set(preferences.user_id, preferences)


class InMemoryFilterRepository:
    """In-memory implementation of FilterRepository."""

    def __init__(self) -> None:
        self._keywords: Dict[str, List[FilterKeyword]] = {}
        self._content_types: Dict[str, List[SourceType]] = {}

    async def list_keywords(self, user_id: str) -> List[FilterKeyword]:
        keywords = self._keywords.get(user_id, [])
        return sorted(keywords, key=lambda k: k.created_at, reverse=True)

    async def add_keyword(self, user_id: str, keyword: FilterKeyword) -> None:
        self._keywords.setdefault(user_id, []).append(keyword)

    async def remove_keyword(self, user_id: str, filter_id: str) -> bool:
        keywords = self._keywords.get(user_id, [])
        remaining = [k for k in keywords if k.id != filter_id]
        self._keywords[user_id] = remaining
        return len(remaining) != len(keywords)

    async def get_content_types(self, user_id: str) -> List[SourceType]:
        return list(self._content_types.get(user_id, []))

    async def set_content_types(
        self, user_id: str, content_types: List[SourceType]
    ) -> None:
        self._content_types[user_id] = list(content_types)
