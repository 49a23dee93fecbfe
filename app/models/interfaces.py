"""
Repository interfaces (abstractions).
Using Protocol for structural subtyping (duck typing with type hints).
These define the contracts that data access implementations must follow.
"""
from typing import Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from app.models.schemas import (
    ContentInteraction,
    ContentItem,
    ContentSource,
    FeedPreferences,
    FilterKeyword,
    SourceType,
)

SourceKey = Tuple[str, SourceType]


@runtime_checkable
class SourceRepository(Protocol):
    """
    Interface for subscribed source access.
    Production: Postgres table keyed by (user_id, type, source_id).
    Testing: In-memory implementation.
    """

    async def list_sources(
        self, user_id: str, include_muted: bool = False
    ) -> List[ContentSource]:
        """
        Fetch the user's subscribed sources.

        Args:
            user_id: Owning user
            include_muted: Also return sources the user has muted

        Returns:
            List of sources (may be empty)
        """
        ...

    async def get_source(
        self, user_id: str, source_id: str
    ) -> Optional[ContentSource]:
        """Fetch one subscription by its id, None if the user has no such source."""
        ...

    async def add_source(self, source: ContentSource) -> None:
        ...

    async def update_source(self, source: ContentSource) -> None:
        """Replace the stored subscription with the same id."""
        ...

    async def remove_source(self, user_id: str, source_id: str) -> bool:
        """Remove a subscription, returns True if it existed."""
        ...


@runtime_checkable
class ContentRepository(Protocol):
    """
    Interface for the content catalog.
    Populated by the ingestion jobs; read-only from the feed's point of view.
    """

    async def list_content(
        self, source_keys: Iterable[SourceKey], limit: int
    ) -> List[ContentItem]:
        """
        Fetch content published by the given sources, newest first.

        Args:
            source_keys: (source_id, source_type) pairs to include
            limit: Maximum number of items to return

        Returns:
            List of content items (may be empty)
        """
        ...

    async def get_content(self, content_id: str) -> Optional[ContentItem]:
        """Fetch a single content item, None if unknown."""
        ...


@runtime_checkable
class InteractionRepository(Protocol):
    """Interface for the append-only interaction log."""

    async def list_interactions(self, user_id: str) -> List[ContentInteraction]:
        """Fetch all interactions of a user, newest first."""
        ...

    async def add_interaction(self, interaction: ContentInteraction) -> None:
        """Append an interaction."""
        ...

    async def clear(self, user_id: str) -> int:
        """Drop all interactions of a user, returning how many were removed."""
        ...


@runtime_checkable
class PreferencesRepository(Protocol):
    """Interface for per-user feed preferences."""

    async def get_preferences(self, user_id: str) -> Optional[FeedPreferences]:
        """Fetch stored preferences, None when the user never saved any."""
        ...

    async def save_preferences(self, preferences: FeedPreferences) -> None:
        """Persist preferences."""
        ...


@runtime_checkable
class FilterRepository(Protocol):
    """Interface for keyword filters and content-type preferences."""

    async def list_keywords(self, user_id: str) -> List[FilterKeyword]:
        """Fetch keyword filters, newest first."""
        ...

    async def add_keyword(self, user_id: str, keyword: FilterKeyword) -> None:
        ...

    async def remove_keyword(self, user_id: str, filter_id: str) -> bool:
        """Remove a keyword filter, returns True if it existed."""
        ...

    async def get_content_types(self, user_id: str) -> List[SourceType]:
        ...

    async def set_content_types(
        self, user_id: str, content_types: List[SourceType]
    ) -> None:
        ...
