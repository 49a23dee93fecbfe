"""Models package - domain entities and interfaces."""
from .interfaces import (
    ContentRepository,
    FilterRepository,
    InteractionRepository,
    PreferencesRepository,
    SourceKey,
    SourceRepository,
)
from .schemas import (
    SEEN_INTERACTION_TYPES,
    ContentInteraction,
    ContentItem,
    ContentSource,
    DismissedTempState,
    DurationRange,
    ErrorResponse,
    FeedItem,
    FeedPreferences,
    FeedResponse,
    FilterConfiguration,
    FilterKeyword,
    HistoryEntry,
    InteractionState,
    InteractionType,
    NeverSeenState,
    SavedState,
    SourceType,
    WatchedState,
)

__all__ = [
    # Interfaces
    "ContentRepository",
    "FilterRepository",
    "InteractionRepository",
    "PreferencesRepository",
    "SourceKey",
    "SourceRepository",
    # Schemas
    "SEEN_INTERACTION_TYPES",
    "ContentInteraction",
    "ContentItem",
    "ContentSource",
    "DismissedTempState",
    "DurationRange",
    "ErrorResponse",
    "FeedItem",
    "FeedPreferences",
    "FeedResponse",
    "FilterConfiguration",
    "FilterKeyword",
    "HistoryEntry",
    "InteractionState",
    "InteractionType",
    "NeverSeenState",
    "SavedState",
    "SourceType",
    "WatchedState",
]
