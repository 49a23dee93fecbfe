"""
Domain models using Pydantic.
All data structures for the content feed system.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Enumerations
# =============================================================================


class SourceType(str, Enum):
    """Platform a content source lives on."""

    YOUTUBE = "YOUTUBE"
    TWITCH = "TWITCH"
    RSS = "RSS"
    PODCAST = "PODCAST"


class InteractionType(str, Enum):
    """Kinds of user signal recorded against a content item."""

    WATCHED = "WATCHED"
    SAVED = "SAVED"
    DISMISSED = "DISMISSED"
    NOT_NOW = "NOT_NOW"
    BLOCKED = "BLOCKED"


# Interactions that remove an item from every future feed.
SEEN_INTERACTION_TYPES = frozenset(
    {
        InteractionType.WATCHED,
        InteractionType.DISMISSED,
        InteractionType.SAVED,
        InteractionType.BLOCKED,
    }
)


# =============================================================================
# Domain Models (Internal)
# =============================================================================


class ContentItem(BaseModel):
    """
    A single piece of content fetched from a source.
    Unique per (source_type, original_id); never mutated by feed generation.
    """

    id: str = Field(..., description="Internal content identifier")
    source_type: SourceType = Field(..., description="Platform of the source")
    source_id: str = Field(..., description="Channel ID, username or feed URL")
    original_id: str = Field(..., description="Platform-specific content ID")
    title: str = Field(..., description="Content title")
    description: Optional[str] = Field(default=None, description="Content description")
    thumbnail_url: Optional[str] = Field(default=None, description="Thumbnail URL")
    url: str = Field(..., description="Link to the original content")
    duration: Optional[int] = Field(
        default=None,
        ge=0,
        description="Duration in seconds (None for articles)",
    )
    published_at: datetime = Field(..., description="Publication time")
    fetched_at: Optional[datetime] = Field(default=None, description="Ingestion time")
    last_seen_in_feed: Optional[datetime] = Field(
        default=None,
        description="Last time the item was served (owned by ingestion)",
    )

    @property
    def source_key(self) -> Tuple[str, SourceType]:
        """Natural key of the source this item belongs to."""
        return self.source_id, self.source_type


class ContentSource(BaseModel):
    """A channel or feed the user subscribes to."""

    id: str = Field(..., description="Subscription identifier")
    user_id: str = Field(..., description="Owning user")
    type: SourceType = Field(..., description="Platform of the source")
    source_id: str = Field(..., description="Platform-specific source identifier")
    display_name: str = Field(..., description="Human-readable source name")
    avatar_url: Optional[str] = Field(default=None)
    is_muted: bool = Field(default=False, description="Temporarily hidden")
    always_safe: bool = Field(
        default=False,
        description="Carried from the source record; not used by filtering",
    )
    added_at: datetime = Field(default_factory=utc_now)

    @property
    def source_key(self) -> Tuple[str, SourceType]:
        return self.source_id, self.type


class ContentInteraction(BaseModel):
    """Append-only fact linking a user to a content item."""

    id: str = Field(..., description="Interaction identifier")
    user_id: str = Field(..., description="Acting user")
    content_id: str = Field(..., description="Target content item")
    type: InteractionType
    timestamp: datetime = Field(default_factory=utc_now)

    # Context (type-specific)
    watch_duration: Optional[float] = Field(default=None, ge=0)
    completion_rate: Optional[float] = Field(default=None, ge=0, le=1)
    dismiss_reason: Optional[str] = None
    collection: Optional[str] = None


class FeedPreferences(BaseModel):
    """
    Per-user feed configuration.
    Range checks here are the validation layer in front of the feed pipeline.
    """

    user_id: str = Field(..., description="Owning user")
    backlog_ratio: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Target fraction of the feed drawn from older content",
    )
    max_consecutive_from_source: int = Field(
        default=3,
        ge=1,
        description="Max run of items from one source",
    )
    min_duration: Optional[int] = Field(default=None, ge=0, description="Seconds")
    max_duration: Optional[int] = Field(default=None, ge=0, description="Seconds")
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_duration_bounds(self) -> "FeedPreferences":
        if (
            self.min_duration is not None
            and self.max_duration is not None
            and self.min_duration > self.max_duration
        ):
            raise ValueError("min_duration must not exceed max_duration")
        return self


class FilterKeyword(BaseModel):
    """A keyword the user does not want to see."""

    id: str
    keyword: str
    is_wildcard: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class DurationRange(BaseModel):
    min: Optional[int] = Field(default=None, ge=0, description="Seconds")
    max: Optional[int] = Field(default=None, ge=0, description="Seconds")


class FilterConfiguration(BaseModel):
    """Everything needed to build a user's filter rule set."""

    user_id: str
    keywords: List[FilterKeyword] = Field(default_factory=list)
    duration_range: Optional[DurationRange] = None
    content_type_preferences: List[SourceType] = Field(
        default_factory=list,
        description="Allowed source types (empty means all)",
    )


# =============================================================================
# Interaction State (closed tagged union)
# =============================================================================


class NeverSeenState(BaseModel):
    type: Literal["never-seen"] = "never-seen"


class DismissedTempState(BaseModel):
    type: Literal["dismissed-temp"] = "dismissed-temp"
    will_return_at: datetime


class SavedState(BaseModel):
    type: Literal["saved"] = "saved"
    collection: Optional[str] = None


class WatchedState(BaseModel):
    type: Literal["watched"] = "watched"
    at: datetime


InteractionState = Annotated[
    Union[NeverSeenState, DismissedTempState, SavedState, WatchedState],
    Field(discriminator="type"),
]


# =============================================================================
# API Models (External)
# =============================================================================


class FeedItem(BaseModel):
    """Presentation projection of a content item inside a generated feed."""

    content: ContentItem
    position: int = Field(..., ge=0, description="Zero-based index in the feed")
    is_new: bool = Field(..., description="Published within the recent window")
    source_display_name: str = Field(..., description="Resolved source name")
    interaction_state: Optional[InteractionState] = None
    is_recommended: Optional[bool] = Field(
        default=None,
        description="True when the item comes from outside the user's sources",
    )


class FeedResponse(BaseModel):
    """Feed endpoint response."""

    items: List[FeedItem] = Field(..., description="Ordered feed items")
    total: int = Field(..., ge=0, description="Number of items returned")
    generated_at: datetime = Field(default_factory=utc_now)
    cached: bool = Field(default=False, description="Served from the feed cache")


class HistoryEntry(BaseModel):
    """An interaction paired with the content it refers to."""

    interaction: ContentInteraction
    content: Optional[ContentItem] = Field(
        default=None,
        description="None when the item has left the catalog",
    )


class UpdatePreferencesRequest(BaseModel):
    """Partial preferences update."""

    backlog_ratio: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_consecutive_from_source: Optional[int] = Field(default=None, ge=1, le=10)
    min_duration: Optional[int] = Field(default=None, ge=0)
    max_duration: Optional[int] = Field(default=None, ge=0)


class UpdateSourceRequest(BaseModel):
    """Partial source update; omitted fields keep their current value."""

    is_muted: Optional[bool] = None
    always_safe: Optional[bool] = None


class AddFilterRequest(BaseModel):
    keyword: str = Field(..., min_length=1, description="Keyword to filter out")
    is_wildcard: bool = False


class UpdateDurationFilterRequest(BaseModel):
    min_duration: Optional[int] = Field(default=None, ge=0)
    max_duration: Optional[int] = Field(default=None, ge=0)


class UpdateContentTypesRequest(BaseModel):
    content_types: List[SourceType] = Field(default_factory=list)


class WatchContentRequest(BaseModel):
    watch_duration: Optional[float] = Field(default=None, ge=0)
    completion_rate: Optional[float] = Field(default=None, ge=0, le=1)


class SaveContentRequest(BaseModel):
    collection: Optional[str] = None


class DismissContentRequest(BaseModel):
    reason: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: Dict[str, Any] = Field(..., description="Error details")
