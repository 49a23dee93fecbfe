"""Services package - business logic layer."""
from .diversity import DiversityEnforcer
from .feed import FeedService
from .filtering import (
    DurationFilterRule,
    FilterEngine,
    FilterResult,
    FilterRule,
    KeywordFilterRule,
    SourceTypeFilterRule,
    build_filter_rules,
)
from .filters import FilterService
from .generator import (
    FeedGenerator,
    create_interaction_state,
    resolve_interaction_state,
)
from .interactions import InteractionService
from .mixing import BacklogMixer
from .preferences import PreferencesService
from .sources import SourceService

__all__ = [
    "BacklogMixer",
    "DiversityEnforcer",
    "DurationFilterRule",
    "FeedGenerator",
    "FeedService",
    "FilterEngine",
    "FilterResult",
    "FilterRule",
    "FilterService",
    "InteractionService",
    "KeywordFilterRule",
    "PreferencesService",
    "SourceService",
    "SourceTypeFilterRule",
    "build_filter_rules",
    "create_interaction_state",
    "resolve_interaction_state",
]
