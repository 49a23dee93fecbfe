"""
Content filtering.
Filter rules (strategy pattern) and the engine that applies them.
"""
import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from app.models.schemas import ContentItem, FilterConfiguration, SourceType

logger = logging.getLogger(__name__)


# =============================================================================
# Filter Rules (Strategy Pattern)
# =============================================================================


class FilterRule(ABC):
    """
    Abstract base class for filter rules.

    The set of implementers is closed: keyword, duration range and
    source-type allow list.
    """

    @abstractmethod
    def matches(self, item: ContentItem) -> bool:
        """Return True if the item should be filtered out."""
        pass

    @abstractmethod
    def reason(self) -> str:
        """Human-readable explanation shown when the rule matches."""
        pass


class KeywordFilterRule(FilterRule):
    """
    Filter items whose title or description mention a keyword.

    Wildcard keywords match as plain substrings once ``*`` is stripped.
    Other keywords only match whole words, so "war" hits "War in Ukraine"
    but not "Star Wars".
    """

    def __init__(
        self,
        keyword: str,
        is_wildcard: bool = False,
        case_sensitive: bool = False,
    ) -> None:
        self.keyword = keyword
        self.is_wildcard = is_wildcard
        self.case_sensitive = case_sensitive

        flags = 0 if case_sensitive else re.IGNORECASE
        self._pattern = re.compile(rf"\b{re.escape(keyword)}\b", flags)

    def matches(self, item: ContentItem) -> bool:
        search_text = f"{item.title} {item.description or ''}"

        if self.is_wildcard:
            needle = self.keyword.replace("*", "")
            if self.case_sensitive:
                return needle in search_text
            return needle.lower() in search_text.lower()

        return self._pattern.search(search_text) is not None

    def reason(self) -> str:
        return f"Keyword: {self.keyword}"

    def __repr__(self) -> str:
        return (
            f"KeywordFilterRule(keyword={self.keyword!r}, "
            f"is_wildcard={self.is_wildcard}, case_sensitive={self.case_sensitive})"
        )


class DurationFilterRule(FilterRule):
    """Filter items shorter than ``min_seconds`` or longer than ``max_seconds``."""

    def __init__(
        self,
        min_seconds: Optional[int] = None,
        max_seconds: Optional[int] = None,
    ) -> None:
        if min_seconds is None and max_seconds is None:
            raise ValueError("DurationFilterRule needs at least one bound")
        self.min_seconds = min_seconds
        self.max_seconds = max_seconds

    def matches(self, item: ContentItem) -> bool:
        # Items without a duration (articles) cannot be judged
        if item.duration is None:
            return False

        if self.min_seconds is not None and item.duration < self.min_seconds:
            return True
        if self.max_seconds is not None and item.duration > self.max_seconds:
            return True
        return False

    def reason(self) -> str:
        if self.min_seconds is not None and self.max_seconds is not None:
            return (
                f"Duration not between {self._minutes(self.min_seconds)} "
                f"and {self._minutes(self.max_seconds)}"
            )
        if self.min_seconds is not None:
            return f"Duration less than {self._minutes(self.min_seconds)}"
        return f"Duration more than {self._minutes(self.max_seconds)}"

    @staticmethod
    def _minutes(seconds: Optional[int]) -> str:
        return f"{(seconds or 0) // 60}m"

    def __repr__(self) -> str:
        return f"DurationFilterRule(min={self.min_seconds}, max={self.max_seconds})"


class SourceTypeFilterRule(FilterRule):
    """Filter items whose source type is not in the allow list."""

    def __init__(self, allowed_types: Iterable[SourceType]) -> None:
        self.allowed_types = frozenset(allowed_types)

    def matches(self, item: ContentItem) -> bool:
        return item.source_type not in self.allowed_types

    def reason(self) -> str:
        return "Content type not in allowed list"

    def __repr__(self) -> str:
        allowed = sorted(t.value for t in self.allowed_types)
        return f"SourceTypeFilterRule(allowed={allowed})"


# =============================================================================
# Filter Engine
# =============================================================================


class FilterResult(BaseModel):
    """Outcome of evaluating one item against the rule set."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    is_filtered: bool
    matched_rules: List[FilterRule] = Field(default_factory=list)
    reasons: List[str] = Field(default_factory=list)


class FilterEngine:
    """
    Applies a fixed set of filter rules to content items.
    An item is filtered when any rule matches.
    """

    def __init__(self, rules: Sequence[FilterRule]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> Sequence[FilterRule]:
        return self._rules

    def evaluate(self, item: ContentItem) -> FilterResult:
        """Evaluate a single item without removing it."""
        matched = [rule for rule in self._rules if rule.matches(item)]
        return FilterResult(
            is_filtered=bool(matched),
            matched_rules=matched,
            reasons=[rule.reason() for rule in matched],
        )

    def evaluate_batch(self, items: Sequence[ContentItem]) -> List[ContentItem]:
        """Return the items that pass every rule, in their original order."""
        kept = []
        for item in items:
            result = self.evaluate(item)
            if result.is_filtered:
                logger.debug(f"Filtered content={item.id}: {', '.join(result.reasons)}")
                continue
            kept.append(item)
        return kept


def build_filter_rules(config: FilterConfiguration) -> List[FilterRule]:
    """Assemble the rule set described by a user's filter configuration."""
    rules: List[FilterRule] = [
        KeywordFilterRule(k.keyword, k.is_wildcard) for k in config.keywords
    ]

    duration = config.duration_range
    if duration is not None and (duration.min is not None or duration.max is not None):
        rules.append(DurationFilterRule(duration.min, duration.max))

    if config.content_type_preferences:
        rules.append(SourceTypeFilterRule(config.content_type_preferences))

    return rules
