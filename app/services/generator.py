"""
Feed generator - core feed generation algorithm.
Pure, synchronous pipeline over in-memory collections:
seen-filter -> age split -> backlog mix -> diversity -> "not now" reinsertion
-> projection to FeedItem.
"""
import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from app.models.schemas import (
    SEEN_INTERACTION_TYPES,
    ContentInteraction,
    ContentItem,
    ContentSource,
    DismissedTempState,
    FeedItem,
    FeedPreferences,
    InteractionState,
    InteractionType,
    NeverSeenState,
    SavedState,
    SourceType,
    WatchedState,
)
from app.services.diversity import DiversityEnforcer
from app.services.mixing import BacklogMixer, shuffled

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE_NAME = "Unknown"
NOT_NOW_RETURN_DELAY = timedelta(days=1)


# =============================================================================
# Interaction State
# =============================================================================


def create_interaction_state(
    interaction_type: InteractionType,
    timestamp: datetime,
    collection: Optional[str] = None,
) -> InteractionState:
    """Classify an interaction into the state shown alongside a feed item."""
    if interaction_type == InteractionType.WATCHED:
        return WatchedState(at=timestamp)
    if interaction_type == InteractionType.SAVED:
        return SavedState(collection=collection)
    if interaction_type == InteractionType.NOT_NOW:
        return DismissedTempState(will_return_at=timestamp + NOT_NOW_RETURN_DELAY)
    # DISMISSED and BLOCKED items never reach a feed
    return NeverSeenState()


def resolve_interaction_state(
    content_id: str,
    interactions: Iterable[ContentInteraction],
) -> InteractionState:
    """State for the latest interaction on ``content_id``, never-seen if none."""
    latest: Optional[ContentInteraction] = None
    for interaction in interactions:
        if interaction.content_id != content_id:
            continue
        if latest is None or interaction.timestamp > latest.timestamp:
            latest = interaction

    if latest is None:
        return NeverSeenState()
    return create_interaction_state(latest.type, latest.timestamp, latest.collection)


# =============================================================================
# Feed Generator
# =============================================================================


class FeedGenerator:
    """
    Orchestrates backlog mixing and diversity enforcement into a feed.

    All randomness comes from ``rng`` so callers can seed it. Input
    collections are never modified; each stage builds a new list.
    """

    def __init__(
        self,
        diversity_enforcer: DiversityEnforcer,
        backlog_mixer: BacklogMixer,
        rng: Optional[random.Random] = None,
        recent_window_days: int = 7,
        not_now_return_fraction: float = 0.2,
    ) -> None:
        """
        Initialize the generator.

        Args:
            diversity_enforcer: Reorders items to limit same-source runs
            backlog_mixer: Samples and interleaves recent and backlog items
            rng: Random source for "not now" reinsertion
            recent_window_days: Age under which content counts as recent
            not_now_return_fraction: Max share of the feed given to "not now" items
        """
        self._diversity_enforcer = diversity_enforcer
        self._backlog_mixer = backlog_mixer
        self._rng = rng or random.Random()
        self._recent_window = timedelta(days=recent_window_days)
        self._not_now_return_fraction = not_now_return_fraction

    def generate(
        self,
        sources: Sequence[ContentSource],
        all_content: Sequence[ContentItem],
        preferences: FeedPreferences,
        interactions: Sequence[ContentInteraction],
        now: Optional[datetime] = None,
    ) -> List[FeedItem]:
        """
        Generate an ordered feed.

        Args:
            sources: Subscribed sources, used for display names
            all_content: Candidate content items
            preferences: Validated feed preferences
            interactions: The user's interaction log
            now: Generation time (defaults to current UTC time)

        Returns:
            FeedItems with positions matching their index
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - self._recent_window

        seen_ids, deferred_ids = self._classify_interactions(interactions)

        # Step 1: Drop seen content and hold back deferred content
        unseen = [
            item
            for item in all_content
            if item.id not in seen_ids and item.id not in deferred_ids
        ]

        # Step 2: Split by age
        recent, backlog = self._split_by_age(unseen, cutoff)

        # Step 3: Mix according to backlog ratio
        mixed = self._backlog_mixer.mix(recent, backlog, preferences.backlog_ratio)

        # Step 4: Enforce diversity
        diversified = self._diversity_enforcer.enforce(
            mixed, preferences.max_consecutive_from_source
        )

        # Step 5: Bring "not now" items back at random positions
        returning = [
            item
            for item in all_content
            if item.id in deferred_ids and item.id not in seen_ids
        ]
        with_returning = self._reinsert_deferred(diversified, returning)

        logger.debug(
            f"Generated feed: candidates={len(all_content)}, unseen={len(unseen)}, "
            f"recent={len(recent)}, backlog={len(backlog)}, mixed={len(mixed)}, "
            f"returning={len(with_returning) - len(diversified)}"
        )

        # Step 6: Project to feed items
        display_names = self._display_names(sources)
        return [
            FeedItem(
                content=item,
                position=position,
                is_new=item.published_at > cutoff,
                source_display_name=display_names.get(
                    item.source_key, UNKNOWN_SOURCE_NAME
                ),
                interaction_state=None,
            )
            for position, item in enumerate(with_returning)
        ]

    @staticmethod
    def _classify_interactions(
        interactions: Iterable[ContentInteraction],
    ) -> Tuple[Set[str], Set[str]]:
        """Return (seen ids, deferred ids)."""
        seen: Set[str] = set()
        deferred: Set[str] = set()
        for interaction in interactions:
            if interaction.type in SEEN_INTERACTION_TYPES:
                seen.add(interaction.content_id)
            elif interaction.type == InteractionType.NOT_NOW:
                deferred.add(interaction.content_id)
        return seen, deferred

    @staticmethod
    def _split_by_age(
        items: Iterable[ContentItem], cutoff: datetime
    ) -> Tuple[List[ContentItem], List[ContentItem]]:
        recent: List[ContentItem] = []
        backlog: List[ContentItem] = []
        for item in items:
            if item.published_at > cutoff:
                recent.append(item)
            else:
                backlog.append(item)
        return recent, backlog

    def _reinsert_deferred(
        self,
        feed: Sequence[ContentItem],
        returning: Sequence[ContentItem],
    ) -> List[ContentItem]:
        """
        Insert up to ``not_now_return_fraction`` of the feed length of
        deferred items. Each position is drawn against the list as it grows.
        """
        max_returning = math.floor(len(feed) * self._not_now_return_fraction)
        to_return = shuffled(returning, self._rng)[:max_returning]

        result = list(feed)
        for item in to_return:
            position = self._rng.randint(0, len(result))
            result.insert(position, item)
        return result

    @staticmethod
    def _display_names(
        sources: Iterable[ContentSource],
    ) -> Dict[Tuple[str, SourceType], str]:
        names: Dict[Tuple[str, SourceType], str] = {}
        for source in sources:
            # First match wins, as with a linear search
            names.setdefault(source.source_key, source.display_name)
        return names
