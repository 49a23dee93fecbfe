"""
Diversity enforcer.
Keeps one source from dominating a stretch of the feed.
"""
from collections import deque
from typing import Deque, List, Sequence

from app.models.schemas import ContentItem


class DiversityEnforcer:
    """
    Greedy single-pass reordering.

    Whenever the last ``max_consecutive`` placed items all share a source,
    the first queued item from another source is pulled forward. If the
    queue holds nothing but that source, the next item is placed anyway,
    so runs longer than ``max_consecutive`` survive only at that point.

    ``max_consecutive`` must be >= 1; FeedPreferences validates it.
    """

    def enforce(
        self, items: Sequence[ContentItem], max_consecutive: int
    ) -> List[ContentItem]:
        if not items:
            return []

        result: List[ContentItem] = [items[0]]
        remaining: Deque[ContentItem] = deque(items[1:])

        while remaining:
            window = result[-max_consecutive:]
            window_source = window[0].source_key
            saturated = len(window) == max_consecutive and all(
                item.source_key == window_source for item in window
            )

            if saturated:
                index = next(
                    (
                        i
                        for i, candidate in enumerate(remaining)
                        if candidate.source_key != window_source
                    ),
                    None,
                )
                if index is not None:
                    # Move the alternative to the front of the queue
                    candidate = remaining[index]
                    del remaining[index]
                    remaining.appendleft(candidate)

            result.append(remaining.popleft())

        return result
