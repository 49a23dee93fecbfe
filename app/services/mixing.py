"""
Backlog mixer.
Blends freshly published content with older backlog content in a target ratio.
"""
import math
import random
from typing import List, Optional, Sequence, TypeVar

from app.models.schemas import ContentItem

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a uniformly shuffled copy, leaving ``items`` untouched."""
    result = list(items)
    # random.shuffle is a Fisher-Yates permutation
    rng.shuffle(result)
    return result


def interleave(first: Sequence[T], second: Sequence[T]) -> List[T]:
    """
    Alternate one element from each list, starting with ``first``.
    The tail of the longer list is appended once the shorter one runs out.
    """
    result: List[T] = []
    for i in range(max(len(first), len(second))):
        if i < len(first):
            result.append(first[i])
        if i < len(second):
            result.append(second[i])
    return result


class BacklogMixer:
    """
    Random sampler over two disjoint pools.

    ``ratio`` is the share of the combined pool size that should come from
    the backlog. A pool smaller than its quota is used up without the other
    pool making up the difference.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def mix(
        self,
        recent: Sequence[ContentItem],
        backlog: Sequence[ContentItem],
        ratio: float,
    ) -> List[ContentItem]:
        total = len(recent) + len(backlog)
        backlog_count = math.floor(total * ratio)
        recent_count = total - backlog_count

        selected_recent = shuffled(recent, self._rng)[:recent_count]
        selected_backlog = shuffled(backlog, self._rng)[:backlog_count]

        return interleave(selected_recent, selected_backlog)
