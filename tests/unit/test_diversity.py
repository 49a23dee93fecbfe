"""
Unit tests for the DiversityEnforcer.
"""
import random

import pytest

from app.models.schemas import SourceType
from app.services.diversity import DiversityEnforcer


def _sequence(make_item, sources):
    """Build items from a string/list of source ids, ids numbered in order."""
    return [make_item(f"c{i}", source_id=s) for i, s in enumerate(sources)]


def _sources(items):
    return [item.source_id for item in items]


class TestDiversityEnforcer:
    def test_empty_input(self):
        assert DiversityEnforcer().enforce([], 3) == []

    def test_single_item(self, make_item):
        items = [make_item("c1")]
        assert DiversityEnforcer().enforce(items, 1) == items

    def test_pulls_other_source_forward(self, make_item):
        items = _sequence(make_item, "AAAB")

        result = DiversityEnforcer().enforce(items, 2)

        assert _sources(result) == list("AABA")
        assert [i.id for i in result] == ["c0", "c1", "c3", "c2"]

    def test_max_one_alternates(self, make_item):
        items = _sequence(make_item, "AABB")

        result = DiversityEnforcer().enforce(items, 1)

        assert _sources(result) == list("ABAB")

    def test_already_diverse_order_is_kept(self, make_item):
        items = _sequence(make_item, "ABCABC")

        result = DiversityEnforcer().enforce(items, 2)

        assert result == items

    def test_single_source_falls_back_to_queue_order(self, make_item):
        items = _sequence(make_item, "AAAAA")

        result = DiversityEnforcer().enforce(items, 2)

        assert result == items

    def test_fallback_only_when_queue_has_no_alternative(self, make_item):
        items = _sequence(make_item, "AABAAA")

        result = DiversityEnforcer().enforce(items, 2)

        # After A A B A A the queue holds only A, so the third A is tolerated
        assert _sources(result) == list("AABAAA")
        assert [i.id for i in result] == ["c0", "c1", "c2", "c3", "c4", "c5"]

    def test_source_type_distinguishes_sources(self, make_item):
        items = [
            make_item("c0", source_id="same", source_type=SourceType.YOUTUBE),
            make_item("c1", source_id="same", source_type=SourceType.YOUTUBE),
            make_item("c2", source_id="same", source_type=SourceType.YOUTUBE),
            make_item("c3", source_id="same", source_type=SourceType.TWITCH),
        ]

        result = DiversityEnforcer().enforce(items, 2)

        assert [i.id for i in result] == ["c0", "c1", "c3", "c2"]

    def test_same_multiset(self, make_item):
        items = _sequence(make_item, "AAAABBBCCD")

        result = DiversityEnforcer().enforce(items, 2)

        assert sorted(i.id for i in result) == sorted(i.id for i in items)

    def test_input_not_mutated(self, make_item):
        items = _sequence(make_item, "AAAB")
        before = list(items)

        DiversityEnforcer().enforce(items, 2)

        assert items == before

    @pytest.mark.parametrize("seed", range(25))
    @pytest.mark.parametrize("max_consecutive", [1, 2, 3])
    def test_bound_holds_except_documented_fallback(
        self, make_item, assert_diversity, seed, max_consecutive
    ):
        rng = random.Random(seed)
        sources = [rng.choice("AAAABBC") for _ in range(30)]
        items = _sequence(make_item, sources)

        result = DiversityEnforcer().enforce(items, max_consecutive)

        assert len(result) == len(items)
        assert_diversity(result, max_consecutive)
