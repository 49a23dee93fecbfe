"""
Unit tests for the BacklogMixer.
"""
import math
import random

import pytest

from app.services.mixing import BacklogMixer, interleave


def _pools(make_item, recent_count, backlog_count):
    recent = [make_item(f"r{i}", age_days=1) for i in range(recent_count)]
    backlog = [make_item(f"b{i}", age_days=60) for i in range(backlog_count)]
    return recent, backlog


class TestBacklogMixer:
    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 2024])
    @pytest.mark.parametrize(
        "recent_count, backlog_count, ratio",
        [(14, 6, 0.3), (7, 3, 0.3), (5, 5, 0.5), (20, 20, 0.25)],
    )
    def test_quota_with_sufficient_supply(
        self, make_item, seed, recent_count, backlog_count, ratio
    ):
        recent, backlog = _pools(make_item, recent_count, backlog_count)
        mixer = BacklogMixer(rng=random.Random(seed))

        result = mixer.mix(recent, backlog, ratio)

        total = recent_count + backlog_count
        expected_backlog = math.floor(total * ratio)
        expected_recent = total - expected_backlog
        ids = [item.id for item in result]
        backlog_ids = {item.id for item in backlog}
        recent_ids = {item.id for item in recent}

        assert len(ids) == len(set(ids))
        assert set(ids) <= backlog_ids | recent_ids
        assert sum(1 for i in ids if i in backlog_ids) == min(expected_backlog, backlog_count)
        assert sum(1 for i in ids if i in recent_ids) == min(expected_recent, recent_count)

    def test_undersupply_is_not_compensated(self, make_item):
        # total 10, ratio 0.5 -> 5 recent wanted but only 2 exist
        recent, backlog = _pools(make_item, 2, 8)

        result = BacklogMixer(rng=random.Random(3)).mix(recent, backlog, 0.5)

        assert len(result) == 2 + 5
        assert sum(1 for item in result if item.id.startswith("b")) == 5

    def test_ratio_zero_uses_only_recent(self, make_item):
        recent, backlog = _pools(make_item, 4, 6)

        result = BacklogMixer(rng=random.Random(5)).mix(recent, backlog, 0.0)

        assert {item.id for item in result} == {item.id for item in recent}

    def test_ratio_one_uses_only_backlog(self, make_item):
        recent, backlog = _pools(make_item, 4, 6)

        result = BacklogMixer(rng=random.Random(5)).mix(recent, backlog, 1.0)

        assert {item.id for item in result} == {item.id for item in backlog}

    def test_empty_pools(self):
        assert BacklogMixer().mix([], [], 0.3) == []

    def test_recent_first_alternation(self, make_item):
        # total 4, ratio 0.25 -> 3 recent, 1 backlog
        recent, backlog = _pools(make_item, 3, 1)

        result = BacklogMixer(rng=random.Random(9)).mix(recent, backlog, 0.25)

        assert [item.id[0] for item in result] == ["r", "b", "r", "r"]

    def test_inputs_not_mutated(self, make_item):
        recent, backlog = _pools(make_item, 5, 5)
        recent_before = list(recent)
        backlog_before = list(backlog)

        BacklogMixer(rng=random.Random(11)).mix(recent, backlog, 0.4)

        assert recent == recent_before
        assert backlog == backlog_before

    def test_seeded_mix_is_reproducible(self, make_item):
        recent, backlog = _pools(make_item, 8, 8)

        first = BacklogMixer(rng=random.Random(77)).mix(recent, backlog, 0.5)
        second = BacklogMixer(rng=random.Random(77)).mix(recent, backlog, 0.5)

        assert [i.id for i in first] == [i.id for i in second]


class TestInterleave:
    def test_longer_tail_appended(self):
        assert interleave([1, 2, 3, 4], ["a"]) == [1, "a", 2, 3, 4]
        assert interleave([1], ["a", "b", "c"]) == [1, "a", "b", "c"]

    def test_empty_side(self):
        assert interleave([], ["a", "b"]) == ["a", "b"]
        assert interleave([1, 2], []) == [1, 2]
