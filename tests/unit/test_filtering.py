"""
Unit tests for filter rules and the FilterEngine.
"""
import pytest

from app.models.schemas import (
    DurationRange,
    FilterConfiguration,
    FilterKeyword,
    SourceType,
)
from app.services.filtering import (
    DurationFilterRule,
    FilterEngine,
    KeywordFilterRule,
    SourceTypeFilterRule,
    build_filter_rules,
)


class TestKeywordFilterRule:
    def test_whole_word_match(self, make_item):
        rule = KeywordFilterRule("war", is_wildcard=False)

        assert rule.matches(make_item("c1", title="War in Ukraine")) is True
        assert rule.matches(make_item("c2", title="Star Wars Review")) is False

    def test_searches_description(self, make_item):
        rule = KeywordFilterRule("spoilers")
        item = make_item("c1", title="Season finale", description="Contains spoilers!")

        assert rule.matches(item) is True

    def test_missing_description_is_empty(self, make_item):
        rule = KeywordFilterRule("none")
        assert rule.matches(make_item("c1", title="Something", description=None)) is False

    def test_wildcard_matches_substring(self, make_item):
        rule = KeywordFilterRule("*war*", is_wildcard=True)

        assert rule.matches(make_item("c1", title="Star Wars Review")) is True
        assert rule.matches(make_item("c2", title="Peaceful gardens")) is False

    def test_case_sensitive_whole_word(self, make_item):
        rule = KeywordFilterRule("War", is_wildcard=False, case_sensitive=True)

        assert rule.matches(make_item("c1", title="War in Ukraine")) is True
        assert rule.matches(make_item("c2", title="war games")) is False

    def test_case_sensitive_wildcard(self, make_item):
        rule = KeywordFilterRule("War*", is_wildcard=True, case_sensitive=True)

        assert rule.matches(make_item("c1", title="Star Wars")) is True
        assert rule.matches(make_item("c2", title="star wars")) is False

    def test_regex_characters_are_literal(self, make_item):
        rule = KeywordFilterRule("a.b")

        assert rule.matches(make_item("c1", title="axb test")) is False
        assert rule.matches(make_item("c2", title="about a.b test")) is True

    def test_reason_embeds_keyword_verbatim(self):
        assert KeywordFilterRule("*War*", is_wildcard=True).reason() == "Keyword: *War*"


class TestDurationFilterRule:
    def test_missing_duration_never_matches(self, make_item):
        rule = DurationFilterRule(min_seconds=60, max_seconds=600)
        assert rule.matches(make_item("c1", duration=None)) is False

    def test_min_bound(self, make_item):
        rule = DurationFilterRule(min_seconds=300)

        assert rule.matches(make_item("c1", duration=299)) is True
        assert rule.matches(make_item("c2", duration=300)) is False
        assert rule.matches(make_item("c3", duration=10_000)) is False

    def test_max_bound(self, make_item):
        rule = DurationFilterRule(max_seconds=3600)

        assert rule.matches(make_item("c1", duration=3601)) is True
        assert rule.matches(make_item("c2", duration=3600)) is False
        assert rule.matches(make_item("c3", duration=1)) is False

    def test_both_bounds(self, make_item):
        rule = DurationFilterRule(min_seconds=300, max_seconds=3600)

        assert rule.matches(make_item("c1", duration=120)) is True
        assert rule.matches(make_item("c2", duration=7200)) is True
        assert rule.matches(make_item("c3", duration=900)) is False

    @pytest.mark.parametrize(
        "min_seconds, max_seconds, expected",
        [
            (300, 3600, "Duration not between 5m and 60m"),
            (300, None, "Duration less than 5m"),
            (None, 3600, "Duration more than 60m"),
            (90, None, "Duration less than 1m"),
        ],
    )
    def test_reason_in_minutes(self, min_seconds, max_seconds, expected):
        assert DurationFilterRule(min_seconds, max_seconds).reason() == expected

    def test_requires_a_bound(self):
        with pytest.raises(ValueError):
            DurationFilterRule()


class TestSourceTypeFilterRule:
    def test_filters_types_outside_allow_list(self, make_item):
        rule = SourceTypeFilterRule({SourceType.YOUTUBE, SourceType.PODCAST})

        assert rule.matches(make_item("c1", source_type=SourceType.YOUTUBE)) is False
        assert rule.matches(make_item("c2", source_type=SourceType.RSS)) is True
        assert rule.reason() == "Content type not in allowed list"


class TestFilterEngine:
    def test_no_rules_filters_nothing(self, make_item):
        result = FilterEngine([]).evaluate(make_item("c1"))

        assert result.is_filtered is False
        assert result.matched_rules == []
        assert result.reasons == []

    def test_or_semantics_and_reasons(self, make_item):
        keyword = KeywordFilterRule("war")
        duration = DurationFilterRule(max_seconds=600)
        source_type = SourceTypeFilterRule({SourceType.YOUTUBE})
        engine = FilterEngine([keyword, duration, source_type])

        item = make_item("c1", title="War stories", duration=1200)
        result = engine.evaluate(item)

        assert result.is_filtered is True
        assert result.matched_rules == [keyword, duration]
        assert result.reasons == ["Keyword: war", "Duration more than 10m"]
        assert len(result.reasons) == len(result.matched_rules)

    def test_single_match_is_enough(self, make_item):
        engine = FilterEngine(
            [KeywordFilterRule("cats"), KeywordFilterRule("dogs")]
        )

        assert engine.evaluate(make_item("c1", title="Dogs at play")).is_filtered is True
        assert engine.evaluate(make_item("c2", title="Birds at play")).is_filtered is False

    def test_evaluate_batch_is_stable(self, make_item):
        engine = FilterEngine([KeywordFilterRule("spam")])
        items = [
            make_item("c1", title="Good one"),
            make_item("c2", title="spam spam"),
            make_item("c3", title="Another good one"),
            make_item("c4", title="More spam"),
            make_item("c5", title="Last good one"),
        ]

        kept = engine.evaluate_batch(items)

        assert [item.id for item in kept] == ["c1", "c3", "c5"]
        assert len(items) == 5

    def test_rules_fixed_at_construction(self):
        rules = [KeywordFilterRule("a")]
        engine = FilterEngine(rules)
        rules.append(KeywordFilterRule("b"))

        assert len(engine.rules) == 1


class TestBuildFilterRules:
    def test_builds_all_rule_kinds(self):
        config = FilterConfiguration(
            user_id="u1",
            keywords=[
                FilterKeyword(id="k1", keyword="war"),
                FilterKeyword(id="k2", keyword="*crypto*", is_wildcard=True),
            ],
            duration_range=DurationRange(min=60, max=None),
            content_type_preferences=[SourceType.YOUTUBE],
        )

        rules = build_filter_rules(config)

        assert [type(rule) for rule in rules] == [
            KeywordFilterRule,
            KeywordFilterRule,
            DurationFilterRule,
            SourceTypeFilterRule,
        ]
        assert rules[1].is_wildcard is True

    def test_empty_configuration(self):
        config = FilterConfiguration(
            user_id="u1", duration_range=DurationRange(min=None, max=None)
        )
        assert build_filter_rules(config) == []
