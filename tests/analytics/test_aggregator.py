"""Unit tests for aggregation modes."""

import pytest

from src.analytics.aggregator import (
    categorize_by_keywords,
    classify_description,
    group_count,
    max_duration_selection,
    parse_duration,
    percentage_of_partition,
    rank_within_partition,
    seasons_threshold,
)
from src.analytics.errors import ParseError
from src.analytics.schemas import CategoryCount, ContentType, GroupCount, RankedGroup
from tests.conftest import make_row

# -------------------------------------------------------------------------
# parse_duration
# -------------------------------------------------------------------------


class TestParseDuration:
    @staticmethod
    def test_minutes() -> None:
        assert parse_duration(make_row(duration="90 min")) == 90

    @staticmethod
    def test_seasons() -> None:
        assert parse_duration(make_row(type="TV Show", duration="7 Seasons")) == 7

    @staticmethod
    def test_single_season() -> None:
        assert parse_duration(make_row(type="TV Show", duration="1 Season")) == 1

    @staticmethod
    def test_empty_is_none() -> None:
        assert parse_duration(make_row(duration=None)) is None
        assert parse_duration(make_row(duration="")) is None

    @staticmethod
    def test_malformed_raises_with_show_id() -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_duration(make_row(show_id="s42", duration="feature length"))
        assert exc_info.value.show_id == "s42"
        assert exc_info.value.field == "duration"
        assert "s42" in str(exc_info.value)


# -------------------------------------------------------------------------
# group_count
# -------------------------------------------------------------------------


class TestGroupCount:
    @staticmethod
    def test_counts_descending() -> None:
        records = ["a", "b", "b", "c", "c", "c"]
        assert group_count(records, lambda r: r) == [
            GroupCount("c", 3),
            GroupCount("b", 2),
            GroupCount("a", 1),
        ]

    @staticmethod
    def test_ties_broken_by_key_ascending() -> None:
        records = ["zeta", "alpha", "mid", "mid"]
        assert [g.key for g in group_count(records, lambda r: r)] == ["mid", "alpha", "zeta"]

    @staticmethod
    def test_top_n() -> None:
        records = ["a", "b", "b", "c", "c", "c"]
        assert group_count(records, lambda r: r, top_n=2) == [GroupCount("c", 3), GroupCount("b", 2)]

    @staticmethod
    def test_negative_top_n_rejected() -> None:
        with pytest.raises(ValueError, match="top_n"):
            group_count(["a", "b", "c"], lambda r: r, top_n=-1)

    @staticmethod
    def test_none_keys_skipped() -> None:
        assert group_count([None, "a", None], lambda r: r) == [GroupCount("a", 1)]

    @staticmethod
    def test_empty() -> None:
        assert group_count([], lambda r: r) == []

    @staticmethod
    def test_group_by_type(catalog_rows) -> None:
        result = group_count(catalog_rows, lambda r: r.type)
        assert result == [GroupCount(ContentType.MOVIE, 4), GroupCount(ContentType.TV_SHOW, 2)]

    @staticmethod
    def test_idempotent(catalog_rows) -> None:
        first = group_count(catalog_rows, lambda r: r.rating)
        second = group_count(catalog_rows, lambda r: r.rating)
        assert first == second


# -------------------------------------------------------------------------
# rank_within_partition
# -------------------------------------------------------------------------


class TestRankWithinPartition:
    @staticmethod
    def test_top_rank_per_partition() -> None:
        records = [("Movie", "R"), ("Movie", "R"), ("Movie", "PG"), ("Show", "TV-MA")]
        result = rank_within_partition(records, lambda r: r[0], lambda r: r[1])
        assert result == [
            RankedGroup("Movie", "R", 2, 1),
            RankedGroup("Show", "TV-MA", 1, 1),
        ]

    @staticmethod
    def test_ties_share_rank_one() -> None:
        records = [("Movie", "R"), ("Movie", "PG"), ("Movie", "G")]
        result = rank_within_partition(records, lambda r: r[0], lambda r: r[1])
        assert [(g.key, g.rank) for g in result] == [("G", 1), ("PG", 1), ("R", 1)]

    @staticmethod
    def test_standard_rank_skips_after_ties() -> None:
        records = [("M", "a"), ("M", "a"), ("M", "b"), ("M", "b"), ("M", "c")]
        result = rank_within_partition(records, lambda r: r[0], lambda r: r[1], max_rank=3)
        assert [(g.key, g.rank) for g in result] == [("a", 1), ("b", 1), ("c", 3)]

    @staticmethod
    def test_max_rank_two_excludes_rank_three() -> None:
        records = [("M", "a"), ("M", "a"), ("M", "b"), ("M", "b"), ("M", "c")]
        result = rank_within_partition(records, lambda r: r[0], lambda r: r[1], max_rank=2)
        assert [g.key for g in result] == ["a", "b"]

    @staticmethod
    def test_every_partition_has_rank_one(catalog_rows) -> None:
        result = rank_within_partition(catalog_rows, lambda r: r.type, lambda r: r.rating)
        partitions = {r.type for r in catalog_rows}
        assert {g.partition for g in result if g.rank == 1} == partitions

    @staticmethod
    def test_null_keys_skipped() -> None:
        records = [("M", None), ("M", "a")]
        result = rank_within_partition(records, lambda r: r[0], lambda r: r[1])
        assert result == [RankedGroup("M", "a", 1, 1)]


# -------------------------------------------------------------------------
# percentage_of_partition
# -------------------------------------------------------------------------


class TestPercentageOfPartition:
    @staticmethod
    def test_shares() -> None:
        records = [2019, 2019, 2020, 2021]
        result = percentage_of_partition(records, lambda r: r)
        assert [(s.key, s.count, s.share) for s in result] == [
            (2019, 2, 50.0),
            (2020, 1, 25.0),
            (2021, 1, 25.0),
        ]
        assert all(s.total == 4 for s in result)

    @staticmethod
    def test_rounded_to_two_decimals() -> None:
        result = percentage_of_partition(["a", "b", "c"], lambda r: r)
        assert [s.share for s in result] == [33.33, 33.33, 33.33]

    @staticmethod
    def test_shares_sum_to_hundred() -> None:
        records = [1, 1, 2, 3, 3, 3, 4, 5, 5, 6, 7]
        result = percentage_of_partition(records, lambda r: r)
        assert sum(s.share for s in result) == pytest.approx(100, abs=0.01 * len(result))

    @staticmethod
    def test_top_n() -> None:
        result = percentage_of_partition([1, 1, 2, 3], lambda r: r, top_n=1)
        assert len(result) == 1
        assert result[0].key == 1

    @staticmethod
    def test_empty_input() -> None:
        assert percentage_of_partition([], lambda r: r) == []

    @staticmethod
    def test_negative_top_n_rejected() -> None:
        with pytest.raises(ValueError, match="top_n"):
            percentage_of_partition([1, 2, 3], lambda r: r, top_n=-1)


# -------------------------------------------------------------------------
# max_duration_selection / seasons_threshold
# -------------------------------------------------------------------------


class TestMaxDurationSelection:
    @staticmethod
    def test_returns_all_longest_movies(catalog_rows) -> None:
        result = max_duration_selection(catalog_rows)
        assert [r.show_id for r in result] == ["s1", "s3"]

    @staticmethod
    def test_tv_shows_ignored() -> None:
        rows = [
            make_row(show_id="m1", duration="99 min"),
            make_row(show_id="t1", type="TV Show", duration="120 Seasons"),
        ]
        assert [r.show_id for r in max_duration_selection(rows)] == ["m1"]

    @staticmethod
    def test_numeric_not_lexical() -> None:
        rows = [make_row(show_id="m1", duration="99 min"), make_row(show_id="m2", duration="100 min")]
        assert [r.show_id for r in max_duration_selection(rows)] == ["m2"]

    @staticmethod
    def test_missing_duration_skipped() -> None:
        rows = [make_row(show_id="m1", duration=None), make_row(show_id="m2", duration="80 min")]
        assert [r.show_id for r in max_duration_selection(rows)] == ["m2"]

    @staticmethod
    def test_malformed_duration_aborts() -> None:
        rows = [make_row(show_id="m1", duration="80 min"), make_row(show_id="m2", duration="long")]
        with pytest.raises(ParseError) as exc_info:
            max_duration_selection(rows)
        assert exc_info.value.show_id == "m2"

    @staticmethod
    def test_no_movies() -> None:
        assert max_duration_selection([make_row(type="TV Show", duration="3 Seasons")]) == []


class TestSeasonsThreshold:
    @staticmethod
    def test_seven_seasons_above_five() -> None:
        row = make_row(type="TV Show", duration="7 Seasons")
        assert seasons_threshold([row], 5) == [row]

    @staticmethod
    def test_threshold_is_exclusive() -> None:
        row = make_row(type="TV Show", duration="5 Seasons")
        assert seasons_threshold([row], 5) == []

    @staticmethod
    def test_movies_ignored() -> None:
        assert seasons_threshold([make_row(type="Movie", duration="300 min")], 5) == []

    @staticmethod
    def test_malformed_show_duration() -> None:
        with pytest.raises(ParseError):
            seasons_threshold([make_row(show_id="t9", type="TV Show", duration="Seasons")], 5)


# -------------------------------------------------------------------------
# Keyword categorization
# -------------------------------------------------------------------------


class TestCategorize:
    @staticmethod
    def test_kill_is_bad() -> None:
        assert classify_description("A story of kill and survival") == "Bad"

    @staticmethod
    def test_happy_is_good() -> None:
        assert classify_description("A happy tale") == "Good"

    @staticmethod
    def test_case_insensitive() -> None:
        assert classify_description("Extreme VIOLENCE ahead") == "Bad"

    @staticmethod
    def test_substring_match() -> None:
        assert classify_description("A hired killer returns") == "Bad"

    @staticmethod
    def test_none_description_is_good() -> None:
        assert classify_description(None) == "Good"

    @staticmethod
    def test_custom_labels() -> None:
        assert classify_description("war", ["war"], matched="Dark", unmatched="Light") == "Dark"

    @staticmethod
    def test_counts_per_bucket(catalog_rows) -> None:
        assert categorize_by_keywords(catalog_rows) == [
            CategoryCount("Good", 4),
            CategoryCount("Bad", 2),
        ]

    @staticmethod
    def test_each_row_in_exactly_one_bucket(catalog_rows) -> None:
        result = categorize_by_keywords(catalog_rows)
        assert sum(c.count for c in result) == len(catalog_rows)

    @staticmethod
    @pytest.mark.parametrize("keywords", [[""], ["kill", "  "]])
    def test_blank_keyword_rejected(catalog_rows, keywords: list[str]) -> None:
        with pytest.raises(ValueError, match="Blank keyword"):
            categorize_by_keywords(catalog_rows, keywords)
