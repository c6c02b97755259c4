"""Aggregation modes over catalog rows and exploded values.

Each mode is a pure, single-pass function with explicit parameters:

- group_count: count per key, top-N
- rank_within_partition: most frequent keys per partition (RANK semantics)
- percentage_of_partition: share of each key in a filtered set
- max_duration_selection: longest movies
- seasons_threshold: shows with many seasons
- categorize_by_keywords: keyword buckets on descriptions

Ordering ties on count are always broken by key ascending.
"""

import re
from collections import Counter, defaultdict
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any, Final, TypeVar

from src.analytics.errors import ParseError
from src.analytics.schemas import (
    CategoryCount,
    GroupCount,
    PartitionShare,
    RankedGroup,
    SourceRow,
)
from src.etl.utils.logger import setup_logger

logger = setup_logger("analytics.aggregator")

T = TypeVar("T")
KeyFunc = Callable[[T], Hashable]

# =============================================================================
# CONSTANTS
# =============================================================================

DURATION_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*(\d+)")
"""Leading integer of a duration ("90 min", "3 Seasons")."""

PERCENT_DECIMALS: Final[int] = 2

DEFAULT_KEYWORDS: Final[tuple[str, ...]] = ("kill", "violence")
MATCHED_CATEGORY: Final[str] = "Bad"
UNMATCHED_CATEGORY: Final[str] = "Good"


# =============================================================================
# HELPERS
# =============================================================================


def _count_by(records: Iterable[T], key: KeyFunc) -> Counter:
    """Count records per non-null key."""
    counts: Counter = Counter()
    for record in records:
        value = key(record)
        if value is not None:
            counts[value] += 1
    return counts


def _by_count_then_key(item: tuple[Any, int]) -> tuple[int, Any]:
    return -item[1], item[0]


def _check_top_n(top_n: int | None) -> None:
    if top_n is not None and top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")


def parse_duration(row: SourceRow) -> int | None:
    """Parse the leading integer of a row's duration.

    Args:
        row: Catalog row.

    Returns:
        Minutes for movies, seasons for shows, or None when duration is empty.

    Raises:
        ParseError: Duration is present but has no numeric prefix.
    """
    if not row.duration:
        return None

    match = DURATION_PATTERN.match(row.duration)
    if match is None:
        raise ParseError(row.show_id, "duration", row.duration)
    return int(match.group(1))


# =============================================================================
# GROUP + COUNT
# =============================================================================


def group_count(
    records: Iterable[T],
    key: KeyFunc,
    *,
    top_n: int | None = None,
) -> list[GroupCount]:
    """Count records per key, most frequent first.

    Args:
        records: SourceRow or ExplodedValue records.
        key: Grouping key extractor. Records with a None key are skipped.
        top_n: Keep only the first N groups (None for all).

    Returns:
        Groups ordered by count descending, then key ascending.

    Raises:
        ValueError: top_n is negative.
    """
    _check_top_n(top_n)
    counts = _count_by(records, key)
    ordered = sorted(counts.items(), key=_by_count_then_key)
    if top_n is not None:
        ordered = ordered[:top_n]

    logger.debug("group_count: %d groups (top_n=%s)", len(counts), top_n)
    return [GroupCount(key=k, count=c) for k, c in ordered]


# =============================================================================
# RANK WITHIN PARTITION
# =============================================================================


def rank_within_partition(
    records: Iterable[T],
    partition: KeyFunc,
    key: KeyFunc,
    *,
    max_rank: int = 1,
) -> list[RankedGroup]:
    """Rank keys by frequency inside each partition.

    Groups tied on count share a rank, and the next rank skips by the
    number of tied groups (1, 1, 3). Several rows per partition are
    returned when counts tie within ``max_rank``.

    Args:
        records: Records to group.
        partition: Partition key extractor (e.g. content type).
        key: Ranked key extractor (e.g. rating).
        max_rank: Highest rank kept (1 keeps the most frequent keys only).

    Returns:
        Ranked groups ordered by partition, rank, then key.
    """
    counts = _count_by(records, lambda r: _pair_or_none(partition(r), key(r)))

    per_partition: dict[Any, list[tuple[Any, int]]] = defaultdict(list)
    for (part, value), count in counts.items():
        per_partition[part].append((value, count))

    ranked: list[RankedGroup] = []
    for part in sorted(per_partition):
        groups = sorted(per_partition[part], key=_by_count_then_key)
        for value, count in groups:
            rank = 1 + sum(1 for _, other in groups if other > count)
            if rank <= max_rank:
                ranked.append(RankedGroup(partition=part, key=value, count=count, rank=rank))

    logger.debug("rank_within_partition: %d partitions", len(per_partition))
    return ranked


def _pair_or_none(part: Any, value: Any) -> tuple[Any, Any] | None:
    if part is None or value is None:
        return None
    return part, value


# =============================================================================
# PERCENTAGE OF PARTITION
# =============================================================================


def percentage_of_partition(
    records: Iterable[T],
    key: KeyFunc,
    *,
    top_n: int | None = None,
) -> list[PartitionShare]:
    """Compute each key's share of an already filtered record set.

    The total is the number of records with a non-null key, so shares
    over all groups add up to 100 within rounding.

    Args:
        records: Filtered records (e.g. rows produced in one country).
        key: Grouping key extractor (e.g. release year).
        top_n: Keep only the first N groups (None for all).

    Returns:
        Shares rounded to two decimals, ordered by share descending, then key.

    Raises:
        ValueError: top_n is negative.
    """
    _check_top_n(top_n)
    counts = _count_by(records, key)
    total = sum(counts.values())
    if total == 0:
        return []

    ordered = sorted(counts.items(), key=_by_count_then_key)
    if top_n is not None:
        ordered = ordered[:top_n]

    return [
        PartitionShare(
            key=k,
            count=c,
            total=total,
            share=round(c / total * 100, PERCENT_DECIMALS),
        )
        for k, c in ordered
    ]


# =============================================================================
# DURATION-BASED SELECTIONS
# =============================================================================


def max_duration_selection(rows: Iterable[SourceRow]) -> list[SourceRow]:
    """Return every movie whose duration equals the longest movie duration.

    Only Movie rows take part in the comparison; TV shows are ignored.
    Movies without a duration are skipped.

    Args:
        rows: Catalog rows.

    Returns:
        Longest movies, in input order (empty if no movie has a duration).

    Raises:
        ParseError: A movie duration has no numeric prefix.
    """
    timed: list[tuple[SourceRow, int]] = []
    for row in rows:
        if not row.is_movie:
            continue
        minutes = parse_duration(row)
        if minutes is not None:
            timed.append((row, minutes))

    if not timed:
        return []

    longest = max(minutes for _, minutes in timed)
    logger.debug("max_duration_selection: longest=%d min", longest)
    return [row for row, minutes in timed if minutes == longest]


def seasons_threshold(rows: Iterable[SourceRow], threshold: int) -> list[SourceRow]:
    """Return TV shows with strictly more seasons than threshold.

    Args:
        rows: Catalog rows.
        threshold: Season count to exceed.

    Returns:
        Matching TV-show rows, in input order.

    Raises:
        ParseError: A show duration has no numeric prefix.
    """
    selected = []
    for row in rows:
        if not row.is_tv_show:
            continue
        seasons = parse_duration(row)
        if seasons is not None and seasons > threshold:
            selected.append(row)
    return selected


# =============================================================================
# KEYWORD CATEGORIZATION
# =============================================================================


def classify_description(
    description: str | None,
    keywords: Sequence[str] = DEFAULT_KEYWORDS,
    *,
    matched: str = MATCHED_CATEGORY,
    unmatched: str = UNMATCHED_CATEGORY,
) -> str:
    """Bucket a description by case-insensitive keyword substring match."""
    text = (description or "").lower()
    if any(keyword.lower() in text for keyword in keywords):
        return matched
    return unmatched


def categorize_by_keywords(
    rows: Iterable[SourceRow],
    keywords: Sequence[str] = DEFAULT_KEYWORDS,
    *,
    matched: str = MATCHED_CATEGORY,
    unmatched: str = UNMATCHED_CATEGORY,
) -> list[CategoryCount]:
    """Classify each row into one bucket and count rows per bucket.

    Args:
        rows: Catalog rows.
        keywords: Substrings flagging a description.
        matched: Bucket for descriptions containing a keyword.
        unmatched: Bucket for every other row.

    Returns:
        Category counts ordered by count descending, then category.

    Raises:
        ValueError: A keyword is blank (it would match every row).
    """
    if any(not keyword.strip() for keyword in keywords):
        raise ValueError(f"Blank keyword in {list(keywords)!r}")

    groups = group_count(
        rows,
        lambda row: classify_description(
            row.description, keywords, matched=matched, unmatched=unmatched
        ),
    )
    return [CategoryCount(category=g.key, count=g.count) for g in groups]
