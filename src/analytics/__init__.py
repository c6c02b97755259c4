"""Catalog analytics: delimited-field splitting, exploding and aggregation.

Example:
    >>> from src.analytics import FieldKind, explode, group_count
    >>> counts = group_count(explode(rows, FieldKind.COUNTRY), lambda v: v.value)
"""

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
from src.analytics.errors import CatalogError, ParseError, SchemaError
from src.analytics.exploder import explode, has_token, rows_matching
from src.analytics.queries import QUERIES, CatalogQuery
from src.analytics.schemas import (
    CategoryCount,
    ContentType,
    ExplodedValue,
    FieldKind,
    GroupCount,
    PartitionShare,
    RankedGroup,
    SourceRow,
)
from src.analytics.splitter import split_field

__all__ = [
    # Splitting / exploding
    "split_field",
    "explode",
    "has_token",
    "rows_matching",
    # Aggregation
    "group_count",
    "rank_within_partition",
    "percentage_of_partition",
    "max_duration_selection",
    "seasons_threshold",
    "classify_description",
    "categorize_by_keywords",
    "parse_duration",
    # Queries
    "QUERIES",
    "CatalogQuery",
    # Schemas
    "SourceRow",
    "ContentType",
    "FieldKind",
    "ExplodedValue",
    "GroupCount",
    "RankedGroup",
    "PartitionShare",
    "CategoryCount",
    # Errors
    "CatalogError",
    "ParseError",
    "SchemaError",
]
