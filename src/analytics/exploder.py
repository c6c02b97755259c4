"""Row exploder for multi-valued catalog fields.

Turns each row into one ExplodedValue per token of a delimited
field, and joins tokens back to their full rows.
"""

from collections.abc import Callable, Collection, Iterable, Iterator

from src.analytics.schemas import ExplodedValue, FieldKind, SourceRow
from src.analytics.splitter import split_field
from src.etl.utils.logger import setup_logger

logger = setup_logger("analytics.exploder")

RowPredicate = Callable[[SourceRow], bool]


def explode(
    rows: Iterable[SourceRow],
    kind: FieldKind,
    predicate: RowPredicate | None = None,
) -> Iterator[ExplodedValue]:
    """Yield one ExplodedValue per (row, token) pair.

    Rows whose field is null or empty produce nothing and never
    appear as a null group downstream.

    Args:
        rows: Catalog rows.
        kind: Field to explode.
        predicate: Optional row filter applied before exploding.

    Yields:
        Exploded values, in row order then token order.
    """
    for row in rows:
        if predicate is not None and not predicate(row):
            continue
        for token in split_field(row.field_value(kind)):
            yield ExplodedValue(show_id=row.show_id, field_kind=kind, value=token)


def has_token(row: SourceRow, kind: FieldKind, target: str) -> bool:
    """Check whether any token of a row's field equals target."""
    return any(token == target for token in split_field(row.field_value(kind)))


def rows_matching(
    rows: Iterable[SourceRow],
    kind: FieldKind,
    targets: str | Collection[str],
    predicate: RowPredicate | None = None,
) -> Iterator[SourceRow]:
    """Yield original rows where at least one token matches a target.

    Each matching row is yielded once, in input order, regardless of
    how many of its tokens match.

    Args:
        rows: Catalog rows.
        kind: Field to explode.
        targets: Value or values to look for (exact match on trimmed tokens).
        predicate: Optional row filter applied before exploding.

    Yields:
        Full SourceRow records.
    """
    wanted = {targets} if isinstance(targets, str) else set(targets)
    matched = 0

    for row in rows:
        if predicate is not None and not predicate(row):
            continue
        if any(token in wanted for token in split_field(row.field_value(kind))):
            matched += 1
            yield row

    logger.debug("rows_matching %s=%s: %d rows", kind.value, sorted(wanted), matched)
