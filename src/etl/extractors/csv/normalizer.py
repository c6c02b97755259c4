"""Netflix catalog normalizer.

Transforms raw CSV rows into validated, immutable SourceRow records.
"""

from datetime import date, datetime
from typing import Any, Final

from pydantic import ValidationError

from src.analytics.errors import SchemaError
from src.analytics.schemas import ContentType, SourceRow
from src.etl.utils.logger import setup_logger

DATE_FORMATS: Final[tuple[str, ...]] = ("%B %d, %Y", "%b %d, %Y", "%Y-%m-%d")
"""Accepted date_added layouts ("September 25, 2021", "Sep 25, 2021", ISO)."""

_CONTENT_TYPES: Final[dict[str, ContentType]] = {
    "movie": ContentType.MOVIE,
    "tv show": ContentType.TV_SHOW,
    "tvshow": ContentType.TV_SHOW,
}

_TEXT_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "director",
    "casts",
    "country",
    "rating",
    "duration",
    "listed_in",
    "description",
)


class CatalogNormalizer:
    """Normalizes raw catalog rows.

    Blank strings become None, type labels map to ContentType,
    release_year becomes an int and date_added a date.
    """

    def __init__(self) -> None:
        """Initialize normalizer."""
        self._logger = setup_logger("etl.catalog.normalizer")
        self._normalized_count: int = 0
        self._unparsed_dates: int = 0

    @property
    def normalized_count(self) -> int:
        """Rows normalized so far."""
        return self._normalized_count

    @property
    def unparsed_dates(self) -> int:
        """Non-empty date_added values that could not be parsed."""
        return self._unparsed_dates

    # -------------------------------------------------------------------------
    # Main Normalization
    # -------------------------------------------------------------------------

    def normalize(self, raw: dict[str, Any]) -> SourceRow:
        """Normalize a single raw catalog row.

        Args:
            raw: Row as read from CSV (all values str or None).

        Returns:
            Validated SourceRow.

        Raises:
            SchemaError: show_id, type or release_year is missing or invalid.
        """
        show_id = self._clean_string(raw.get("show_id"))
        if show_id is None:
            raise SchemaError("Row without show_id")

        fields: dict[str, Any] = {name: self._clean_string(raw.get(name)) for name in _TEXT_FIELDS}
        if fields["casts"] is None:
            fields["casts"] = self._clean_string(raw.get("cast"))

        try:
            row = SourceRow(
                show_id=show_id,
                type=self._parse_type(show_id, raw.get("type")),
                release_year=self._parse_year(show_id, raw.get("release_year")),
                date_added=self._parse_date(show_id, raw.get("date_added")),
                **fields,
            )
        except ValidationError as e:
            raise SchemaError(f"Invalid row show_id={show_id}: {e}") from e

        self._normalized_count += 1
        return row

    def normalize_batch(self, raw_records: list[dict[str, Any]]) -> list[SourceRow]:
        """Normalize multiple records, stopping at the first invalid one.

        Args:
            raw_records: Raw rows.

        Returns:
            Normalized rows in input order.
        """
        return [self.normalize(record) for record in raw_records]

    # -------------------------------------------------------------------------
    # Field Parsers
    # -------------------------------------------------------------------------

    @staticmethod
    def _clean_string(value: Any) -> str | None:
        """Strip a value, mapping blanks to None."""
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def _parse_type(self, show_id: str, value: Any) -> ContentType:
        label = (self._clean_string(value) or "").lower()
        content_type = _CONTENT_TYPES.get(label)
        if content_type is None:
            raise SchemaError(f"Unknown type {value!r} for show_id={show_id}")
        return content_type

    def _parse_year(self, show_id: str, value: Any) -> int:
        text = self._clean_string(value)
        try:
            return int(text)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise SchemaError(f"Invalid release_year {value!r} for show_id={show_id}") from e

    def _parse_date(self, show_id: str, value: Any) -> date | None:
        """Parse date_added, returning None (with a warning) when unparseable."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        text = self._clean_string(value)
        if text is None:
            return None

        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        self._unparsed_dates += 1
        self._logger.warning(f"Unparsed date_added {text!r} for show_id={show_id}")
        return None
