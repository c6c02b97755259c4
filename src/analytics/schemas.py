"""Schemas for catalog rows, exploded values and query results.

SourceRow is the validated, immutable representation of one
catalog item. ExplodedValue and the result tuples are ephemeral,
produced per query and discarded afterwards.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# =============================================================================
# ENUMS
# =============================================================================


class ContentType(str, Enum):
    """Catalog item type, valued with the labels used in the CSV export."""

    MOVIE = "Movie"
    TV_SHOW = "TV Show"


class FieldKind(Enum):
    """Multi-valued fields that can be exploded, mapped to their row attribute."""

    COUNTRY = "country"
    DIRECTOR = "director"
    CAST = "cast"
    GENRE = "genre"

    @property
    def column(self) -> str:
        """SourceRow attribute holding the delimited values."""
        return _FIELD_COLUMNS[self]


_FIELD_COLUMNS: dict[FieldKind, str] = {
    FieldKind.COUNTRY: "country",
    FieldKind.DIRECTOR: "director",
    FieldKind.CAST: "casts",
    FieldKind.GENRE: "listed_in",
}


# =============================================================================
# SOURCE ROW
# =============================================================================


class SourceRow(BaseModel):
    """One catalog item.

    Attributes:
        show_id: Unique identifier (required).
        type: Movie or TV Show (required).
        title: Display title.
        director: Comma-separated director names.
        casts: Comma-separated cast names (CSV column ``cast``).
        country: Comma-separated production countries.
        date_added: Date the title was added to the catalog.
        release_year: Original release year (required).
        rating: Audience rating code (e.g. TV-MA).
        duration: "<int> min" for movies, "<int> Season(s)" for shows.
        listed_in: Comma-separated genre names.
        description: Free-text synopsis.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    show_id: str = Field(min_length=1)
    type: ContentType
    title: str | None = None
    director: str | None = None
    casts: str | None = Field(default=None, validation_alias=AliasChoices("casts", "cast"))
    country: str | None = None
    date_added: date | None = None
    release_year: int
    rating: str | None = None
    duration: str | None = None
    listed_in: str | None = None
    description: str | None = None

    @property
    def is_movie(self) -> bool:
        """True for Movie rows."""
        return self.type is ContentType.MOVIE

    @property
    def is_tv_show(self) -> bool:
        """True for TV Show rows."""
        return self.type is ContentType.TV_SHOW

    def field_value(self, kind: FieldKind) -> str | None:
        """Raw delimited value for an explodable field."""
        return getattr(self, kind.column)


# =============================================================================
# EXPLODED VALUE
# =============================================================================


@dataclass(frozen=True)
class ExplodedValue:
    """One token extracted from a multi-valued field of a row.

    Attributes:
        show_id: Back-reference to the originating row.
        field_kind: Which field the token came from.
        value: Trimmed, non-empty token.
    """

    show_id: str
    field_kind: FieldKind
    value: str


# =============================================================================
# RESULT ROWS
# =============================================================================


class GroupCount(NamedTuple):
    """Count of records sharing a key."""

    key: Any
    count: int


class RankedGroup(NamedTuple):
    """Group count ranked inside its partition (standard RANK semantics)."""

    partition: Any
    key: Any
    count: int
    rank: int


class PartitionShare(NamedTuple):
    """Group count as a percentage of its filtered partition."""

    key: Any
    count: int
    total: int
    share: float


class CategoryCount(NamedTuple):
    """Number of rows classified into a category."""

    category: str
    count: int
