"""Analytical queries over the Netflix catalog.

Each query takes the loaded rows plus explicit parameters and returns
an ordered list of result tuples or of SourceRow records. QUERIES
maps CLI names to query definitions.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from src.analytics.aggregator import (
    DEFAULT_KEYWORDS,
    categorize_by_keywords,
    group_count,
    max_duration_selection,
    percentage_of_partition,
    rank_within_partition,
    seasons_threshold,
)
from src.analytics.exploder import explode, has_token, rows_matching
from src.analytics.schemas import (
    CategoryCount,
    ContentType,
    FieldKind,
    GroupCount,
    PartitionShare,
    RankedGroup,
    SourceRow,
)
from src.analytics.splitter import split_field

Rows = Sequence[SourceRow]


# =============================================================================
# DATE HELPERS
# =============================================================================


def years_before(day: date, years: int) -> date:
    """Same calendar day `years` earlier (Feb 29 falls back to Feb 28)."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


# =============================================================================
# QUERIES
# =============================================================================


def count_by_type(rows: Rows) -> list[GroupCount]:
    """Number of movies vs TV shows."""
    return group_count(rows, lambda row: row.type)


def most_common_rating_by_type(rows: Rows) -> list[RankedGroup]:
    """Most frequent rating per content type; ties for first all appear."""
    return rank_within_partition(rows, lambda row: row.type, lambda row: row.rating)


def titles_released_in(
    rows: Rows,
    year: int,
    content_type: ContentType = ContentType.MOVIE,
) -> list[SourceRow]:
    """Titles of one type released in a given year."""
    return [row for row in rows if row.type is content_type and row.release_year == year]


def top_countries(rows: Rows, top_n: int = 5) -> list[GroupCount]:
    """Countries with the most titles, co-productions counted once per country."""
    return group_count(explode(rows, FieldKind.COUNTRY), lambda v: v.value, top_n=top_n)


def longest_movies(rows: Rows) -> list[SourceRow]:
    """Movies sharing the longest running time."""
    return max_duration_selection(rows)


def added_in_last_years(rows: Rows, years: int, today: date) -> list[SourceRow]:
    """Titles added to the catalog on or after `today` minus `years`.

    Rows without a date_added never match.
    """
    cutoff = years_before(today, years)
    return [row for row in rows if row.date_added is not None and row.date_added >= cutoff]


def titles_by_director(rows: Rows, director: str) -> list[SourceRow]:
    """Full rows of every title the director worked on, alone or co-directing."""
    return list(rows_matching(rows, FieldKind.DIRECTOR, director))


def shows_with_more_seasons(rows: Rows, threshold: int = 5) -> list[SourceRow]:
    """TV shows with more than `threshold` seasons."""
    return seasons_threshold(rows, threshold)


def count_by_genre(rows: Rows) -> list[GroupCount]:
    """Number of titles listed in each genre."""
    return group_count(explode(rows, FieldKind.GENRE), lambda v: v.value)


def yearly_share_for_country(
    rows: Rows,
    country: str,
    top_n: int = 5,
) -> list[PartitionShare]:
    """Release years with the largest share of a country's titles."""
    produced = [row for row in rows if has_token(row, FieldKind.COUNTRY, country)]
    return percentage_of_partition(produced, lambda row: row.release_year, top_n=top_n)


def titles_in_genre(
    rows: Rows,
    genre: str,
    content_type: ContentType = ContentType.MOVIE,
) -> list[SourceRow]:
    """Titles of one type listed under a genre (e.g. Documentaries)."""
    return list(
        rows_matching(
            rows,
            FieldKind.GENRE,
            genre,
            predicate=lambda row: row.type is content_type,
        )
    )


def titles_without_director(rows: Rows) -> list[SourceRow]:
    """Titles with no director credited."""
    return [row for row in rows if next(split_field(row.director), None) is None]


def actor_movies_in_last_years(
    rows: Rows,
    actor: str,
    years: int,
    current_year: int,
) -> list[SourceRow]:
    """Movies featuring the actor released within the last `years` years."""
    earliest = current_year - years
    return list(
        rows_matching(
            rows,
            FieldKind.CAST,
            actor,
            predicate=lambda row: row.is_movie and row.release_year > earliest,
        )
    )


def top_actors_for_country(
    rows: Rows,
    country: str,
    top_n: int = 10,
    content_type: ContentType = ContentType.MOVIE,
) -> list[GroupCount]:
    """Actors appearing in the most titles produced in a country."""
    exploded = explode(
        rows,
        FieldKind.CAST,
        predicate=lambda row: row.type is content_type
        and has_token(row, FieldKind.COUNTRY, country),
    )
    return group_count(exploded, lambda v: v.value, top_n=top_n)


def content_categories(
    rows: Rows,
    keywords: Sequence[str] = DEFAULT_KEYWORDS,
) -> list[CategoryCount]:
    """Bad/Good split of titles by violent keywords in their description."""
    return categorize_by_keywords(rows, keywords)


# =============================================================================
# REGISTRY
# =============================================================================


@dataclass(frozen=True)
class CatalogQuery:
    """Named query with the parameters it expects besides rows.

    Attributes:
        name: CLI name.
        func: Query function.
        params: Keyword parameter names, resolved by the caller.
        description: One-line summary for listings.
    """

    name: str
    func: Callable
    params: tuple[str, ...]
    description: str

    def run(self, rows: Rows, **params: object) -> list:
        """Call the query with only the parameters it declares."""
        kwargs = {name: params[name] for name in self.params}
        return self.func(rows, **kwargs)


QUERIES: dict[str, CatalogQuery] = {
    query.name: query
    for query in (
        CatalogQuery("count-by-type", count_by_type, (), "Movies vs TV shows"),
        CatalogQuery(
            "common-rating", most_common_rating_by_type, (), "Most common rating per type"
        ),
        CatalogQuery("released-in", titles_released_in, ("year",), "Movies released in a year"),
        CatalogQuery("top-countries", top_countries, ("top_n",), "Countries with most content"),
        CatalogQuery("longest-movies", longest_movies, (), "Longest movies"),
        CatalogQuery(
            "recently-added", added_in_last_years, ("years", "today"), "Added in last N years"
        ),
        CatalogQuery("by-director", titles_by_director, ("director",), "Titles by a director"),
        CatalogQuery(
            "long-shows", shows_with_more_seasons, ("threshold",), "Shows above N seasons"
        ),
        CatalogQuery("count-by-genre", count_by_genre, (), "Titles per genre"),
        CatalogQuery(
            "country-years",
            yearly_share_for_country,
            ("country", "top_n"),
            "Top release years for a country",
        ),
        CatalogQuery("in-genre", titles_in_genre, ("genre",), "Movies in a genre"),
        CatalogQuery("no-director", titles_without_director, (), "Titles without director"),
        CatalogQuery(
            "actor-movies",
            actor_movies_in_last_years,
            ("actor", "years", "current_year"),
            "Recent movies of an actor",
        ),
        CatalogQuery(
            "country-actors",
            top_actors_for_country,
            ("country", "top_n"),
            "Top actors in a country's movies",
        ),
        CatalogQuery(
            "categories", content_categories, ("keywords",), "Bad/Good content by keywords"
        ),
    )
}
