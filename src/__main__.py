"""Entry point of the src package. Enables `python -m src`."""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Any

from src.analytics import QUERIES, CatalogError, CatalogQuery, SourceRow
from src.etl import CatalogExtractor
from src.etl.utils import configure_logging, setup_logger
from src.settings import get_settings_summary, settings

SEPARATOR = " | "

ROW_COLUMNS = ("show_id", "type", "title", "release_year", "duration", "country")
"""SourceRow columns printed for row-selecting queries."""


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def positive_int(value: str) -> int:
    """Argparse type: integer greater than zero."""
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {number}")
    return number


def non_negative_int(value: str) -> int:
    """Argparse type: integer zero or greater."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def keyword(value: str) -> str:
    """Argparse type: non-blank keyword, lowercased."""
    value = value.strip().lower()
    if not value:
        raise argparse.ArgumentTypeError("keyword must not be blank")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    catalog = settings.catalog
    parser = argparse.ArgumentParser(
        description="Netflix catalog analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src --list
  python -m src count-by-type
  python -m src top-countries --top 10
  python -m src by-director --director "Rajiv Chilaka"
  python -m src categories --keywords kill violence
        """,
    )

    parser.add_argument("query", nargs="?", choices=sorted(QUERIES), help="Query to run")
    parser.add_argument("--list", action="store_true", help="List available queries")
    parser.add_argument("--csv", type=Path, default=None, help=f"Catalog CSV ({catalog.csv_path})")

    parser.add_argument("--director", default=catalog.director)
    parser.add_argument("--actor", default=catalog.actor)
    parser.add_argument("--country", default=catalog.country)
    parser.add_argument("--genre", default=catalog.genre)
    parser.add_argument("--year", type=int, default=catalog.year)
    parser.add_argument("--years", type=positive_int, default=None, help="Window in years")
    parser.add_argument("--threshold", type=non_negative_int, default=catalog.seasons_threshold)
    parser.add_argument("--top", type=positive_int, default=None, help="Number of groups to keep")
    parser.add_argument("--keywords", type=keyword, nargs="+", default=catalog.keywords)
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )

    return parser


def resolve_params(query: CatalogQuery, args: argparse.Namespace) -> dict[str, Any]:
    """Map CLI arguments and settings defaults to query parameters.

    Args:
        query: Query to run.
        args: Parsed arguments.

    Returns:
        Keyword parameters for CatalogQuery.run.
    """
    catalog = settings.catalog
    today = args.today or date.today()

    if args.years is not None:
        years = args.years
    elif query.name == "actor-movies":
        years = catalog.actor_years
    else:
        years = catalog.recent_years

    if args.top is not None:
        top_n = args.top
    elif query.name == "country-actors":
        top_n = catalog.actor_top_n
    else:
        top_n = catalog.top_n

    return {
        "year": args.year,
        "top_n": top_n,
        "years": years,
        "today": today,
        "current_year": today.year,
        "director": args.director,
        "actor": args.actor,
        "country": args.country,
        "genre": args.genre,
        "threshold": args.threshold,
        "keywords": list(args.keywords),
    }


# =============================================================================
# OUTPUT
# =============================================================================


def format_result(item: Any) -> str:
    """Render one result row as a single line."""
    if isinstance(item, SourceRow):
        values = [getattr(item, column) for column in ROW_COLUMNS]
    else:
        values = list(item)
    return SEPARATOR.join(_format_value(v) for v in values)


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def list_queries() -> None:
    """Print available queries."""
    for name in sorted(QUERIES):
        query = QUERIES[name]
        params = ", ".join(query.params) or "-"
        print(f"  {name:<16} {query.description} [{params}]")


# =============================================================================
# MAIN
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Run one catalog query and print its result.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        list_queries()
        return 0

    if not args.query:
        parser.print_help()
        return 1

    configure_logging(
        "DEBUG" if settings.debug else settings.logging.level,
        settings.logging.log_path if settings.logging.to_file else None,
    )
    logger = setup_logger("cli")
    logger.debug(f"Settings: {get_settings_summary()}")

    query = QUERIES[args.query]
    csv_path = args.csv or settings.catalog.csv_path

    try:
        rows = CatalogExtractor(csv_path).extract()
        results = query.run(rows, **resolve_params(query, args))
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except CatalogError as e:
        logger.error(f"{query.name} failed: {e}")
        return 1

    logger.info(f"{query.name}: {len(results)} result rows")
    for item in results:
        print(format_result(item))
    return 0


if __name__ == "__main__":
    sys.exit(main())
