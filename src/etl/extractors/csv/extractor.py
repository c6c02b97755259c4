"""CSV extractor for the Netflix catalog export.

Reads netflix_titles.csv with Polars, checks the schema and
returns an immutable snapshot of SourceRow records.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Final

import polars as pl

from src.analytics.errors import SchemaError
from src.analytics.schemas import SourceRow
from src.etl.extractors.csv.normalizer import CatalogNormalizer
from src.etl.utils.logger import setup_logger

CAST_COLUMN: Final[str] = "cast"
CASTS_COLUMN: Final[str] = "casts"

NULL_VALUES: Final[list[str]] = ["", "NA", "N/A", "null", "None"]


@dataclass
class LoadStats:
    """Catalog load statistics."""

    total_rows: int = 0
    unparsed_dates: int = 0
    duration_seconds: float = 0.0


class CatalogExtractor:
    """Loads the Netflix catalog CSV into SourceRow records.

    Attributes:
        name: Extractor identifier.
        stats: Statistics of the last load.
    """

    name = "netflix_csv"

    # -------------------------------------------------------------------------
    # Column Configuration
    # -------------------------------------------------------------------------

    REQUIRED_COLUMNS: frozenset[str] = frozenset(
        {
            "show_id",
            "type",
            "title",
            "director",
            CASTS_COLUMN,
            "country",
            "date_added",
            "release_year",
            "rating",
            "duration",
            "listed_in",
            "description",
        }
    )

    def __init__(self, csv_path: Path) -> None:
        """Initialize extractor.

        Args:
            csv_path: Path to the catalog CSV file.
        """
        self.csv_path = Path(csv_path)
        self.stats = LoadStats()
        self._logger = setup_logger(f"etl.{self.name}")

    # -------------------------------------------------------------------------
    # Main Extraction
    # -------------------------------------------------------------------------

    def extract(self) -> tuple[SourceRow, ...]:
        """Read, validate and normalize the catalog.

        Returns:
            Immutable snapshot of catalog rows, in file order.

        Raises:
            FileNotFoundError: CSV file does not exist.
            SchemaError: Missing columns, duplicate ids or invalid rows.
        """
        if not self.csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {self.csv_path}")

        start = datetime.now()
        self._logger.info(f"Reading CSV: {self.csv_path}")

        df = self._read_csv(self.csv_path)
        df = self._validate(df)

        normalizer = CatalogNormalizer()
        rows = tuple(normalizer.normalize_batch(df.to_dicts()))

        self.stats = LoadStats(
            total_rows=normalizer.normalized_count,
            unparsed_dates=normalizer.unparsed_dates,
            duration_seconds=round((datetime.now() - start).total_seconds(), 2),
        )
        self._logger.info(
            f"Loaded {self.stats.total_rows} rows in {self.stats.duration_seconds:.2f}s "
            f"({self.stats.unparsed_dates} unparsed dates)"
        )
        return rows

    # -------------------------------------------------------------------------
    # CSV Reading
    # -------------------------------------------------------------------------

    @staticmethod
    def _read_csv(csv_path: Path) -> pl.DataFrame:
        """Read every column as text; typing happens in the normalizer.

        Args:
            csv_path: Path to CSV file.

        Returns:
            Polars DataFrame with string columns.
        """
        df = pl.read_csv(
            csv_path,
            infer_schema_length=0,
            null_values=NULL_VALUES,
        )
        if CAST_COLUMN in df.columns and CASTS_COLUMN not in df.columns:
            df = df.rename({CAST_COLUMN: CASTS_COLUMN})
        return df

    def _validate(self, df: pl.DataFrame) -> pl.DataFrame:
        """Check required columns and show_id uniqueness.

        Args:
            df: Raw DataFrame.

        Returns:
            DataFrame restricted to the catalog columns.

        Raises:
            SchemaError: Schema or uniqueness violation.
        """
        missing = self.REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise SchemaError(f"Missing columns: {sorted(missing)}")

        if df["show_id"].null_count() > 0:
            raise SchemaError("show_id contains null values")

        duplicated = df.filter(pl.col("show_id").is_duplicated())["show_id"].unique().sort()
        if len(duplicated) > 0:
            raise SchemaError(f"Duplicate show_id values: {duplicated.to_list()}")

        return df.select(sorted(self.REQUIRED_COLUMNS))
