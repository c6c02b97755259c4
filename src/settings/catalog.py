"""Netflix catalog configuration settings.

Location of the catalog export and default parameters
for the analytical queries.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.settings.base import PathsSettings


class CatalogSettings(BaseSettings):
    """Catalog dataset and query defaults.

    Attributes:
        csv_filename: Catalog CSV file name inside data/raw.
        csv_override: Explicit CSV path (takes precedence when set).
        director: Director looked up by the director query.
        actor: Actor looked up by the actor query.
        country: Country used by the per-country queries.
        year: Release year for the yearly listing.
        genre: Genre listed by the genre query.
        recent_years: Window (years) for recently added titles.
        actor_years: Window (years) for the actor filmography.
        seasons_threshold: Season count a show must exceed.
        top_n: Default size of top-N results.
        actor_top_n: Size of the top actors result.
        keywords_raw: Comma-separated description keywords flagging violent content.
    """

    csv_filename: str = Field(default="netflix_titles.csv", alias="CATALOG_CSV_FILENAME")
    csv_override: str | None = Field(default=None, alias="CATALOG_CSV_PATH")

    director: str = Field(default="Rajiv Chilaka", alias="CATALOG_DIRECTOR")
    actor: str = Field(default="Salman Khan", alias="CATALOG_ACTOR")
    country: str = Field(default="India", alias="CATALOG_COUNTRY")
    year: int = Field(default=2020, alias="CATALOG_YEAR")
    genre: str = Field(default="Documentaries", alias="CATALOG_GENRE")

    recent_years: int = Field(default=5, alias="CATALOG_RECENT_YEARS")
    actor_years: int = Field(default=10, alias="CATALOG_ACTOR_YEARS")
    seasons_threshold: int = Field(default=5, alias="CATALOG_SEASONS_THRESHOLD")
    top_n: int = Field(default=5, alias="CATALOG_TOP_N")
    actor_top_n: int = Field(default=10, alias="CATALOG_ACTOR_TOP_N")

    keywords_raw: str = Field(default="kill,violence", alias="CATALOG_KEYWORDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("recent_years", "actor_years", "top_n", "actor_top_n")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Ensure windows and limits are strictly positive."""
        if v <= 0:
            raise ValueError("Value must be a positive integer")
        return v

    @field_validator("seasons_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        """Season threshold cannot be negative."""
        if v < 0:
            raise ValueError("CATALOG_SEASONS_THRESHOLD must be >= 0")
        return v

    @field_validator("keywords_raw")
    @classmethod
    def validate_keywords(cls, v: str) -> str:
        """Require at least one non-blank keyword."""
        if not any(k.strip() for k in v.split(",")):
            raise ValueError("CATALOG_KEYWORDS must contain at least one keyword")
        return v

    @property
    def keywords(self) -> list[str]:
        """Parse keywords from comma-separated string."""
        return [k.strip().lower() for k in self.keywords_raw.split(",") if k.strip()]

    @property
    def csv_path(self) -> Path:
        """Path to the catalog CSV file."""
        if self.csv_override:
            return Path(self.csv_override)
        return PathsSettings().raw_dir / self.csv_filename
