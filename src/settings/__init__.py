"""Centralized configuration for the catalog analytics project.

All configuration values are sourced from environment variables (.env file).
Every setting has a safe default; override via .env as needed.

Usage:
    from src.settings import settings

    settings.catalog.csv_path
    settings.logging.level
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.settings.base import LoggingSettings, PathsSettings
from src.settings.catalog import CatalogSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "PathsSettings",
    "LoggingSettings",
    # Catalog
    "CatalogSettings",
    # Utilities
    "get_settings_summary",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from src.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_settings_summary() -> dict[str, Any]:
    """Return settings dict suitable for logging.

    Returns:
        Configuration dictionary with the resolved CSV path.
    """
    config = settings.model_dump()
    config["catalog"]["csv_path"] = str(settings.catalog.csv_path)
    config["catalog"]["keywords"] = settings.catalog.keywords
    return config
