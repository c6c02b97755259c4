"""ETL utilities package: logging."""

from src.etl.utils.logger import configure_logging, setup_logger

__all__ = ["configure_logging", "setup_logger"]
