"""Logging configuration shared by the loader, analytics modules and CLI.

Modules create their logger once at import time with setup_logger();
the CLI then calls configure_logging() with LOG_LEVEL / LOG_DIR so the
configured level reaches every logger already created.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}

_DEFAULTS: dict[str, Any] = {"level": logging.INFO, "log_dir": None}
"""Level and log directory applied to loggers created without explicit values."""


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Configure and return a logger writing to stderr.

    Console output goes to stderr so query results on stdout stay clean.

    Args:
        name: Logger name (e.g., 'etl.netflix_csv').
        level: Level as int or name. Defaults to the configured level.
        log_dir: Directory for a dated log file. Defaults to the configured
            directory; no file handler when neither is set.

    Returns:
        Configured logger instance (cached per name).
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    level = _resolve_level(_DEFAULTS["level"] if level is None else level)
    log_dir = _DEFAULTS["log_dir"] if log_dir is None else log_dir

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    logger.addHandler(_create_console_handler(level))
    if log_dir is not None:
        _attach_file_handler(logger, level, log_dir)

    _LOGGERS_CACHE[name] = logger
    return logger


def configure_logging(level: int | str, log_dir: Path | None = None) -> None:
    """Apply a level (and optional log directory) to every logger.

    Loggers created later with setup_logger() inherit the same values.

    Args:
        level: Level as int or name (e.g. "DEBUG").
        log_dir: Directory for dated log files, or None for console only.
    """
    level = _resolve_level(level)
    _DEFAULTS["level"] = level
    _DEFAULTS["log_dir"] = log_dir

    for logger in _LOGGERS_CACHE.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        if log_dir is not None and not _has_file_handler(logger):
            _attach_file_handler(logger, level, log_dir)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _create_console_handler(level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT))
    return handler


def _has_file_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def _attach_file_handler(logger: logging.Logger, level: int, log_dir: Path) -> None:
    """Add a handler writing to <log_dir>/<name>_<YYYYMMDD>.log.

    A directory that cannot be created or written only costs the file
    output; console logging keeps working.
    """
    try:
        handler = logging.FileHandler(_get_log_file_path(logger.name, log_dir), encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT))
    logger.addHandler(handler)


def _get_log_file_path(name: str, log_dir: Path) -> Path:
    """Build log file path with date suffix."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = name.replace(".", "_").replace("/", "_")
    date_suffix = datetime.now().strftime("%Y%m%d")
    return log_dir / f"{safe_name}_{date_suffix}.log"
