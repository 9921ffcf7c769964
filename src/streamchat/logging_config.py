"""Logging setup.

A full-screen TUI owns the terminal, so nothing is logged to the console:
- Optional rotating file log
- In-app log panel, attached by the UI through LogPanelHandler
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_string(level: str) -> int:
    """Convert a level name to its numeric value. Returns WARNING if invalid."""
    return _LEVELS.get(level.lower(), logging.WARNING)


def _mk_rotating_handler(path: Path, level: int, fmt: logging.Formatter) -> RotatingFileHandler:
    max_mb = int(os.environ.get("LOG_MAX_MB", "10"))
    backups = int(os.environ.get("LOG_BACKUP_COUNT", "3"))
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backups,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(level: str = "warning", log_file: str | Path | None = None) -> logging.Logger:
    """Reset the streamchat logger and attach a file handler if requested.

    Args:
        level: Threshold name (debug/info/warning/error)
        log_file: Optional path of a rotating log file

    Returns:
        The package logger
    """
    logger = logging.getLogger("streamchat")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level_from_string(level))
    logger.propagate = False

    if log_file is not None:
        fmt = logging.Formatter(LOG_FORMAT)
        logger.addHandler(_mk_rotating_handler(Path(log_file), logging.DEBUG, fmt))
    else:
        logger.addHandler(logging.NullHandler())

    return logger
