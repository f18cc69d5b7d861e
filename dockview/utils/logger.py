#!/usr/bin/env python3
"""
dockview - Logging Module
-----------
Logging setup. Output goes to a file only, the terminal belongs to curses.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_level(level_name):
    """Convert a level name such as 'info' into its numeric value."""
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def configure_logging(log_file=None, level_name="WARNING", max_bytes=1024 * 1024, backup_count=3):
    """
    Configure the root logger.

    With no log file a NullHandler is installed so nothing reaches the
    screen while curses owns it.
    """
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()

    logging.basicConfig(
        level=resolve_log_level(level_name),
        handlers=[handler],
        force=True,
    )
