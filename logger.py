"""Logging configuration for Note Reminders.

One dated log file per day under LOG_DIR. Files older than
LOG_RETENTION_DAYS are removed when logging is set up.
"""

import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

from config import LOG_DIR, LOG_LEVEL, LOG_RETENTION_DAYS


def _prune_old_logs(log_dir: Path, keep_days: int) -> None:
    """Delete dated log files older than keep_days."""
    cutoff = (datetime.now() - timedelta(days=keep_days)).strftime('%Y-%m-%d')
    for log_file in log_dir.glob("????-??-??.log"):
        if log_file.stem < cutoff:
            log_file.unlink(missing_ok=True)


def setup_logging() -> logging.Logger:
    """Set up logging to a dated file and, when interactive, the console."""
    logger = logging.getLogger("note_reminders")
    level = logging.getLevelName(LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    if LOG_RETENTION_DAYS > 0:
        _prune_old_logs(LOG_DIR, LOG_RETENTION_DAYS)

    log_file = LOG_DIR / f"{datetime.now().strftime('%Y-%m-%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(file_handler)

    # Console handler (only if attached to a terminal)
    if sys.stdout is not None and sys.stdout.isatty():
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

    return logger


# Global logger instance
logger = setup_logging()
