"""
Logging utilities with a shared, size-rotated log file per process run.

Key Features:
    - One log file per run, grouped in date-based directories
    - Size-based rotation that survives rollover failures
    - Log level driven by the LOG_LEVEL environment variable
    - Automatic cleanup of log directories older than a week
"""

import datetime
import logging
import os
import shutil
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_BASENAME = "taskboard"

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MAX_LOG_SIZE_BYTES = 5 * 1024 * 1024
MAX_BACKUP_COUNT = 10
KEEP_DAYS = 7

_run_log_file: Path | None = None


def _get_run_log_file() -> Path:
    """Return the log file shared by every logger of this process."""
    global _run_log_file
    if _run_log_file is None:
        now = datetime.datetime.now()
        date_dir = LOG_DIR / now.strftime("%Y-%m-%d")
        date_dir.mkdir(parents=True, exist_ok=True)
        run_timestamp = now.strftime("%Y-%m-%d_%H-%M-%S")
        _run_log_file = date_dir / f"{LOG_FILE_BASENAME}_{run_timestamp}.log"
    return _run_log_file


class SafeRotatingFileHandler(RotatingFileHandler):
    """Size-based rotation handler that keeps writing if a rollover fails."""

    def doRollover(self):
        try:
            super().doRollover()
        except OSError as e:
            sys.stderr.write(
                f"Log rotation failed: {e}. Continuing with current log file.\n"
            )
            sys.stderr.flush()


def _get_log_level(level_str: str) -> int:
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """Set up logger with both console and file handlers."""
    logger = logging.getLogger(name)

    log_level = _get_log_level(level or DEFAULT_LOG_LEVEL)
    logger.setLevel(log_level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    file_handler = SafeRotatingFileHandler(
        _get_run_log_file(),
        maxBytes=MAX_LOG_SIZE_BYTES,
        backupCount=MAX_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)

    cleanup_old_logs(keep_days=KEEP_DAYS)

    return logger


def cleanup_old_logs(keep_days: int = KEEP_DAYS) -> int:
    """Remove date directories older than ``keep_days``. Returns how many were removed."""
    cutoff = datetime.datetime.now() - datetime.timedelta(days=keep_days)
    removed = 0

    if not LOG_DIR.exists():
        return removed

    for date_dir in LOG_DIR.iterdir():
        if not date_dir.is_dir():
            continue
        try:
            dir_date = datetime.datetime.strptime(date_dir.name, "%Y-%m-%d")
        except ValueError:
            # Not one of ours
            continue
        if dir_date < cutoff:
            try:
                shutil.rmtree(date_dir)
                removed += 1
            except OSError as e:
                sys.stderr.write(f"Could not remove old log directory {date_dir}: {e}\n")

    return removed
