"""Logging configuration driven by the MEETUP_LOG_* settings."""

import sys
from pathlib import Path

from loguru import logger

from settings import LOG_DIR, LOG_FILE_LEVEL, LOG_LEVEL, LOG_RETENTION

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}"


def setup_logging(level: str | None = None, to_file: bool = True, log_dir: Path | None = None):
    """Console sink at `level` (default LOG_LEVEL), plus a daily planner log file."""
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=(level or LOG_LEVEL).upper(), colorize=True)

    if to_file:
        directory = Path(log_dir or LOG_DIR)
        directory.mkdir(parents=True, exist_ok=True)
        logger.add(
            directory / "meetup_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level=LOG_FILE_LEVEL.upper(),
            rotation="00:00",
            retention=LOG_RETENTION,
            compression="gz",
        )
        logger.debug("Logging to {} (retention {})", directory, LOG_RETENTION)

    return logger
