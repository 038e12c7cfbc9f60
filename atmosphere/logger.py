"""
Logging for the atmosphere engine.

Every module logs through the shared "atmosphere" logger. Routine events
(recomputes, phase changes, clock steps) go to stdout; coerced settings
and undefined sunrise/sunset go to stderr as warnings.
"""

import logging
import sys
from typing import TextIO

from atmosphere.config import LOG_LEVEL

LOGGER_NAME = "atmosphere"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LevelFilter(logging.Filter):
    """Pass records whose level lies in [level_min, level_max]."""

    def __init__(self, level_min: int, level_max: int):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level_min <= record.levelno <= self.level_max


def _stream_handler(stream: TextIO, level_min: int, level_max: int) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level_min)
    handler.addFilter(LevelFilter(level_min, level_max))
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def resolve_level(name: str) -> tuple[int, bool]:
    """
    Map a level name such as "debug" or "WARNING" to its number.

    Returns:
        (level, known): INFO and False when the name is not a logging level
    """
    level = logging.getLevelName(str(name).strip().upper())
    if isinstance(level, int):
        return level, True
    return logging.INFO, False


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the shared logger: DEBUG/INFO to stdout, WARNING and up to stderr.

    Safe to call again; existing handlers are replaced, not duplicated.

    Args:
        level: Level name; unknown names fall back to INFO with a warning

    Returns:
        The "atmosphere" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved, known = resolve_level(level)
    logger.setLevel(resolved)
    logger.propagate = False

    logger.handlers.clear()
    logger.addHandler(_stream_handler(sys.stdout, logging.DEBUG, logging.INFO))
    logger.addHandler(_stream_handler(sys.stderr, logging.WARNING, logging.CRITICAL))

    if not known:
        logger.warning(f"Unknown LOG_LEVEL {level!r}, using INFO")

    return logger


logger = setup_logging()
