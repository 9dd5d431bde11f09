"""Logging configuration for the scoring service."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "scan_scoring.console"


def _parse_log_level(log_level: str | int, default: int = logging.INFO) -> int:
    """Convert a level name to a logging constant, falling back to INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else default


def setup_logging(log_level: str | int = "INFO") -> None:
    """Install a single stdout handler on the package logger.

    Safe to call more than once: the handler is replaced, never duplicated.
    """
    level = _parse_log_level(log_level)
    logger = logging.getLogger("scan_scoring")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
