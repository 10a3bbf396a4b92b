"""
Shared logger for RepoCloner.
"""

import logging
import sys


LOGGER_NAME = "RepoCloner"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the package logger, attaching a stderr handler on first use."""

    _logger = logging.getLogger(name)
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        _logger.addHandler(handler)
        _logger.setLevel(logging.INFO)
    return _logger


logger = get_logger()


__all__ = [
    "LOGGER_NAME",
    "get_logger",
    "logger",
]
