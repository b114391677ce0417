"""
Logging helpers.

The package logs through the standard ``logging`` module. Nothing is
configured on import: the package logger only carries a ``NullHandler``
until an application calls :func:`setup_logging`.
"""

import logging
from typing import Optional

from .config import LOG_FORMAT, LOG_DATE_FORMAT, DEFAULT_LOG_LEVEL

PACKAGE_LOGGER = "naive_bayes"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: int = DEFAULT_LOG_LEVEL, log_file: Optional[str] = None):
    """
    Configure console (and optionally file) logging for the package.

    Args:
        level: Logging level for the package logger
        log_file: Optional path of a file that also receives the records
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Already configured
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="a"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module of this package."""
    return logging.getLogger(name)
