"""Logging for FAERScope Core.

The analysis modules log through children of the ``faerscope`` logger and
never configure handlers themselves. Applications embedding the library
call :func:`setup_logging` once; with no arguments it uses ``LOG_LEVEL``
and ``FAERSCOPE_LOG_FILE`` from :class:`~faerscope.config.settings.AppConfig`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .settings import config, ConfigurationError

PACKAGE_LOGGER = "faerscope"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: str) -> int:
    try:
        return logging.getLevelNamesMapping()[log_level.strip().upper()]
    except KeyError:
        raise ConfigurationError(f"Unknown log level: {log_level!r}")


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
            (``config.app.log_level`` if None)
        log_file: File to append to (``config.app.log_file`` if None)
        log_to_console: Whether to also write to stdout

    Returns:
        The ``faerscope`` logger

    Raises:
        ConfigurationError: If the level name is not recognized.
    """
    level = _resolve_level(log_level or config.app.log_level)
    log_file = log_file or config.app.log_file

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers = []
    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Keep the library silent when the application configured nothing
    if not handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Logger for a module, e.g. ``get_logger("export")`` -> ``faerscope.export``."""
    if name == PACKAGE_LOGGER:
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
