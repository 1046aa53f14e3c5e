"""Console and file logging for scripts that use raygeom.

raygeom is a library: importing it only attaches a ``NullHandler`` to the
``raygeom`` logger, so nothing is printed unless the application configures
logging. Scripts that want raygeom's own messages (scene uploads, collection
growth) call ``setup_logging`` once at startup.

Example:
    >>> import logging
    >>> from raygeom.logging_config import setup_logging
    >>> setup_logging(logging.DEBUG, log_file="cast_rays.log")
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "raygeom"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """Send raygeom log records to stdout, and optionally to a file.

    Calling this again replaces the handlers from the previous call,
    including the package's ``NullHandler``.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file to (over)write, if any.

    Returns:
        The configured ``raygeom`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    destination = f"stdout and {log_file}" if log_file else "stdout"
    logger.debug(f"Logging to {destination} at {logging.getLevelName(level)}")
    return logger
