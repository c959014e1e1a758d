"""Logging helpers for Llaves.

All library loggers live under the ``llaves`` namespace. The package root
logger carries a NullHandler, so nothing is printed unless the host
application configures logging. Mismatched pairs, unmatched searches,
aborted edits and table builds are all reported at DEBUG.

Example:
    >>> import logging
    >>> from llaves.utils.logger import get_logger
    >>> logging.getLogger("llaves").setLevel(logging.DEBUG)
    >>> logger = get_logger(__name__)
    >>> logger.debug("unmatched %r at %d", "\\\\left(", 12)
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "llaves"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the llaves namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("navigation").name
        'llaves.navigation'
        >>> get_logger("llaves.table").name
        'llaves.table'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
