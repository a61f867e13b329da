"""Logging helpers for turbomd.

Library modules only create loggers; handlers are configured by the
application (the ``turbomd`` CLI configures a basic one).

Example:
    >>> from turbomd.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Assembling document")
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "turbomd"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``turbomd``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("includes").name
        'turbomd.includes'
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + ".")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger (CLI use only)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
