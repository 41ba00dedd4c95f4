"""Logging for s3cache.

Every module logs under the "s3cache" logger, which carries a NullHandler so
nothing is emitted unless the application configures logging.
"""

import logging
from typing import TextIO

from s3cache.core.config import ConnectionSettings

PACKAGE_LOGGER = "s3cache"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name, under the s3cache namespace.

    Args:
        name: Usually __name__ of the calling module.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    settings: ConnectionSettings, stream: TextIO | None = None
) -> logging.Logger:
    """Apply settings.debug to the package logger.

    With debug on, the package logger is set to DEBUG so hits, misses and
    writes are emitted. Otherwise its level is left to the application.
    When `stream` is given, a handler writing to it is attached once.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if settings.debug:
        logger.setLevel(logging.DEBUG)
    if stream is not None and not any(
        isinstance(h, logging.StreamHandler) and h.stream is stream for h in logger.handlers
    ):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
