"""Logging setup for applications embedding the SDK.

Library modules only create named loggers under ``safescan_sdk``; handlers
are installed here, on request.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "safescan_sdk"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """Set the SDK log level and attach a single stdout handler."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
