"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Top-level packages whose module loggers (logging.getLogger(__name__)) get the handler
LOGGED_PACKAGES = ("core", "features", "integrations", "utils")

_handler: Optional[logging.Handler] = None


def setup_logging(level: int = logging.INFO) -> list[logging.Logger]:
    """Configure and return the package-level loggers. Safe to call twice."""
    global _handler
    loggers = [logging.getLogger(name) for name in LOGGED_PACKAGES]
    if _handler is not None:
        return loggers

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    for package_logger in loggers:
        package_logger.setLevel(level)
        package_logger.addHandler(handler)
    _handler = handler
    return loggers
