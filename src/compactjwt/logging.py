"""Logging setup for compactjwt."""

from __future__ import annotations

import structlog
from safir.logging import configure_logging
from structlog.stdlib import BoundLogger

from .config import Config
from .constants import LOGGER_NAME

__all__ = ["get_logger", "setup_logging"]


def get_logger() -> BoundLogger:
    """Return the default logger for the codec."""
    return structlog.get_logger(LOGGER_NAME)


def setup_logging(config: Config) -> None:
    """Configure structlog output for the command-line interface.

    Library users are expected to configure logging themselves, so this is
    only called by the command-line entry point.

    Parameters
    ----------
    config
        Configuration holding the logging profile and level.
    """
    configure_logging(
        name=LOGGER_NAME,
        profile=config.log_profile,
        log_level=config.log_level,
    )
