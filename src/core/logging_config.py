"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Events are routed through stdlib logging so levels stay configurable.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        _configure_structlog()
    return structlog.get_logger(name)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structured logging for a CLI process.

    Args:
        level: Minimum stdlib level name, e.g. WARNING.
    """
    if not structlog.is_configured():
        _configure_structlog()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
