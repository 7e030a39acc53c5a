"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Loggers resolve the current configuration on every call, so a later
configure_logging level applies to module loggers created earlier.
Events render to JSON and are emitted through stdlib logging handlers,
so build hosts and pytest capture them like any other log record.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_CONFIGURED_LEVEL: str | None = None


def configure_logging(level_name: str = DEFAULT_LOG_LEVEL) -> None:
    """Install a stderr handler and configure structlog for CLI use.

    Args:
        level_name: Standard level name such as ``INFO``.
    """
    logging.basicConfig(level=level_name.upper(), format="%(message)s")
    _configure_structlog(level_name)


def _configure_structlog(level_name: str) -> None:
    global _CONFIGURED_LEVEL
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
    _CONFIGURED_LEVEL = logging.getLevelName(level)


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if _CONFIGURED_LEVEL is None:
        _configure_structlog(DEFAULT_LOG_LEVEL)
    return structlog.get_logger(name)
