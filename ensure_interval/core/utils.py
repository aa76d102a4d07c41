"""Utility functions for ensure-interval."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta, timezone

import structlog

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def setup_logging(level: str = "INFO", log_format: str = "console") -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ('console' or 'json').
    """
    # Configure standard library logging
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        stream=sys.stdout,
    )
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(getattr(logging, level.upper()))

    # Configure structlog
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    return structlog.get_logger(name)


def null_logger() -> structlog.BoundLogger:
    """Get a logger that discards every message."""
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[],
        wrapper_class=structlog.BoundLogger,
    )


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


def to_timedelta(value: timedelta | float | int) -> timedelta:
    """Convert seconds (or a timedelta) to a timedelta."""
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def truncate(moment: datetime, interval: timedelta) -> datetime:
    """Round a timestamp down to a multiple of interval since the Unix epoch.

    Args:
        moment: Timezone-aware timestamp.
        interval: Grid size, must be positive.

    Returns:
        The grid boundary at or before moment.
    """
    if interval <= timedelta(0):
        return moment
    return EPOCH + ((moment - EPOCH) // interval) * interval
