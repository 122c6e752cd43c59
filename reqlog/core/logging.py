"""Structured logging backend built on structlog.

The request logger is built explicitly with :func:`build_logger` and handed to
the middleware, so it never depends on structlog's global configuration.
:func:`configure_logging` sets up that global configuration for the rest of
the application's log lines.
"""

import logging
import sys
from typing import IO, Any

import structlog

from reqlog.core.exceptions import InvalidLevelError

# Accepted severity names (lowercase) → stdlib numeric level
LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


def parse_level(name: str | None) -> int:
    """Return the numeric level for a severity name.

    An empty name means debug. Unknown names raise InvalidLevelError.
    """
    if not name:
        return logging.DEBUG
    try:
        return LEVELS[name.strip().lower()]
    except KeyError:
        raise InvalidLevelError(name) from None


def _processors(development: bool, utc: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=utc, key="ts"),
    ]
    if development:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [
            structlog.processors.EventRenamer("msg"),
            structlog.processors.JSONRenderer(),
        ]
    return processors


def build_logger(
    level: str = "debug",
    development: bool = False,
    utc: bool = False,
    stream: IO[str] | None = None,
) -> Any:
    """Build a standalone structlog logger for request records.

    Production mode renders one JSON object per line with ``ts``, ``level``
    and ``msg`` keys; development mode uses the console renderer. Output goes
    to ``stream`` (stderr by default).
    """
    return structlog.wrap_logger(
        structlog.PrintLogger(file=stream if stream is not None else sys.stderr),
        processors=_processors(development, utc),
        wrapper_class=structlog.make_filtering_bound_logger(parse_level(level)),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "info", development: bool = False) -> None:
    """Configure structlog's process-wide defaults."""
    structlog.configure(
        processors=_processors(development, utc=False),
        wrapper_class=structlog.make_filtering_bound_logger(parse_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
