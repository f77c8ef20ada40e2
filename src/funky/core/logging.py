"""
funky logging - structured logging via structlog on top of stdlib logging.

funky never logs above DEBUG: it records when ``None`` is coerced into the
default failure and when a ``NotFoundError`` is about to be raised. Every
funky logger wraps a standard library logger, so a host that never touches
logging sees nothing (the root logger sits at WARNING). Hosts that already
configure structlog or stdlib logging need nothing from this module;
``configure_logging`` is a convenience for scripts and tests.

Architecture:
    ::

        configure_logging(level=None, json_format=None, service=None)
              │   (None -> value from FunkySettings / FUNKY_* env vars)
              ↓
        structlog processor chain:
          1. TimeStamper(iso)
          2. add_log_level
          3. add_logger_name
          4. _add_service_metadata
          5. JSONRenderer (or ConsoleRenderer on a tty)
              ↓
        stdlib logging: root logger -> StreamHandler(stdout)

Examples:
    >>> from funky.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> logger = get_logger(__name__)
    >>> logger.debug("trial_normalized", raw=None)

Tags:
    logging, structlog, observability, funky
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from funky.core.settings import get_settings, normalize_log_level


# Store service name for metadata
_SERVICE_NAME = "funky"

# Root handler installed by configure_logging
_HANDLER: logging.Handler | None = None


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str | None = None,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); defaults to ``FUNKY_LOG_LEVEL``
        json_format: True for JSON, False for console, None for ``FUNKY_LOG_JSON``
            and then auto-detection (JSON if not a tty)
        service: Service name to include in logs; defaults to ``FUNKY_SERVICE``
        add_timestamp: Include ISO timestamp in logs

    Raises:
        ValueError: if ``level`` is not a standard log level name
    """
    global _SERVICE_NAME, _HANDLER
    settings = get_settings()
    level = normalize_log_level(level) if level else settings.log_level
    numeric_level = getattr(logging, level)
    _SERVICE_NAME = service or settings.service

    if json_format is None:
        json_format = settings.log_json
    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    if _HANDLER is not None:
        root.removeHandler(_HANDLER)
    _HANDLER = logging.StreamHandler(sys.stdout)
    _HANDLER.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(_HANDLER)
    root.setLevel(numeric_level)


def reset_logging() -> None:
    """Undo ``configure_logging``: drop its handler and restore the defaults."""
    global _SERVICE_NAME, _HANDLER
    root = logging.getLogger()
    if _HANDLER is not None:
        root.removeHandler(_HANDLER)
        _HANDLER = None
    root.setLevel(logging.WARNING)
    _SERVICE_NAME = "funky"
    structlog.reset_defaults()


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger backed by the stdlib logger ``name``.

    Args:
        name: Logger name (usually __name__); ``None`` for the root logger
    """
    return structlog.wrap_logger(logging.getLogger(name))


__all__ = [
    "configure_logging",
    "get_logger",
    "reset_logging",
]
