"""Structured logging for DragonWatch.

structlog is used everywhere: a colourful console renderer while
developing, JSON lines for headless runs and simulations. Engine code binds a
``run_id`` once per game so every phase, card and event log line of that run
can be correlated.

Example:
    >>> from dragonwatch.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Phase changed", phase="draw_card", turn=1)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


APP_NAME = "dragonwatch"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with the ``app`` key set.
    """
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _resolve_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit JSON lines instead of console output.
        log_file: Optional file that also receives stdlib log records.

    Example:
        >>> configure_logging(level="DEBUG", json_format=True)
    """
    numeric_level = _resolve_level(level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: list[Processor]
    if json_format:
        renderer = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A structlog BoundLogger.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind fields that appear in every subsequent log entry of this context.

    Args:
        **kwargs: Key-value pairs to bind.

    Example:
        >>> bind_context(run_id="abc123")
        >>> logger.info("Game started")  # includes run_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context fields, typically when a run ends."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "APP_NAME",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
