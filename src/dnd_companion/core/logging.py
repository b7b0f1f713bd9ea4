"""Structured logging for the companion rules engine.

Every engine module logs through structlog with key-value fields (roll
totals, combatant ids, save DCs). ``configure_logging`` decides how those
events are rendered: a readable console line while developing, or one JSON
object per line when ``DND_COMPANION_LOG_JSON`` is set.

Example:
    >>> from dnd_companion.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> get_logger(__name__).info("Round advanced", round=2)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from dnd_companion.core.config import get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag each event with the configured application name."""
    event_dict.setdefault("app", get_settings().app_name)
    return event_dict


def _resolve_level(level: str | None) -> int:
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structlog rendering and level filtering.

    Arguments left as ``None`` are read from the application settings:
    ``log_level`` (forced to DEBUG when ``debug`` is on) and ``log_json``.

    Args:
        level: Minimum level name to emit, e.g. ``"WARNING"``.
        json_format: Render JSON lines instead of console output.
    """
    if json_format is None:
        json_format = get_settings().log_json

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every following log event, e.g. ``encounter_id``."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all fields attached with ``bind_context``."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
