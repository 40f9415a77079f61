"""structlog-backed logger writing to stdout.

Development gets colored console lines; every other environment gets one
JSON object per line. Request-scoped values bound by TraceMiddleware
(trace_id) are merged into each record, and a `token` field is always cut
down to its log prefix before rendering.

Satisfies LoggerProtocol structurally.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from storefront.core.constants import TOKEN_LOG_PREFIX_LENGTH, token_prefix

TOKEN_FIELDS = ("token",)


def mask_token_ids(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor: never render a full token id."""
    for field in TOKEN_FIELDS:
        value = event_dict.get(field)
        if (
            isinstance(value, str)
            and len(value) > TOKEN_LOG_PREFIX_LENGTH
            and not value.endswith("...")
        ):
            event_dict[field] = token_prefix(value)
    return event_dict


def build_processors(use_json: bool) -> list[structlog.types.Processor]:
    """Processor chain shared by every adapter instance."""
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        mask_token_ids,
        renderer,
    ]


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO


def _with_exception(
    context: dict[str, Any], error: Exception | None
) -> dict[str, Any]:
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context


class ConsoleAdapter:
    """Storefront logger on top of a filtering structlog logger."""

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        """Configure structlog and create the root logger.

        Args:
            use_json: JSON lines instead of the colored console renderer.
            level: Minimum level name; unknown names mean INFO.
        """
        structlog.configure(
            processors=build_processors(use_json),
            wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at ERROR; `error` adds error_type and error_message fields."""
        self._logger.error(message, **_with_exception(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at CRITICAL; `error` adds error_type and error_message fields."""
        self._logger.critical(message, **_with_exception(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Child adapter carrying `context` on every record (e.g. token_store)."""
        child = ConsoleAdapter.__new__(ConsoleAdapter)
        child._logger = self._logger.bind(**context)
        return child
