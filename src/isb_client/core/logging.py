"""
Structured Logging Configuration

Uses structlog for structured logging. Client code logs through
get_logger(); applications embedding the client call setup_logging()
once to pick the renderer and level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from isb_client.core.config import LogLevel, get_config

_SENSITIVE_KEYS = (
    "password", "secret", "token", "authorization", "credential", "jwt", "api_key",
)


def _add_client_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add client-specific context to log entries."""
    event_dict.setdefault("environment", get_config().environment)
    return event_dict


def _filter_sensitive_data(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask credentials in log entries."""

    def _mask_value(key: str, value: Any) -> Any:
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS):
            return "***MASKED***"
        return value

    return {k: _mask_value(k, v) for k, v in event_dict.items()}


def _truncate_large_values(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Truncate large values to prevent log bloat."""
    max_length = 1000

    def _truncate(value: Any) -> Any:
        if isinstance(value, str) and len(value) > max_length:
            return value[:max_length] + f"... [truncated, total length: {len(value)}]"
        if isinstance(value, (list, tuple)) and len(value) > 50:
            return list(value[:50]) + [f"... [{len(value) - 50} more items]"]
        return value

    return {k: _truncate(v) for k, v in event_dict.items()}


def setup_logging(
    log_level: LogLevel | str | None = None,
    json_format: bool | None = None,
) -> None:
    """
    Configure structured logging for the client.

    Args:
        log_level: Log level (defaults to config value)
        json_format: Use JSON format (defaults to True in production)
    """
    config = get_config()

    if log_level is None:
        log_level = config.log_level
    if isinstance(log_level, str):
        log_level = LogLevel(log_level.upper())

    if json_format is None:
        json_format = config.is_production()

    level = getattr(logging, log_level.value)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_client_context,
        _filter_sensitive_data,
        _truncate_large_values,
    ]

    if json_format:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Bind context variables to all subsequent log entries.

    Useful for tagging every request of a job with a correlation id.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
