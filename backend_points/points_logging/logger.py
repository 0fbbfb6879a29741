"""
Structured JSON logging: timestamp, event_type, wallet_id, slot, endpoint.

structlog with ISO timestamps, log level, and consistent keys for aggregation.
All modules should use get_logger() and pass event_type (first arg) plus
keyword context.

Level and renderer come from LOG_LEVEL and LOG_FORMAT, read through the env
loader so values in .env apply here as they do to uvicorn. Imports nothing
from backend_points but config.env, which does not log.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

from backend_points.config.env import get_str


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    Configure structlog: JSON (or console) renderer, timestamp, level, event_type.
    Runs once at import from the environment. Calling it again affects loggers
    created afterwards.
    """
    level_name = (level or get_str("LOG_LEVEL", "INFO")).upper()
    level_value = getattr(logging, level_name, logging.INFO)
    log_format = (fmt or get_str("LOG_FORMAT", "json")).lower()
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if log_format == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("points_synced", wallet_id=short_wallet(addr), slot=123)
    """
    return structlog.get_logger(name).bind(logger=name)


def short_wallet(wallet: str | None) -> str:
    """Shortened wallet id for log lines."""
    if not wallet:
        return "?"
    return wallet[:8] + "..."


def bind_wallet(wallet_id: str) -> structlog.BoundLogger:
    """Return a logger with wallet_id bound to all subsequent log calls."""
    return get_logger("backend_points").bind(wallet_id=short_wallet(wallet_id))
