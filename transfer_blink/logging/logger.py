"""
Structured JSON logging: timestamp, event_type, level, logger name.

structlog with ISO timestamps and consistent keys for aggregation. Modules call
get_logger(__name__) and log a snake_case event name plus key/value context.

LOG_LEVEL and LOG_FORMAT come from the environment or the project .env file.
Uses only stdlib logging, structlog and python-dotenv; no transfer_blink imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
from dotenv import load_dotenv

# Project root .env (transfer_blink/logging/ is 2 levels below the root)
_ENV_PATH = Path(__file__).resolve().parents[2] / ".env"


def read_log_settings(env_path: Path = _ENV_PATH) -> tuple[int, str]:
    """Load .env (never overriding real env), then return (level value, format)."""
    load_dotenv(env_path, override=False)
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    # JSON output for production (LOG_FORMAT=json); human-readable for local
    fmt = os.getenv("LOG_FORMAT", "json").strip().lower()
    value = getattr(logging, level, logging.INFO)
    return (value if isinstance(value, int) else logging.INFO), fmt


LOG_LEVEL_VALUE, LOG_FORMAT = read_log_settings()


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


def configure_structlog() -> None:
    """Configure structlog once at import: renderer, timestamp, level, event_type."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if LOG_FORMAT == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
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
        logger.info("transfer_built", payer=short_address(payer), instruction_count=2)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_request(**context: Any) -> None:
    """Bind per-request context (e.g. request_id) to every log line in this context."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)
