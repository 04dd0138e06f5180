"""
structlog setup for aggregation runs.

Every record carries event_type, level, logger and an ISO-8601 timestamp, and
the collection address when the logger came from bind_collection(). Records go
to stderr as JSON (LOG_FORMAT=json, the default) or through structlog's
console renderer. RPC URLs that slip into a field have their api-key masked.

Loggers are lazy: a module-level get_logger(__name__) picks up a later
configure_structlog() call. Nothing here imports backend_verxio.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

_API_KEY_RE = re.compile(r"(api[-_]key=)[^&\s\"']+", re.IGNORECASE)


def _level_value(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _stamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type; message mirrors it."""
    if "event_type" not in event_dict and "event" in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "event_type" in event_dict:
        event_dict.setdefault("message", str(event_dict["event_type"]))
    return event_dict


def redact_api_keys(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask api-key query values in string fields."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "key=" in value.lower():
            event_dict[key] = _API_KEY_RE.sub(r"\1***", value)
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog.

    level and fmt override LOG_LEVEL and LOG_FORMAT, which are read at call
    time rather than at import.
    """
    fmt = (fmt or os.getenv("LOG_FORMAT") or "json").strip().lower()
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _stamp,
            _event_type,
            redact_api_keys,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_value(level)),
        context_class=dict,
        # stdout is reserved for CLI payloads
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Lazy structured logger tagged with the module name.

        logger = get_logger(__name__)
        logger.info("das_collection_fetched", collection=addr, pages=3, asset_count=2500)
    """
    return structlog.get_logger().bind(logger=name)


def bind_collection(collection_address: str) -> Any:
    """Logger with collection bound to every record it emits."""
    return get_logger("backend_verxio").bind(collection=collection_address)
