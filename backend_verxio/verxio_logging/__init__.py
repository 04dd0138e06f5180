"""
Structured logging for backend_verxio.

JSON logs with timestamp, collection, event_type.
"""

from backend_verxio.verxio_logging.logger import (
    bind_collection,
    configure_structlog,
    get_logger,
    redact_api_keys,
)

__all__ = ["bind_collection", "configure_structlog", "get_logger", "redact_api_keys"]
