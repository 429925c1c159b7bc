"""
Structured JSON Logging for relay_http

Provides a JSON formatter for structured logging output.
"""

import json
import logging
import sys
from typing import Any, Dict

# Extra fields the adapter attaches to its log records
RECORD_FIELDS = ("method", "url", "status")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for field in RECORD_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for relay_http.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> from relay_http.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    package_logger = logging.getLogger("relay_http")
    package_logger.setLevel(level)
    package_logger.handlers = [handler]
    package_logger.propagate = False
