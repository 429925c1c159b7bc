"""
relay_http Utilities
"""

import logging
from typing import Mapping, Dict

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "set-cookie"}
SENSITIVE_WORDS = ("token", "secret", "password", "api-key", "api_key")


def setup_logging(debug: bool = False) -> None:
    """
    Setup plain-text logging

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """
    Redact credentials from request headers before logging

    Args:
        headers: Header mapping

    Returns:
        Copy of the headers with sensitive values replaced
    """
    sanitized = {}

    for name, value in headers.items():
        lowered = name.lower()
        if lowered in SENSITIVE_HEADERS or any(word in lowered for word in SENSITIVE_WORDS):
            sanitized[name] = "***REDACTED***"
        else:
            sanitized[name] = value

    return sanitized
