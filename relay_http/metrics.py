"""
Prometheus Metrics for relay_http

Counts adapter calls by method and outcome and records their latency.
Host application should expose the prometheus_client registry.
"""

import logging
from typing import Union

from prometheus_client import Counter, Histogram

logger = logging.getLogger("relay_http.metrics")

# Outcome is the status code, or the error class name on transport failure
REQUEST_COUNT = Counter(
    "relay_http_requests_total",
    "Total number of adapter requests",
    ["method", "outcome"],
)

REQUEST_LATENCY = Histogram(
    "relay_http_request_latency_seconds",
    "Adapter request latency in seconds",
    ["method"],
)


def metrics_request(method: str, outcome: Union[int, str], latency: float) -> None:
    """
    Record metrics for one adapter call.

    Args:
        method: Uppercase HTTP method
        outcome: HTTP status code, or error class name (e.g. 'ConnectionFailed')
        latency: Request duration in seconds
    """
    try:
        REQUEST_COUNT.labels(method=method, outcome=str(outcome)).inc()
        REQUEST_LATENCY.labels(method=method).observe(latency)
    except Exception as e:
        # Metrics failures should not break requests
        logger.debug("Failed to record metrics: %s", e)
