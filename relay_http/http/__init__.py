"""
HTTP adapters for relay_http.
"""

from .adapter import Adapter
from .urllib3_adapter import Urllib3Adapter

__all__ = ["Adapter", "Urllib3Adapter"]
