"""
Configuration module for relay_http.
"""

import logging
import os
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .http.urllib3_adapter import Urllib3Adapter
from .utils import setup_logging

logger = logging.getLogger("relay_http.config")

_TRUTHY = {"1", "true", "yes", "on"}


class AdapterConfig(BaseModel):
    """
    Adapter configuration.

    Supports environment variables for easy configuration:
    - RELAY_HTTP_CONNECT_TIMEOUT: Connect timeout in seconds
    - RELAY_HTTP_READ_TIMEOUT: Read timeout in seconds
    - RELAY_HTTP_POOL_MAXSIZE: Connections kept per host (default: 1)
    - RELAY_HTTP_DEBUG: Enable debug logging
    - RELAY_HTTP_LOG_LEVEL: Explicit log level name (e.g. WARNING)

    Timeouts set here become static connection options and therefore win
    over per-request timeouts.
    """

    model_config = ConfigDict(frozen=True)

    connect_timeout: Optional[float] = Field(None, description="Connect timeout in seconds")
    read_timeout: Optional[float] = Field(None, description="Read timeout in seconds")
    pool_maxsize: int = Field(1, description="Connections kept per host")
    debug: bool = Field(False, description="Enable debug logging")
    log_level: Optional[str] = Field(None, description="Log level name")

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("pool_maxsize")
    @classmethod
    def validate_pool_maxsize(cls, v):
        if v <= 0:
            raise ValueError("pool_maxsize must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        if v is None:
            return v
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return name

    @classmethod
    def from_env(cls, **overrides: Any) -> "AdapterConfig":
        """Build a configuration from RELAY_HTTP_* variables; keyword arguments win."""
        values: Dict[str, Any] = {}
        env_map = {
            "connect_timeout": "RELAY_HTTP_CONNECT_TIMEOUT",
            "read_timeout": "RELAY_HTTP_READ_TIMEOUT",
            "pool_maxsize": "RELAY_HTTP_POOL_MAXSIZE",
            "log_level": "RELAY_HTTP_LOG_LEVEL",
        }
        for field, var in env_map.items():
            raw = os.getenv(var)
            if raw:
                values[field] = raw
        debug = os.getenv("RELAY_HTTP_DEBUG")
        if debug is not None:
            values["debug"] = debug.strip().lower() in _TRUTHY
        values.update(overrides)
        return cls(**values)

    def connection_options(self) -> Dict[str, Any]:
        """Static transport options for Urllib3Adapter."""
        opts: Dict[str, Any] = {"maxsize": self.pool_maxsize}
        if self.connect_timeout is not None:
            opts["connect_timeout"] = self.connect_timeout
        if self.read_timeout is not None:
            opts["read_timeout"] = self.read_timeout
        return opts

    def effective_log_level(self) -> int:
        if self.log_level:
            return logging.getLevelName(self.log_level)
        return logging.DEBUG if self.debug else logging.INFO


def build_adapter(
    config: Optional[AdapterConfig] = None,
    app: Optional[Callable[..., Any]] = None,
) -> Urllib3Adapter:
    """
    Create an adapter from configuration.

    Args:
        config: Adapter configuration (default: from environment)
        app: Next pipeline stage

    Returns:
        Configured Urllib3Adapter
    """
    config = config or AdapterConfig.from_env()

    if config.debug:
        setup_logging(debug=True)
    logging.getLogger("relay_http").setLevel(config.effective_log_level())

    adapter = Urllib3Adapter(app=app, connection_options=config.connection_options())
    logger.debug("Adapter built with options %s", dict(adapter.connection_options))
    return adapter
