"""
relay_http - urllib3 transport adapter for request pipelines

Runs one HTTP exchange per call through urllib3 and reports failures with
a small, stable set of exception types.
"""

from relay_http.__version__ import __version__
from relay_http.config import AdapterConfig, build_adapter
from relay_http.exceptions import (
    Error,
    ResponseError,
    ClientError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    ResourceNotFound,
    ProxyAuthError,
    ConflictError,
    UnprocessableEntityError,
    ServerError,
    TimeoutError,
    NilStatusError,
    ConnectionFailed,
    SSLError,
    ParsingError,
    RetriableResponse,
)
from relay_http.http import Adapter, Urllib3Adapter
from relay_http.models import Env, ProxyOptions, RequestOptions, SSLOptions
from relay_http.response import RaiseErrorStage, raise_for_status

__all__ = [
    "Adapter",
    "Urllib3Adapter",
    "AdapterConfig",
    "build_adapter",
    "Env",
    "ProxyOptions",
    "RequestOptions",
    "SSLOptions",
    "RaiseErrorStage",
    "raise_for_status",
    "Error",
    "ResponseError",
    "ClientError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "ResourceNotFound",
    "ProxyAuthError",
    "ConflictError",
    "UnprocessableEntityError",
    "ServerError",
    "TimeoutError",
    "NilStatusError",
    "ConnectionFailed",
    "SSLError",
    "ParsingError",
    "RetriableResponse",
    "__version__",
]
