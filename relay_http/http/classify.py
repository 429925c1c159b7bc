"""
Classification of urllib3 failures into relay_http errors.

urllib3 does not tell a TLS failure or a stalled socket apart from other
socket errors in a structured way, so the socket family is classified by
matching words in the exception message. Keep that matching here; if the
transport ever exposes error codes, only this module needs to change.
"""

import re
from typing import Optional, Type

from urllib3 import exceptions as u3_exc

from ..exceptions import (
    ConnectionFailed,
    Error,
    SSLError,
    TimeoutError as RelayTimeoutError,
)

SOCKET_ERRORS = (
    u3_exc.NewConnectionError,
    u3_exc.ProtocolError,
    u3_exc.SSLError,
    u3_exc.ProxyError,
)

TRANSPORT_TIMEOUTS = (u3_exc.TimeoutError,)

_TIMEOUT_RE = re.compile(r"\btimeout\b", re.IGNORECASE)
_CERTIFICATE_RE = re.compile(r"\bcertificate\b", re.IGNORECASE)


def classify_socket_error(message: str) -> Type[Error]:
    """
    Pick the error class for a socket-level failure message.

    Example:
        >>> classify_socket_error("SSL certificate problem: self signed certificate")
        <class 'relay_http.exceptions.SSLError'>
    """
    if _TIMEOUT_RE.search(message):
        return RelayTimeoutError
    if _CERTIFICATE_RE.search(message):
        return SSLError
    return ConnectionFailed


def wrap_transport_error(exc: BaseException) -> Optional[Error]:
    """
    Build the relay_http error for a urllib3 failure.

    Returns None for failures the adapter does not recognize; those must
    propagate unchanged.
    """
    # NewConnectionError subclasses ConnectTimeoutError, so the socket
    # family has to be checked first.
    if isinstance(exc, SOCKET_ERRORS):
        error_class = classify_socket_error(str(exc))
    elif isinstance(exc, TRANSPORT_TIMEOUTS):
        error_class = RelayTimeoutError
    else:
        return None

    if issubclass(error_class, RelayTimeoutError):
        return error_class.from_cause(exc)
    return error_class(str(exc) or type(exc).__name__)
