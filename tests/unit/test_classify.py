"""
Unit tests for transport failure classification
"""

import pytest
from urllib3 import exceptions as u3_exc

from relay_http.exceptions import ConnectionFailed, SSLError, TimeoutError as RelayTimeoutError
from relay_http.http.classify import classify_socket_error, wrap_transport_error


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Connection timeout after 30s", RelayTimeoutError),
        ("TIMEOUT", RelayTimeoutError),
        ("SSL certificate problem: self signed certificate", SSLError),
        ("Certificate has expired", SSLError),
        ("certificate timeout", RelayTimeoutError),
        ("connection reset by peer", ConnectionFailed),
        ("timeouts exceeded", ConnectionFailed),
        ("", ConnectionFailed),
    ],
)
def test_classify_socket_error(message, expected):
    """Test message words pick the error class, timeout first"""
    assert classify_socket_error(message) is expected


def test_wrap_socket_error_chains_message():
    """Test socket failures keep their message"""
    error = wrap_transport_error(u3_exc.ProtocolError("connection reset by peer"))

    assert isinstance(error, ConnectionFailed)
    assert str(error) == "connection reset by peer"


def test_wrap_ssl_error():
    """Test TLS failures are recognized by the 'certificate' word"""
    error = wrap_transport_error(
        u3_exc.SSLError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed")
    )

    assert isinstance(error, SSLError)


def test_wrap_transport_timeout_ignores_message():
    """Test urllib3 timeouts always become TimeoutError"""
    cause = u3_exc.ConnectTimeoutError("certificate")

    error = wrap_transport_error(cause)

    assert isinstance(error, RelayTimeoutError)
    assert error.wrapped_exception is cause


def test_wrap_new_connection_error_is_socket_level():
    """Test refused connections are classified as socket errors, not timeouts"""
    error = wrap_transport_error(u3_exc.NewConnectionError(None, "Connection refused"))

    assert isinstance(error, ConnectionFailed)


@pytest.mark.parametrize("exc", [ValueError("x"), u3_exc.LocationParseError("bad url")])
def test_wrap_unrecognized_returns_none(exc):
    """Test unrecognized failures are left for the caller to re-raise"""
    assert wrap_transport_error(exc) is None
