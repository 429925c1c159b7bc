"""
Pytest configuration and fixtures
"""

import pytest
from urllib3 import HTTPHeaderDict

from relay_http import Env, Urllib3Adapter
from relay_http.http import urllib3_adapter
from relay_http.http.transport import Response


class FakeConnection:
    """Stands in for transport.Connection; records every request"""

    instances = []

    def __init__(self, url, options=None):
        self.url = url
        self.options = dict(options or {})
        self.requests = []
        self.response = Response(
            status=200,
            body=b"hello",
            headers=HTTPHeaderDict({"Content-Type": "text/plain"}),
            reason_phrase=" OK ",
        )
        self.error = None
        FakeConnection.instances.append(self)

    def request(self, method, headers=None, body=None):
        self.requests.append({"method": method, "headers": headers, "body": body})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_connection(monkeypatch):
    """
    Replace the urllib3 connection with FakeConnection.

    Set ``fake_connection.error`` / ``fake_connection.response`` to control
    the next connection created by the adapter.
    """
    FakeConnection.instances = []

    class Controller:
        error = None
        response = None

        @property
        def instances(self):
            return FakeConnection.instances

        @property
        def last(self):
            return FakeConnection.instances[-1]

    controller = Controller()

    def factory(url, options=None):
        conn = FakeConnection(url, options)
        conn.error = controller.error
        if controller.response is not None:
            conn.response = controller.response
        return conn

    monkeypatch.setattr(urllib3_adapter, "Connection", factory)
    return controller


@pytest.fixture
def adapter():
    """Adapter without static connection options"""
    return Urllib3Adapter()


@pytest.fixture
def make_env():
    """Build an Env with sensible defaults"""

    def _make(**kwargs):
        kwargs.setdefault("url", "https://api.example.com/v1/items")
        kwargs.setdefault("method", "get")
        return Env(**kwargs)

    return _make
