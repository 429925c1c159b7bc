"""
Base HTTP adapter interface.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from urllib3 import HTTPHeaderDict

from ..models import Env


def _identity(env: Env) -> Env:
    return env


class Adapter(ABC):
    """
    Abstract base class for adapters.

    An adapter is the last stage of a request pipeline: it performs the
    network exchange described by an ``Env``, writes the response back into
    it and hands the env to ``app``.
    """

    def __init__(
        self,
        app: Optional[Callable[[Env], Any]] = None,
        connection_options: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize adapter.

        Args:
            app: Next pipeline stage, called with the env after the response
                is saved (default: return the env)
            connection_options: Static transport options merged into every
                call. Frozen at construction.
        """
        self.app = app or _identity
        self.connection_options = MappingProxyType(dict(connection_options or {}))

    @abstractmethod
    def call(self, env: Env) -> Any:
        """
        Perform one request.

        Subclasses call ``super().call(env)`` first so bodyless
        POST/PUT/PATCH requests are sent with an empty body.
        """
        if env.needs_body():
            env.clear_body()

    def __call__(self, env: Env) -> Any:
        return self.call(env)

    def save_response(
        self,
        env: Env,
        status: int,
        body: Any,
        headers: Optional[Mapping[str, str]] = None,
        reason_phrase: Optional[str] = None,
    ) -> None:
        env.status = status
        env.response_body = body
        env.reason_phrase = reason_phrase.strip() if reason_phrase is not None else None
        response_headers = HTTPHeaderDict()
        if headers is not None:
            response_headers.extend(headers)
        env.response_headers = response_headers
