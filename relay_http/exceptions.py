"""
Relay HTTP Exceptions

Every failure the adapter surfaces is one of the classes below, so callers
can branch on type instead of on transport-specific exceptions.
"""

import traceback
from collections.abc import Mapping
from typing import Any, List, Optional


class Error(Exception):
    """Base exception for relay_http"""

    pass


class ResponseError(Error):
    """
    Error carrying an optional wrapped cause and an optional response.

    The explanatory payload is chosen from the first argument:

    - an exception becomes the wrapped cause and lends its message
    - a mapping is treated as the response ("the server responded with
      status N")
    - anything else is used as the message

    Prefer the explicit constructors ``from_cause``, ``from_response`` and
    ``from_message`` at call sites.
    """

    def __init__(self, cause: Any = None, response: Optional[Any] = None):
        self.wrapped_exception: Optional[BaseException] = None
        self.response = response

        if isinstance(cause, BaseException):
            message = str(cause)
            self.wrapped_exception = cause
        elif isinstance(cause, Mapping):
            message = f"the server responded with status {cause.get('status')}"
            self.response = cause
        elif cause is None:
            message = type(self).__name__
        else:
            message = str(cause)

        self.message = message
        super().__init__(message)

    @classmethod
    def from_cause(cls, cause: BaseException, response: Optional[Any] = None):
        """Wrap a lower-level exception."""
        return cls(cause, response)

    @classmethod
    def from_response(cls, response: Mapping):
        """Build from a response mapping holding at least ``status``."""
        return cls(response)

    @classmethod
    def from_message(cls, message: str, response: Optional[Any] = None):
        return cls(str(message), response)

    @property
    def backtrace(self) -> Optional[List[str]]:
        """
        Formatted traceback lines.

        Returns the wrapped cause's traceback when one is wrapped, otherwise
        this error's own. None when the relevant exception was never raised.
        """
        source = self.wrapped_exception if self.wrapped_exception is not None else self
        if source.__traceback__ is None:
            return None
        return traceback.format_tb(source.__traceback__)

    def __repr__(self) -> str:
        inner = ""
        if self.wrapped_exception is not None:
            inner += f" wrapped={self.wrapped_exception!r}"
        if self.response is not None:
            inner += f" response={self.response!r}"
        if not inner:
            inner = f" {super().__repr__()}"
        return f"<{type(self).__name__}{inner}>"


class ClientError(ResponseError):
    """4xx status responses"""

    pass


class BadRequestError(ClientError):
    """Raised for a 400 response"""

    pass


class UnauthorizedError(ClientError):
    """Raised for a 401 response"""

    pass


class ForbiddenError(ClientError):
    """Raised for a 403 response"""

    pass


class ResourceNotFound(ClientError):
    """Raised for a 404 response"""

    pass


class ProxyAuthError(ClientError):
    """Raised for a 407 response"""

    pass


class ConflictError(ClientError):
    """Raised for a 409 response"""

    pass


class UnprocessableEntityError(ClientError):
    """Raised for a 422 response"""

    pass


class ServerError(ResponseError):
    """5xx status responses"""

    pass


class TimeoutError(ServerError):
    """Unified timeout error"""

    def __init__(self, cause: Any = "timeout", response: Optional[Any] = None):
        super().__init__(cause, response)


class NilStatusError(ServerError):
    """Raised when a response carries no status"""

    MESSAGE = "http status could not be derived from the server response"

    def __init__(self, cause: Any = None, *, response: Optional[Any] = None):
        super().__init__(self.MESSAGE, response)

    @classmethod
    def from_response(cls, response: Mapping):
        return cls(response=response)


class ConnectionFailed(Error):
    """Unified error for failed connections"""

    pass


class SSLError(Error):
    """Unified error for TLS failures"""

    pass


class ParsingError(Error):
    """Raised by response parsers on malformed bodies"""

    pass


class RetriableResponse(Error):
    """Signals a retry collaborator that the response should be retried"""

    pass
