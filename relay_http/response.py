"""
Status inspection for completed requests.

Turns a response status recorded on an ``Env`` into the matching
relay_http exception.
"""

import logging
from typing import Any, Callable, Dict, Type

from .exceptions import (
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NilStatusError,
    ProxyAuthError,
    ResourceNotFound,
    ResponseError,
    ServerError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from .models import Env

logger = logging.getLogger("relay_http.response")

STATUS_ERRORS: Dict[int, Type[ClientError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: ResourceNotFound,
    407: ProxyAuthError,
    409: ConflictError,
    422: UnprocessableEntityError,
}

CLIENT_ERROR_STATUSES = range(400, 500)
SERVER_ERROR_STATUSES = range(500, 600)


def raise_for_status(env: Env) -> None:
    """
    Raise the relay_http exception matching ``env.status``.

    Returns quietly for statuses below 400 and above 599.

    Raises:
        ClientError: Or one of its subclasses, for 4xx statuses
        ServerError: For 5xx statuses
        NilStatusError: When the response has no status at all
    """
    status = env.status
    response = env.response_values()
    error_class: Type[ResponseError]

    if status is None:
        raise NilStatusError.from_response(response)
    if status in STATUS_ERRORS:
        error_class = STATUS_ERRORS[status]
    elif status in CLIENT_ERROR_STATUSES:
        error_class = ClientError
    elif status in SERVER_ERROR_STATUSES:
        error_class = ServerError
    else:
        return

    logger.debug("%s %s -> %s", env.method.upper(), env.url, error_class.__name__)
    raise error_class.from_response(response)


class RaiseErrorStage:
    """
    Pipeline stage applying ``raise_for_status`` after the inner stage.

    Example:
        >>> stage = RaiseErrorStage(Urllib3Adapter())
        >>> stage(Env(url="https://example.com/missing"))
        Traceback (most recent call last):
        ...
        relay_http.exceptions.ResourceNotFound: the server responded with status 404
    """

    def __init__(self, app: Callable[[Env], Any]):
        self.app = app

    def __call__(self, env: Env) -> Any:
        result = self.app(env)
        raise_for_status(env)
        return result
