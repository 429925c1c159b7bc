"""
urllib3-based HTTP adapter (synchronous).
"""

import logging
import time
from typing import Any, Dict, Optional

from .adapter import Adapter
from .classify import SOCKET_ERRORS, TRANSPORT_TIMEOUTS, wrap_transport_error
from .transport import Connection
from ..metrics import metrics_request
from ..models import Env, ProxyOptions, RequestOptions, SSLOptions
from ..utils import sanitize_headers

logger = logging.getLogger("relay_http.adapter")

# (transport option, SSLOptions field)
SSL_OPTION_KEYS = (
    ("client_cert", "client_cert"),
    ("client_key", "client_key"),
    ("certificate", "certificate"),
    ("private_key", "private_key"),
    ("ssl_ca_path", "ca_path"),
    ("ssl_ca_file", "ca_file"),
    ("ssl_version", "version"),
    ("ssl_min_version", "min_version"),
    ("ssl_max_version", "max_version"),
)

DEFAULT_PORTS = {"http": 80, "https": 443}


class Urllib3Adapter(Adapter):
    """
    Synchronous adapter using the urllib3 library.

    Features:
    - One connection and exactly one request per call, no retries
    - TLS, timeout and proxy settings taken from the env
    - urllib3 failures normalized to relay_http exceptions

    Example:
        >>> adapter = Urllib3Adapter(connection_options={"maxsize": 4})
        >>> env = Env(method="get", url="https://example.com/")
        >>> adapter.call(env).status
        200
    """

    def call(self, env: Env) -> Any:
        super().call(env)

        opts = self.options_from_env(env)
        conn = self.create_connection(env, opts)
        method = env.method.upper()
        start = time.time()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s %s headers=%s", method, env.url, sanitize_headers(env.request_headers)
            )

        try:
            resp = conn.request(
                method=method,
                headers=env.request_headers,
                body=self.read_body(env),
            )
        except SOCKET_ERRORS + TRANSPORT_TIMEOUTS as exc:
            error = wrap_transport_error(exc)
            metrics_request(method, type(error).__name__, time.time() - start)
            logger.info(
                "%s %s failed: %s",
                method,
                env.url,
                type(error).__name__,
                extra={"method": method, "url": env.url},
            )
            raise error from exc

        metrics_request(method, resp.status, time.time() - start)
        logger.debug(
            "Response %s %s",
            resp.status,
            resp.reason_phrase,
            extra={"method": method, "url": env.url, "status": resp.status},
        )

        req = env.request
        if req is not None and req.stream_response():
            logger.warning(
                "Streaming downloads for %s are not yet implemented.", type(self).__name__
            )
            req.on_data(resp.body, len(resp.body))

        self.save_response(env, int(resp.status), resp.body, resp.headers, resp.reason_phrase)

        return self.app(env)

    def create_connection(self, env: Env, opts: Dict[str, Any]) -> Connection:
        """Static connection options take precedence over per-call options."""
        return Connection(env.url, {**opts, **self.connection_options})

    def read_body(self, env: Env) -> Any:
        """Request bodies are sent in one piece; streams are drained first."""
        body = env.body
        if hasattr(body, "read"):
            return body.read()
        return body

    def options_from_env(self, env: Env) -> Dict[str, Any]:
        opts: Dict[str, Any] = {}
        if self.needs_ssl_settings(env):
            self.amend_opts_with_ssl(opts, env.ssl)

        req = env.request
        if req is not None:
            self.amend_opts_with_timeouts(opts, req)
            self.amend_opts_with_proxy_settings(opts, req)

        return opts

    def needs_ssl_settings(self, env: Env) -> bool:
        return (
            env.parsed_url.scheme == "https"
            and env.ssl is not None
            and not env.ssl.is_empty()
        )

    def amend_opts_with_ssl(self, opts: Dict[str, Any], ssl: SSLOptions) -> None:
        opts["ssl_verify_peer"] = ssl.verify_peer()
        # Blocking sockets only; not configurable
        opts["nonblock"] = False

        for key_in_opts, key_in_ssl in SSL_OPTION_KEYS:
            value = getattr(ssl, key_in_ssl)
            if value is None:
                continue
            opts[key_in_opts] = value

    def amend_opts_with_timeouts(self, opts: Dict[str, Any], req: RequestOptions) -> None:
        timeout = req.timeout
        if timeout is None:
            return

        opts["read_timeout"] = timeout
        opts["connect_timeout"] = timeout
        opts["write_timeout"] = timeout

        open_timeout = req.open_timeout
        if open_timeout is None:
            return

        opts["connect_timeout"] = open_timeout

    def amend_opts_with_proxy_settings(self, opts: Dict[str, Any], req: RequestOptions) -> None:
        if req.proxy is not None:
            opts["proxy"] = self.proxy_settings_for_opts(req.proxy)

    def proxy_settings_for_opts(self, proxy: ProxyOptions) -> Dict[str, Optional[Any]]:
        uri = proxy.parsed_uri
        host = uri.host
        return {
            "host": host,
            "hostname": host.strip("[]") if host else host,
            "port": uri.port or DEFAULT_PORTS.get(uri.scheme),
            "scheme": uri.scheme,
            "user": proxy.user,
            "password": proxy.password,
        }
