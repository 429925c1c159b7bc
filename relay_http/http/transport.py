"""
urllib3 connection handle used by Urllib3Adapter.

The adapter builds transport options as a flat dict (``ssl_verify_peer``,
``read_timeout``, ``proxy`` ...). This module turns that dict into a
urllib3 pool manager and performs a single request through it.
"""

import logging
import os
import ssl
import tempfile
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import urllib3
from urllib3 import HTTPHeaderDict
from urllib3.util import make_headers

logger = logging.getLogger("relay_http.transport")

# Transport option -> urllib3 pool keyword, for options copied verbatim
_POOL_KEYWORDS = {
    "client_cert": "cert_file",
    "client_key": "key_file",
    "ssl_ca_file": "ca_certs",
    "ssl_ca_path": "ca_cert_dir",
}

# Options consumed here rather than passed through to the pool manager
_CONSUMED = frozenset(
    set(_POOL_KEYWORDS)
    | {
        "ssl_verify_peer",
        "nonblock",
        "certificate",
        "private_key",
        "ssl_version",
        "ssl_min_version",
        "ssl_max_version",
        "read_timeout",
        "connect_timeout",
        "write_timeout",
        "proxy",
    }
)


@dataclass
class Response:
    """Result of one transport request"""

    status: int
    body: bytes
    headers: HTTPHeaderDict
    reason_phrase: Optional[str] = None


def tls_version(value: Union[str, ssl.TLSVersion]) -> ssl.TLSVersion:
    """
    Resolve a TLS version name.

    Example:
        >>> tls_version("TLSv1.2")
        <TLSVersion.TLSv1_2: 771>
    """
    if isinstance(value, ssl.TLSVersion):
        return value
    name = str(value).strip().replace(".", "_")
    try:
        return ssl.TLSVersion[name]
    except KeyError:
        raise ValueError(f"Unknown TLS version: {value!r}") from None


def _write_pem(stack: ExitStack, pem: str) -> str:
    fd, path = tempfile.mkstemp(suffix=".pem")
    stack.callback(os.unlink, path)
    with os.fdopen(fd, "w") as handle:
        handle.write(pem)
    return path


class Connection:
    """
    One-shot connection to a URL.

    Args:
        url: Absolute request URL
        options: Transport options built by the adapter, already merged with
            the adapter's static connection options
    """

    def __init__(self, url: str, options: Optional[Mapping[str, Any]] = None):
        self.url = url
        self.options: Dict[str, Any] = dict(options or {})

    def pool_kwargs(self, stack: ExitStack) -> Dict[str, Any]:
        """
        Translate TLS options to urllib3 pool keywords.

        In-memory PEM material is written to temporary files that live as
        long as ``stack``.
        """
        opts = self.options
        kwargs = {k: v for k, v in opts.items() if k not in _CONSUMED}

        if "ssl_verify_peer" in opts:
            kwargs["cert_reqs"] = "CERT_REQUIRED" if opts["ssl_verify_peer"] else "CERT_NONE"

        for key, keyword in _POOL_KEYWORDS.items():
            if opts.get(key):
                kwargs[keyword] = opts[key]

        if opts.get("certificate"):
            kwargs["cert_file"] = _write_pem(stack, opts["certificate"])
        if opts.get("private_key"):
            kwargs["key_file"] = _write_pem(stack, opts["private_key"])

        # An exact version pins both bounds
        if opts.get("ssl_version"):
            kwargs["ssl_minimum_version"] = tls_version(opts["ssl_version"])
            kwargs["ssl_maximum_version"] = tls_version(opts["ssl_version"])
        if opts.get("ssl_min_version"):
            kwargs["ssl_minimum_version"] = tls_version(opts["ssl_min_version"])
        if opts.get("ssl_max_version"):
            kwargs["ssl_maximum_version"] = tls_version(opts["ssl_max_version"])

        return kwargs

    def timeout(self) -> Optional[urllib3.Timeout]:
        """
        Build the urllib3 timeout, or None to keep urllib3's default.

        urllib3 sends the request under the connect-phase socket timeout, so
        ``write_timeout`` only bounds that phase when no connect timeout is
        set.
        """
        opts = self.options
        phases = {}
        connect = opts.get("connect_timeout", opts.get("write_timeout"))
        if connect is not None:
            phases["connect"] = connect
        if opts.get("read_timeout") is not None:
            phases["read"] = opts["read_timeout"]
        if not phases:
            return None
        return urllib3.Timeout(**phases)

    def manager(self, pool_kwargs: Dict[str, Any]) -> urllib3.PoolManager:
        proxy = self.options.get("proxy")
        if not proxy:
            return urllib3.PoolManager(**pool_kwargs)

        proxy_url = f"{proxy['scheme']}://{proxy['host']}:{proxy['port']}"
        proxy_headers = None
        if proxy.get("user"):
            proxy_headers = make_headers(
                proxy_basic_auth=f"{proxy['user']}:{proxy.get('password') or ''}"
            )
        return urllib3.ProxyManager(proxy_url, proxy_headers=proxy_headers, **pool_kwargs)

    def request(
        self,
        method: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[Union[bytes, str]] = None,
    ) -> Response:
        """
        Perform exactly one request.

        Retries and redirects are disabled; urllib3 exceptions propagate to
        the caller untouched.
        """
        with ExitStack() as stack:
            manager = self.manager(self.pool_kwargs(stack))
            stack.callback(manager.clear)

            kwargs: Dict[str, Any] = {}
            timeout = self.timeout()
            if timeout is not None:
                kwargs["timeout"] = timeout

            resp = manager.urlopen(
                method,
                self.url,
                body=body,
                headers=dict(headers or {}),
                retries=False,
                redirect=False,
                preload_content=True,
                **kwargs,
            )
            logger.debug("urllib3 %s %s -> %s", method, self.url, resp.status)

            return Response(
                status=resp.status,
                body=resp.data,
                headers=HTTPHeaderDict(resp.headers),
                reason_phrase=resp.reason,
            )
