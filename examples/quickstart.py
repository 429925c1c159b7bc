"""
Quickstart Example

Sends one request through the urllib3 adapter and maps error statuses to
relay_http exceptions.
"""

import logging

from relay_http import (
    AdapterConfig,
    ConnectionFailed,
    Env,
    RaiseErrorStage,
    RequestOptions,
    ResourceNotFound,
    SSLError,
    TimeoutError as RelayTimeoutError,
    build_adapter,
)
from relay_http.logging_setup import setup_structured_logger


def main():
    setup_structured_logger(logging.DEBUG)

    adapter = build_adapter(AdapterConfig.from_env(pool_maxsize=2))
    pipeline = RaiseErrorStage(adapter)

    env = Env(
        method="get",
        url="https://httpbin.org/status/404",
        request_headers={"Accept": "application/json"},
        request=RequestOptions(timeout=5, open_timeout=2),
    )

    try:
        pipeline(env)
    except ResourceNotFound as e:
        print(f"Not found: {e.message}")
    except RelayTimeoutError as e:
        print(f"Timed out: {e!r}")
    except SSLError as e:
        print(f"TLS failure: {e}")
    except ConnectionFailed as e:
        print(f"Connection failed: {e} (cause: {e.__cause__!r})")
    else:
        print(f"✓ {env.status} {env.reason_phrase}")


if __name__ == "__main__":
    main()
