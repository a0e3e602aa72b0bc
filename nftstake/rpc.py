"""Solana RPC client construction with backoff on rate limiting."""

from __future__ import annotations

import logging
import time

import httpx
from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

_DEFAULT_MAX_RETRIES = 5
_DEFAULT_BACKOFF = 2.0


def _retry_delay(response: httpx.Response, attempt: int, backoff: float) -> float:
    retry_after = response.headers.get("Retry-After")
    if retry_after is not None:
        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            pass
    return (attempt + 1) * backoff


class RateLimitTransport(httpx.BaseTransport):
    """Retries requests answered with 429 Too Many Requests.

    Honors Retry-After when the server sends it, otherwise waits a linearly
    growing delay. Any other status is returned as is.
    """

    def __init__(
        self,
        wrapped: httpx.BaseTransport | None = None,
        max_retries: int = _DEFAULT_MAX_RETRIES,
        backoff: float = _DEFAULT_BACKOFF,
        sleep=time.sleep,
    ) -> None:
        self._wrapped = wrapped or httpx.HTTPTransport()
        self._max_retries = max_retries
        self._backoff = backoff
        self._sleep = sleep

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            response = self._wrapped.handle_request(request)
            if response.status_code != 429 or attempt >= self._max_retries:
                return response
            delay = _retry_delay(response, attempt, self._backoff)
            response.close()
            logger.warning(
                "rate limited by %s, retry %d/%d in %.1fs",
                request.url.host,
                attempt + 1,
                self._max_retries,
                delay,
            )
            self._sleep(delay)
            attempt += 1

    def close(self) -> None:
        self._wrapped.close()


def new_rpc_client(
    url: str,
    timeout: float = 30,
    max_retries: int = _DEFAULT_MAX_RETRIES,
) -> SolanaHTTPClient:
    """Create a Solana RPC client that backs off on 429 responses."""
    client = SolanaHTTPClient(url, timeout=timeout)
    client._provider.session = httpx.Client(
        timeout=timeout,
        transport=RateLimitTransport(max_retries=max_retries),
    )
    return client
