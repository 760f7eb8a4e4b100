"""
Base API Client - GET transport shared by the Prismic clients.

Every request goes through:
    rate limit -> circuit breaker -> httpx GET -> status check -> JSON decode

Only connection errors and 5xx responses count as circuit breaker failures;
a rejected query (4xx) or an undecodable body says nothing about backend health.

Retries happen only here, for two transient conditions:
- HTTP 429: wait for ``Retry-After`` (or 2, 4, 8 s) and try again
- connection errors: back off 2, 4, 8 s and try again

Everything else maps to a typed error on the first attempt:
    5xx          -> ServiceUnavailableError
    other status -> BackendRequestFailure (with status_code)
    bad JSON     -> ParseError
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import httpx
from typing_extensions import Self

from prismic_search.shared.async_utils import CircuitBreaker
from prismic_search.shared.exceptions import (
    BackendRequestFailure,
    NetworkError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


class _RetryableStatus(Exception):
    """Internal signal: the response asked us to come back later."""

    def __init__(self, delay: float) -> None:
        super().__init__(delay)
        self.delay = delay


class BaseAPIClient:
    """
    Base class for HTTP API clients.

    Subclasses set ``_service_name`` and call ``_make_request``; tests pass
    ``transport=httpx.MockTransport(handler)``.
    """

    _service_name: str = "API"
    _MAX_RETRIES: int = 3

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        min_interval: float = 0.0,
        headers: dict[str, str] | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Prefix for relative request paths
            timeout: Request timeout in seconds
            min_interval: Minimum seconds between requests
            headers: Headers sent with every request
            circuit_breaker: Defaults to threshold=10, recovery=60s
            transport: Optional httpx transport
        """
        self._base_url = base_url.rstrip("/")
        self._min_interval = min_interval
        self._last_request_time = 0.0
        self._circuit_breaker = circuit_breaker or CircuitBreaker(failure_threshold=10, recovery_timeout=60.0)
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=headers or {},
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10, keepalive_expiry=30.0),
            transport=transport,
        )

    async def _rate_limit(self) -> None:
        wait = self._min_interval - (time.time() - self._last_request_time)
        if wait > 0:
            await asyncio.sleep(wait)
        self._last_request_time = time.time()

    def _build_url(self, url: str) -> str:
        return url if url.startswith(("http://", "https://")) else f"{self._base_url}{url}"

    @staticmethod
    def _backoff(attempt: int) -> float:
        return float(2 ** (attempt + 1))

    async def _make_request(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> dict[str, Any] | str:
        """
        GET ``url`` and return its decoded body.

        Raises:
            RateLimitError: Still 429 after retries, or circuit open
            ServiceUnavailableError: HTTP 5xx
            BackendRequestFailure: Any other error status
            NetworkError: Connection failed after retries
            ParseError: Body is not valid JSON
        """
        full_url = self._build_url(url)
        attempt = 0
        while True:
            try:
                return await self._attempt(full_url, headers, expect_json, attempt)
            except _RetryableStatus as retry:
                if attempt >= self._MAX_RETRIES:
                    msg = f"{self._service_name}: Rate limit exceeded after retries"
                    raise RateLimitError(msg, retry_after=retry.delay) from None
                logger.warning(
                    f"{self._service_name}: Rate limited (429), "
                    f"retry {attempt + 1}/{self._MAX_RETRIES} in {retry.delay:.1f}s"
                )
                await asyncio.sleep(retry.delay)
            except httpx.RequestError as e:
                if attempt >= self._MAX_RETRIES:
                    logger.error(f"{self._service_name} request failed: {e}")
                    msg = f"{self._service_name} connection failed: {e}"
                    raise NetworkError(msg) from e
                logger.warning(f"{self._service_name} request error (attempt {attempt + 1}): {e}")
                await asyncio.sleep(self._backoff(attempt))
            attempt += 1

    async def _attempt(
        self,
        url: str,
        headers: dict[str, str] | None,
        expect_json: bool,
        attempt: int,
    ) -> dict[str, Any] | str:
        await self._rate_limit()
        async with self._circuit_breaker:
            response = await self._execute_request(url, headers=headers)
            if response.is_server_error:
                self._check_status(response)
        if response.status_code == 429:
            raise _RetryableStatus(self._get_retry_after(response, attempt))
        self._check_status(response)
        return self._parse_response(response, expect_json)

    def _check_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        status = response.status_code
        logger.warning(f"{self._service_name} HTTP error {status}: {response.reason_phrase}")
        if status >= 500:
            raise ServiceUnavailableError(f"HTTP {status}: {response.reason_phrase}", service=self._service_name)
        msg = f"{self._service_name} HTTP {status}: {response.reason_phrase}"
        raise BackendRequestFailure(msg, status_code=status)

    async def _execute_request(self, url: str, *, headers: dict[str, str] | None = None) -> httpx.Response:
        """Send the GET. Override for custom transport behavior."""
        return await self._client.get(url, headers=headers or {})

    def _parse_response(self, response: httpx.Response, expect_json: bool) -> dict[str, Any] | str:
        if not expect_json:
            return response.text
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ParseError("Invalid JSON response", source=self._service_name) from e

    @classmethod
    def _get_retry_after(cls, response: httpx.Response, attempt: int) -> float:
        """``Retry-After`` seconds, falling back to exponential backoff."""
        try:
            return float(response.headers["Retry-After"])
        except (KeyError, ValueError):
            return cls._backoff(attempt)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
