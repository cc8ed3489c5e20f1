"""HTTP client with timeout and retry support.

Provides the async HTTP client feed adapters use to download documents:
- A request timeout per feed
- Retry with exponential backoff on timeouts, transport errors and 5xx
- Redirect following

Example:
    >>> from feeddump.http import HttpClient
    >>>
    >>> async with HttpClient(timeout=10.0) as client:
    ...     xml = await client.get_bytes("https://example.com/rss.xml")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from feeddump import __version__

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"feeddump/{__version__}"
FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"
RETRYABLE_STATUS = (500, 502, 503, 504)


class HttpClientError(Exception):
    """Raised when a request fails after all retries."""


class HttpClient:
    """Async HTTP client with timeout and retry support.

    Example:
        >>> async with HttpClient(max_retries=0) as client:
        ...     xml = await client.get_bytes(url)

    Attributes:
        timeout: Request timeout in seconds
        max_retries: Retry attempts after the first failure
        user_agent: User-Agent header value
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 2,
        user_agent: str = DEFAULT_USER_AGENT,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Retry attempts on retryable failures
            user_agent: User-Agent header
            headers: Additional default headers
            transport: Optional httpx transport (tests use ``httpx.MockTransport``)
        """
        self._timeout = timeout
        self._max_retries = max_retries
        self._user_agent = user_agent
        self._extra_headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._timeout

    @property
    def max_retries(self) -> int:
        """Maximum retry attempts."""
        return self._max_retries

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "User-Agent": self._user_agent,
            "Accept": FEED_ACCEPT,
            **self._extra_headers,
        }

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpClient:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request with retries.

        Args:
            url: Absolute URL
            **kwargs: Additional arguments for httpx

        Returns:
            The successful HTTP response

        Raises:
            HttpClientError: On a non-retryable status or once retries run out
        """
        client = self._ensure_client()
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            try:
                response = await client.get(url, **kwargs)
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                last_error = e
                status = e.response.status_code
                if status in RETRYABLE_STATUS and attempt < self._max_retries:
                    logger.debug("HTTP %s from %s, retrying (attempt %d)", status, url, attempt + 1)
                    await asyncio.sleep(2**attempt)
                    continue
                raise HttpClientError(f"HTTP {status} from {url}") from e

            except httpx.TimeoutException as e:
                last_error = e
                if attempt < self._max_retries:
                    logger.debug("Timeout fetching %s, retrying (attempt %d)", url, attempt + 1)
                    await asyncio.sleep(2**attempt)
                    continue
                raise HttpClientError(f"Request to {url} timed out after {self._timeout}s") from e

            except httpx.RequestError as e:
                last_error = e
                if attempt < self._max_retries:
                    logger.debug("Request to %s failed: %s, retrying", url, e)
                    await asyncio.sleep(2**attempt)
                    continue
                raise HttpClientError(f"Request to {url} failed: {e}") from e

        raise HttpClientError(f"Max retries exceeded: {last_error}")

    async def get_bytes(self, url: str, **kwargs: Any) -> bytes:
        """Get the undecoded response body.

        XML documents name their own encoding, so feeds are handed to the
        parser as bytes.
        """
        response = await self.get(url, **kwargs)
        return response.content


@asynccontextmanager
async def http_client(**kwargs: Any) -> AsyncIterator[HttpClient]:
    """Context manager for HTTP client.

    Example:
        >>> async with http_client(timeout=5.0) as client:
        ...     xml = await client.get_bytes("https://example.com/rss.xml")
    """
    client = HttpClient(**kwargs)
    try:
        async with client:
            yield client
    finally:
        await client.close()


__all__ = [
    "HttpClient",
    "HttpClientError",
    "http_client",
]
