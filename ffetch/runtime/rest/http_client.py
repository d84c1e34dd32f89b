"""HTTP client helper."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional
from urllib.parse import urlsplit

import aiohttp

from ...config import DEFAULT_TIMEOUT
from ...core.context import FetchResponse
from ...core.exceptions import TransportError

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper usable as a fetch capability."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def resolve(self, url: str) -> str:
        """Combine a relative url with base_url."""
        if self.base_url and not urlsplit(url).scheme:
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def fetch(self, url: str) -> FetchResponse:
        """GET request returning a buffered response.

        Non-2xx statuses are returned, not raised.

        Raises:
            TransportError: If no response could be obtained
        """
        url = self.resolve(url)
        try:
            async with self.session.get(url) as response:
                body = await response.read()
                return FetchResponse(
                    url=url, status=response.status, body=body, encoding=response.charset
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(
                "transport_error",
                extra={"url": url, "error_type": type(e).__name__, "error_message": str(e)},
            )
            raise TransportError(f"GET {url} failed: {e}", url=url) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HTTPClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


async def fetch_url(url: str) -> FetchResponse:
    """Default fetch capability using a short-lived session per request."""
    async with HTTPClient() as client:
        return await client.fetch(url)
