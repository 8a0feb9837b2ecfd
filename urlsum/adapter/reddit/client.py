"""HTTP client for Reddit's public JSON endpoints."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import logfire

from urlsum.config import RedditSettings


class RequestLimiter:
    """Caps the number of HTTP requests in flight at once.

    One limiter is shared by every extraction that uses the same client, so
    the cap holds system-wide rather than per extraction.
    """

    def __init__(self, max_concurrent: int) -> None:
        """Initialize limiter.

        Args:
            max_concurrent: Number of permits
        """
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self.in_flight = 0
        self.peak = 0

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block."""
        async with self._semaphore:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
            try:
                yield
            finally:
                self.in_flight -= 1


class RedditClient:
    """Thin wrapper around httpx for anonymous Reddit reads.

    Adds the browser User-Agent and JSON Accept headers to every request and
    routes every request through the shared ``RequestLimiter``. Status codes
    are not interpreted here; callers decide what a 403 or 429 means.
    """

    def __init__(
        self,
        settings: RedditSettings,
        http_client: httpx.AsyncClient | None = None,
        limiter: RequestLimiter | None = None,
    ) -> None:
        """Initialize Reddit client.

        Args:
            settings: Reddit settings
            http_client: Preconfigured httpx client (a new one is created and
                owned by this instance when omitted)
            limiter: Shared limiter (one is created from settings when omitted)
        """
        self.settings = settings
        self.limiter = limiter or RequestLimiter(settings.max_concurrent_requests)
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=settings.timeout,
            follow_redirects=True,
        )
        self.headers = {
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        }

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    async def get(self, url: str) -> httpx.Response:
        """Send a GET request once a limiter permit is available.

        Args:
            url: Absolute URL, query string included

        Returns:
            Response with its body already read

        Raises:
            httpx.TransportError: If no response was received
        """
        async with self.limiter.slot():
            logfire.debug("Reddit request", url=url, in_flight=self.limiter.in_flight)
            return await self._http.get(url, headers=self.headers)

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "RedditClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
