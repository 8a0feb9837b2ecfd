"""Unit tests for the Reddit HTTP client."""

import asyncio

import httpx
import pytest

from tests.conftest import make_client, make_settings
from urlsum.adapter.reddit import RedditClient, RequestLimiter
from urlsum.config import DESKTOP_USER_AGENT


class TestRedditClient:
    """Tests for RedditClient."""

    @pytest.mark.asyncio
    async def test_sends_browser_user_agent_and_json_accept(self):
        """Should send the configured headers with every request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = make_client(handler)

        response = await client.get("https://www.reddit.com/hot.json")

        assert response.status_code == 200
        assert seen[0].headers["User-Agent"] == DESKTOP_USER_AGENT
        assert seen[0].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_status_codes_not_interpreted(self):
        """Should return error statuses instead of raising."""
        client = make_client(lambda request: httpx.Response(429))

        response = await client.get("https://www.reddit.com/hot.json")

        assert response.status_code == 429

    @pytest.mark.asyncio
    async def test_concurrency_capped_by_limiter(self):
        """Should never have more requests in flight than the limiter allows."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.01)
            return httpx.Response(200, json={})

        client = make_client(handler, make_settings(max_concurrent_requests=3))

        await asyncio.gather(
            *(client.get(f"https://www.reddit.com/r/{i}.json") for i in range(10))
        )

        assert client.limiter.peak == 3
        assert client.limiter.in_flight == 0

    @pytest.mark.asyncio
    async def test_limiter_shared_between_clients(self):
        limiter = RequestLimiter(1)

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.01)
            return httpx.Response(200, json={})

        transport = httpx.MockTransport(handler)
        first = RedditClient(
            make_settings(), http_client=httpx.AsyncClient(transport=transport), limiter=limiter
        )
        second = RedditClient(
            make_settings(), http_client=httpx.AsyncClient(transport=transport), limiter=limiter
        )

        await asyncio.gather(
            first.get("https://www.reddit.com/a.json"),
            second.get("https://www.reddit.com/b.json"),
        )

        assert limiter.peak == 1

    @pytest.mark.asyncio
    async def test_provided_http_client_left_open(self):
        """Should only close httpx clients it created itself."""
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(200))
        )

        async with RedditClient(make_settings(), http_client=http_client):
            pass

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_http_client_closed(self):
        client = RedditClient(make_settings())

        await client.aclose()

        assert client._http.is_closed
