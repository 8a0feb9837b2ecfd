"""Test configuration and Reddit JSON builders."""

import asyncio
from typing import Any

import httpx
import logfire
import pytest

from urlsum.adapter.reddit import RedditClient
from urlsum.config import RedditSettings

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


def comment_thing(
    comment_id: str,
    body: str = "text",
    author: str | None = "alice",
    score: int | None = 1,
    parent_id: str | None = None,
    replies: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a ``t1`` thing as Reddit sends it."""
    data: dict[str, Any] = {"id": comment_id, "body": body}
    if author is not None:
        data["author"] = author
    if score is not None:
        data["score"] = score
    if parent_id is not None:
        data["parent_id"] = parent_id
    # Reddit sends an empty string when a comment has no replies
    data["replies"] = listing(replies) if replies else ""
    return {"kind": "t1", "data": data}


def more_thing(ids: list[str], parent_id: str = "t3_abc123") -> dict[str, Any]:
    """Build a ``more`` placeholder."""
    return {
        "kind": "more",
        "data": {"children": ids, "count": len(ids), "parent_id": parent_id},
    }


def listing(children: list[dict[str, Any]]) -> dict[str, Any]:
    return {"kind": "Listing", "data": {"children": children}}


def post_thing(post_id: str = "abc123", **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": post_id,
        "title": "Interesting post",
        "author": "bob",
        "subreddit": "python",
        "created_utc": 1_700_000_000,
        "score": 1234,
        "num_comments": 10,
        "over_18": False,
        "selftext": "",
        "removed_by_category": None,
    }
    data.update(overrides)
    return {"kind": "t3", "data": data}


def post_view(
    comments: list[dict[str, Any]], post: dict[str, Any] | None = None
) -> list[dict[str, Any]]:
    """Build the ``[Listing<post>, Listing<comments>]`` post view payload."""
    return [listing([post or post_thing()]), listing(comments)]


def morechildren_payload(things: list[dict[str, Any]]) -> dict[str, Any]:
    return {"json": {"errors": [], "data": {"things": things}}}


def make_settings(**overrides: Any) -> RedditSettings:
    return RedditSettings(**overrides)


def make_client(handler, settings: RedditSettings | None = None) -> RedditClient:
    """Reddit client whose requests are answered by ``handler``."""
    return RedditClient(
        settings or make_settings(),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
