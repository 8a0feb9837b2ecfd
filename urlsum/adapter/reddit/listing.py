"""Initial listing response handling.

The first request of an extraction either returns a post view
(``[Listing<post>, Listing<comments>]``) or a single listing of posts
(subreddit, front page, search). HTTP failures are mapped to domain errors
before any JSON parsing happens.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import logfire

from urlsum.adapter.reddit.urls import is_comments_path
from urlsum.domain.error import (
    ContentDeletedError,
    ForbiddenError,
    HTTPError,
    ParseError,
    PostNotFoundError,
    PrivateSubredditError,
    RateLimitedError,
    SubredditNotFoundError,
    UserBannedError,
)
from urlsum.domain.model import ListingPost, Post
from urlsum.domain.value import ThingKind


@dataclass
class PostView:
    """Decoded post view: the post and the raw top-level comment children.

    ``comment_children`` is None when the comment listing is malformed.
    """

    post: Post
    comment_children: list[Any] | None


def raise_for_listing_status(response: httpx.Response, api_url: str) -> None:
    """Map a non-2xx listing response to a domain error.

    Raises:
        PrivateSubredditError, UserBannedError, ForbiddenError: On 403
        PostNotFoundError, SubredditNotFoundError: On 404
        RateLimitedError: On 429
        HTTPError: On any other non-2xx status
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    logfire.warn("Reddit listing request failed", url=api_url, status_code=status)

    if status == 403:
        body = response.text
        if "private" in body:
            raise PrivateSubredditError()
        if "banned" in body:
            raise UserBannedError()
        raise ForbiddenError("Access to this content is restricted")
    if status == 404:
        if is_comments_path(api_url):
            raise PostNotFoundError()
        raise SubredditNotFoundError()
    if status == 429:
        raise RateLimitedError(retry_after=_retry_after(response))
    if 500 <= status < 600:
        raise HTTPError(status, "Reddit server error")
    raise HTTPError(status, response.text or "Unknown error")


def decode_json(response: httpx.Response) -> Any:
    """Decode a response body.

    Raises:
        ParseError: If the body is not JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e


def is_post_view(payload: Any) -> bool:
    """Whether the payload is ``[Listing<t3>, Listing<comments>]``."""
    if not isinstance(payload, list) or len(payload) < 2:
        return False
    post_listing, comment_listing = payload[0], payload[1]
    if not isinstance(post_listing, dict) or not isinstance(comment_listing, dict):
        return False

    children = _listing_children(post_listing)
    if not children or not isinstance(children[0], dict):
        return False

    return (
        children[0].get("kind") == ThingKind.POST.value
        and comment_listing.get("kind") == ThingKind.LISTING.value
    )


def raise_for_error_payload(payload: Any) -> None:
    """Reject JSON error objects that describe deleted or removed content.

    Raises:
        ContentDeletedError: If the error mentions deletion or removal
    """
    if not isinstance(payload, dict):
        return
    error = payload.get("error")
    if isinstance(error, str) and ("deleted" in error or "removed" in error):
        raise ContentDeletedError()


def parse_post_view(payload: list[Any]) -> PostView:
    """Extract the post and its top-level comment children.

    Raises:
        ParseError: If the post data is missing or carries an invalid id
    """
    children = _listing_children(payload[0]) or []
    post_data = children[0].get("data") if children else None
    if not isinstance(post_data, dict):
        raise ParseError("Could not extract post data from Reddit response")

    try:
        post = Post.from_thing_data(post_data)
    except ValueError as e:
        raise ParseError(f"Could not extract post data from Reddit response: {e}") from e

    return PostView(post=post, comment_children=_listing_children(payload[1]))


def parse_listing(payload: Any, base_url: str) -> list[ListingPost]:
    """Extract the posts of a subreddit listing.

    Returns:
        Listing entries in API order (empty for an empty public listing)

    Raises:
        ParseError: If the payload is not a listing
        PrivateSubredditError: If an empty listing reports a private subreddit
    """
    if not isinstance(payload, dict):
        raise ParseError("Could not parse subreddit data from Reddit response")
    children = _listing_children(payload)
    if children is None:
        raise ParseError("Could not parse subreddit data from Reddit response")

    if not children:
        error = payload.get("error")
        if isinstance(error, str) and ("private" in error or "forbidden" in error):
            raise PrivateSubredditError()
        return []

    return [
        ListingPost.from_thing_data(child["data"], base_url=base_url)
        for child in children
        if isinstance(child, dict) and isinstance(child.get("data"), dict)
    ]


def _listing_children(listing: Any) -> list[Any] | None:
    if not isinstance(listing, dict):
        return None
    data = listing.get("data")
    if not isinstance(data, dict):
        return None
    children = data.get("children")
    return children if isinstance(children, list) else None


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
