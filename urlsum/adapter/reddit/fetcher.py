"""Reddit content extraction.

``CommentTreeFetcher`` is the single entry point: given any Reddit URL it
returns a plain-text transcript. Post views are expanded into the full
comment tree (placeholders included); listings are rendered as a list of
posts.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any

import httpx
import logfire

from urlsum.adapter.reddit.client import RedditClient
from urlsum.adapter.reddit.listing import (
    decode_json,
    is_post_view,
    parse_listing,
    parse_post_view,
    raise_for_error_payload,
    raise_for_listing_status,
)
from urlsum.adapter.reddit.resolver import (
    ExtractionContext,
    MoreChildrenResolver,
    Sleep,
)
from urlsum.adapter.reddit.urls import build_listing_url
from urlsum.config import RedditSettings
from urlsum.domain.error import (
    CommentsUnavailableError,
    ContentDeletedError,
    NetworkError,
)
from urlsum.domain.model import ExtractionResult, Post, ResolutionReport
from urlsum.domain.service import (
    EMPTY_LISTING_MESSAGE,
    CommentForest,
    render_listing,
    render_post,
    walk_listing,
)


class CommentTreeFetcher:
    """Fetches a Reddit URL and renders it as a transcript."""

    def __init__(
        self,
        client: RedditClient,
        settings: RedditSettings,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize fetcher.

        Args:
            client: Reddit client shared across extractions
            settings: Reddit settings
            sleep: Non-blocking sleep used for delays and backoff
        """
        self.client = client
        self.settings = settings
        self.resolver = MoreChildrenResolver(client, settings, sleep=sleep)

    async def get_content(
        self, url: str, include_all_comments: bool = True
    ) -> ExtractionResult:
        """Extract the content behind a Reddit URL.

        Args:
            url: Post, subreddit or front page URL
            include_all_comments: Resolve "more" placeholders when True

        Returns:
            Transcript, extracted comment count (None for listings) and the
            resolution report

        Raises:
            InvalidURLError: If the URL cannot be turned into an API URL
            NetworkError: If the initial request gets no response
            RedditError: Any other failure of the initial request
        """
        api_url = build_listing_url(
            url,
            listing_limit=self.settings.listing_limit,
            base_url=self.client.base_url,
        )

        with logfire.span("reddit.get_content", url=url, api_url=api_url):
            try:
                response = await self.client.get(api_url)
            except httpx.HTTPError as e:
                logfire.error("Reddit request failed", url=api_url, error=str(e))
                raise NetworkError(e) from e

            raise_for_listing_status(response, api_url)
            payload = decode_json(response)

            if is_post_view(payload):
                return await self._extract_post(payload, include_all_comments)

            raise_for_error_payload(payload)
            posts = parse_listing(payload, base_url=self.client.base_url)
            logfire.info("Listing extracted", url=url, posts=len(posts))
            content = render_listing(posts) if posts else EMPTY_LISTING_MESSAGE
            return ExtractionResult(content=content, comment_count=None)

    async def _extract_post(
        self, payload: list[Any], include_all_comments: bool
    ) -> ExtractionResult:
        view = parse_post_view(payload)
        post = view.post

        if post.is_removed:
            logfire.info("Post removed", post_id=post.id, category=post.removed_by_category)
            raise ContentDeletedError()

        forest = CommentForest()
        report = ResolutionReport()
        if include_all_comments:
            report = await self._extract_comments(post, view.comment_children, forest)

        logfire.info(
            "Post extracted",
            post_id=post.id,
            comments=len(forest),
            advertised=post.num_comments,
            more_requests=report.request_count,
            truncated=report.truncated,
        )

        content = render_post(post, forest.flatten(), now=datetime.now(timezone.utc))
        return ExtractionResult(
            content=content, comment_count=len(forest), report=report
        )

    async def _extract_comments(
        self, post: Post, comment_children: list[Any] | None, forest: CommentForest
    ) -> ResolutionReport:
        """Fill the forest with inline comments, then resolve placeholders."""
        if comment_children is None:
            raise CommentsUnavailableError()

        initial = walk_listing(comment_children)
        forest.extend(initial.comments)

        report = ResolutionReport()
        if initial.more_items:
            context = ExtractionContext.create(
                post.link_id, self.settings.max_more_requests
            )
            # Ids already present in the initial response are never requested
            context.claim(str(comment.id) for comment in initial.comments)
            resolution = await self.resolver.resolve(context, initial.more_items)
            forest.extend(resolution.comments)
            report = resolution.report

        return report
