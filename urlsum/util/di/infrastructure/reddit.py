"""Reddit infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide

from urlsum.adapter.reddit import CommentTreeFetcher, RedditClient
from urlsum.config import RedditSettings
from urlsum.util.di.base import ProviderBase


class RedditProvider(ProviderBase):
    """Reddit component base."""

    __mock_component__ = "reddit"

    @provide(scope=Scope.APP)
    def get_comment_tree_fetcher(
        self, client: RedditClient, settings: RedditSettings
    ) -> CommentTreeFetcher:
        """Provide the fetcher.

        APP scoped so every request shares the client's concurrency limiter.
        """
        return CommentTreeFetcher(client=client, settings=settings)


class ProdRedditProvider(RedditProvider):
    """Production Reddit provider talking to www.reddit.com."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_reddit_client(
        self, settings: RedditSettings
    ) -> AsyncIterator[RedditClient]:
        """Provide Reddit client, closed when the container shuts down."""
        async with RedditClient(settings) as client:
            logfire.info("Reddit client opened", base_url=settings.base_url)
            yield client
        logfire.info("Reddit client closed")
