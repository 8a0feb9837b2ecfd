"""Application layer DI providers."""

from dishka import Scope, provide

from urlsum.adapter.reddit import CommentTreeFetcher
from urlsum.application.usecase.content import GetContentUseCase
from urlsum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_get_content_use_case(
        self, fetcher: CommentTreeFetcher
    ) -> GetContentUseCase:
        """Provide get content use case."""
        return GetContentUseCase(fetcher=fetcher)
