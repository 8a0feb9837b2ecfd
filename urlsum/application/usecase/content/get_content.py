"""Get content use case."""

from pydantic import BaseModel, Field

from urlsum.adapter.reddit import CommentTreeFetcher


class GetContentRequest(BaseModel):
    """Get content request."""

    url: str = Field(min_length=1)
    include_all_comments: bool = True


class GetContentResponse(BaseModel):
    """Transcript of a Reddit URL ready for summarization."""

    url: str
    content: str
    comment_count: int | None
    more_requests: int
    truncated: bool


class GetContentUseCase:
    """Use case for turning a Reddit URL into a plain-text transcript.

    Post views include the whole comment tree as far as Reddit lets it be
    recovered; listings include one block per post.
    """

    def __init__(self, fetcher: CommentTreeFetcher) -> None:
        """Initialize get content use case.

        Args:
            fetcher: Reddit comment tree fetcher
        """
        self.fetcher = fetcher

    async def execute(self, request: GetContentRequest) -> GetContentResponse:
        """Execute get content flow.

        Args:
            request: URL and whether to resolve "more" placeholders

        Returns:
            Transcript with the extracted comment count

        Raises:
            RedditError: If the initial request fails
        """
        result = await self.fetcher.get_content(
            request.url, include_all_comments=request.include_all_comments
        )

        return GetContentResponse(
            url=request.url,
            content=result.content,
            comment_count=result.comment_count,
            more_requests=result.report.request_count,
            truncated=result.report.truncated,
        )
