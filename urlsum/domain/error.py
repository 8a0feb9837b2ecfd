"""Domain layer errors.

Every failure a caller of the fetcher can observe is a ``RedditError``
subclass. Each carries a human-readable description and a recovery hint so
the calling layer can render a message and a retry affordance without
knowing about HTTP.
"""

from urlsum.domain.value import ErrorKind


class DomainError(Exception):
    """Base domain error."""

    pass


DEFAULT_RECOVERY = "Try again or contact support if the problem persists"


class RedditError(DomainError):
    """Base class for Reddit extraction failures."""

    kind: ErrorKind
    recovery: str = DEFAULT_RECOVERY
    retryable: bool = False

    def __init__(self, description: str):
        self.description = description
        super().__init__(description)


class InvalidURLError(RedditError):
    """The URL cannot be turned into a Reddit JSON endpoint."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str | None = None):
        self.url = url
        super().__init__("The Reddit URL provided is not valid")


class NetworkError(RedditError):
    """The request never produced an HTTP response."""

    kind = ErrorKind.NETWORK
    recovery = "Check your internet connection"
    retryable = True

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Network connection failed: {cause}")


class HTTPError(RedditError):
    """Reddit answered with an unexpected HTTP status."""

    kind = ErrorKind.HTTP
    retryable = True

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(
            f"Reddit server error ({status_code}): {message or 'Unknown error'}"
        )


class RateLimitedError(RedditError):
    """Reddit throttled the request (HTTP 429)."""

    kind = ErrorKind.RATE_LIMITED
    recovery = "Wait a few minutes before trying again"
    retryable = True

    def __init__(self, retry_after: int | None = None):
        self.retry_after = retry_after
        if retry_after is not None:
            description = (
                "Too many requests to Reddit. "
                f"Please try again in {retry_after} seconds."
            )
        else:
            description = (
                "Too many requests to Reddit. Please wait a moment and try again."
            )
        super().__init__(description)


class ForbiddenError(RedditError):
    """Reddit refused access for a reason other than privacy or a ban."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Access denied: {reason}")


class PostNotFoundError(RedditError):
    kind = ErrorKind.POST_NOT_FOUND
    recovery = "Check the URL and try again"

    def __init__(self):
        super().__init__(
            "This Reddit post was not found. "
            "It may have been deleted or the URL is incorrect."
        )


class SubredditNotFoundError(RedditError):
    kind = ErrorKind.SUBREDDIT_NOT_FOUND
    recovery = "Check the URL and try again"

    def __init__(self):
        super().__init__("This subreddit was not found or may be private.")


class ParseError(RedditError):
    """The response body did not have the expected shape."""

    kind = ErrorKind.PARSE

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to parse Reddit data: {reason}")


class CommentsUnavailableError(RedditError):
    kind = ErrorKind.COMMENTS_UNAVAILABLE

    def __init__(self):
        super().__init__("Comments are not available for this Reddit post.")


class PrivateSubredditError(RedditError):
    kind = ErrorKind.PRIVATE_SUBREDDIT
    recovery = "Try a different Reddit post or subreddit"

    def __init__(self):
        super().__init__("This subreddit is private and cannot be accessed.")


class UserBannedError(RedditError):
    kind = ErrorKind.USER_BANNED
    recovery = "Try a different Reddit post or subreddit"

    def __init__(self):
        super().__init__("Access to this content is restricted.")


class ContentDeletedError(RedditError):
    kind = ErrorKind.CONTENT_DELETED
    recovery = "This content is no longer available"

    def __init__(self):
        super().__init__("This Reddit content has been deleted.")


class APIQuotaExceededError(RedditError):
    kind = ErrorKind.API_QUOTA_EXCEEDED
    retryable = True

    def __init__(self):
        super().__init__("Reddit API quota exceeded. Please try again later.")
