"""Interface layer error mapping.

Domain errors raised while serving a request are rendered as JSON:

    {"error": "<kind>", "message": "...", "recovery": "...", "retryable": false}
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from urlsum.domain.error import RateLimitedError, RedditError
from urlsum.domain.value import ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_URL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.POST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SUBREDDIT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONTENT_DELETED: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.PRIVATE_SUBREDDIT: status.HTTP_403_FORBIDDEN,
    ErrorKind.USER_BANNED: status.HTTP_403_FORBIDDEN,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.API_QUOTA_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.NETWORK: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.HTTP: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PARSE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.COMMENTS_UNAVAILABLE: status.HTTP_502_BAD_GATEWAY,
}


class ErrorResponse(BaseModel):
    """Error body returned for domain failures."""

    error: ErrorKind
    message: str
    recovery: str
    retryable: bool

    @classmethod
    def from_domain(cls, error: RedditError) -> "ErrorResponse":
        return cls(
            error=error.kind,
            message=error.description,
            recovery=error.recovery,
            retryable=error.retryable,
        )


def status_for(error: RedditError) -> int:
    """HTTP status code for a domain error."""
    return STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def reddit_error_handler(request: Request, exc: RedditError) -> JSONResponse:
    """Render a ``RedditError`` as a JSON error response."""
    status_code = status_for(exc)
    logfire.warn(
        "Request failed",
        path=request.url.path,
        kind=exc.kind.value,
        status_code=status_code,
    )

    headers = {}
    if isinstance(exc, RateLimitedError) and exc.retry_after is not None:
        headers["Retry-After"] = str(exc.retry_after)

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.from_domain(exc).model_dump(mode="json"),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on an application."""
    app.add_exception_handler(RedditError, reddit_error_handler)
