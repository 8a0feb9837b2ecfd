"""Reddit public JSON API adapter."""

from .client import RedditClient, RequestLimiter
from .fetcher import CommentTreeFetcher
from .resolver import ExtractionContext, MoreChildrenResolver, RequestBudget

__all__ = [
    "CommentTreeFetcher",
    "ExtractionContext",
    "MoreChildrenResolver",
    "RedditClient",
    "RequestBudget",
    "RequestLimiter",
]
