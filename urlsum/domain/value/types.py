"""Domain value objects for Reddit extraction."""

import re
from enum import Enum

from pydantic import field_validator

from urlsum.domain.value.common import RootValueObject
from urlsum.domain.value.identifiers import PostId


class ThingKind(str, Enum):
    """Reddit type tag carried by every JSON node."""

    COMMENT = "t1"
    POST = "t3"
    MORE = "more"
    LISTING = "Listing"


class ErrorKind(str, Enum):
    """Kinds of failure surfaced to callers of the fetcher."""

    INVALID_URL = "invalid_url"
    NETWORK = "network_error"
    HTTP = "http_error"
    RATE_LIMITED = "rate_limited"
    FORBIDDEN = "forbidden"
    POST_NOT_FOUND = "post_not_found"
    SUBREDDIT_NOT_FOUND = "subreddit_not_found"
    PARSE = "parse_error"
    COMMENTS_UNAVAILABLE = "comments_unavailable"
    PRIVATE_SUBREDDIT = "private_subreddit"
    USER_BANNED = "user_banned"
    CONTENT_DELETED = "content_deleted"
    API_QUOTA_EXCEEDED = "api_quota_exceeded"


class ChunkStatus(str, Enum):
    """Outcome of a single morechildren chunk."""

    RESOLVED = "resolved"
    SKIPPED = "skipped"
    FAILED = "failed"
    PARSE_ERROR = "parse_error"
    TRUNCATED = "truncated"


class LinkId(RootValueObject[str]):
    """Fullname of a post (``t3_<base36 id>``).

    Required by every morechildren request for that post.
    """

    @field_validator("root")
    @classmethod
    def validate_link_id(cls, v: str) -> str:
        """Validate the t3_ prefix and base36 body."""
        if not re.match(r"^t3_[0-9a-z]+$", v):
            raise ValueError("Link id must look like 't3_<base36 id>'")
        return v

    @classmethod
    def for_post(cls, post_id: PostId | str) -> "LinkId":
        """Build the link id for a post id."""
        return cls(f"{ThingKind.POST.value}_{post_id}")
