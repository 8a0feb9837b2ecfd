"""Post entities.

A post is read once at the start of an extraction and never changes
afterwards. Reddit's ``num_comments`` is only a hint: it often differs from
the number of comments that can actually be recovered.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from urlsum.domain.model.common import DomainModel
from urlsum.domain.value import LinkId, PostId


class Post(DomainModel):
    """A post viewed together with its comments."""

    id: PostId
    title: str | None = None
    author: str | None = None
    subreddit: str | None = None
    created_utc: datetime | None = None
    score: int | None = None
    num_comments: int | None = None
    over_18: bool = False
    selftext: str = ""
    removed_by_category: str | None = None

    @property
    def link_id(self) -> LinkId:
        """Fullname used by morechildren requests."""
        return LinkId.for_post(self.id)

    @property
    def is_removed(self) -> bool:
        return bool(self.removed_by_category)

    @classmethod
    def from_thing_data(cls, data: dict[str, Any]) -> "Post":
        """Build a post from the ``data`` object of a ``t3`` thing.

        Raises:
            ValueError: If the post id is missing or not a base36 id
        """
        post_id = data.get("id")
        if not isinstance(post_id, str) or not post_id:
            raise ValueError("Post data has no id")
        # morechildren needs a valid t3_ fullname for this post
        LinkId.for_post(post_id)

        created = data.get("created_utc")
        removed = data.get("removed_by_category")

        return cls(
            id=PostId(post_id),
            title=_str_or_none(data.get("title")),
            author=_str_or_none(data.get("author")),
            subreddit=_str_or_none(data.get("subreddit")),
            created_utc=(
                datetime.fromtimestamp(created, tz=timezone.utc)
                if isinstance(created, (int, float)) and not isinstance(created, bool)
                else None
            ),
            score=_int_or_none(data.get("score")),
            num_comments=_int_or_none(data.get("num_comments")),
            over_18=data.get("over_18") is True,
            selftext=data.get("selftext") or "",
            removed_by_category=removed if isinstance(removed, str) else None,
        )


class ListingPost(DomainModel):
    """One entry of a subreddit (or front page) listing."""

    title: str | None = None
    author: str | None = None
    score: int | None = None
    num_comments: int | None = None
    link: str | None = Field(default=None, description="Permalink or external url")

    @classmethod
    def from_thing_data(cls, data: dict[str, Any], base_url: str) -> "ListingPost":
        permalink = data.get("permalink")
        if isinstance(permalink, str) and permalink:
            link = permalink if permalink.startswith("http") else f"{base_url}{permalink}"
        else:
            link = _str_or_none(data.get("url"))

        return cls(
            title=_str_or_none(data.get("title")),
            author=_str_or_none(data.get("author")),
            score=_int_or_none(data.get("score")),
            num_comments=_int_or_none(data.get("num_comments")),
            link=link,
        )


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or_none(value: Any) -> int | None:
    # bool is an int subclass; Reddit never sends booleans for counters
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
