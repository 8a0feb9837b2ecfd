"""Comment entities.

Comments exist only for the duration of one extraction. Depth is assigned by
the traversal: 0 for top-level comments under the post, parent depth + 1 for
every reply.
"""

from typing import Any

from pydantic import Field, field_validator

from urlsum.domain.model.common import DomainModel
from urlsum.domain.value import CommentId


class Comment(DomainModel):
    """A single ``t1`` comment.

    Threading is expressed through:
    - parent_id: Fullname of the parent (``t1_...`` or ``t3_...``), if known
    - depth: Nesting level
    """

    id: CommentId
    parent_id: str | None = None
    author: str | None = None
    body: str
    score: int | None = None
    depth: int = Field(default=0, ge=0)

    @classmethod
    def from_thing_data(
        cls, data: dict[str, Any], depth: int, fallback_id: str
    ) -> "Comment":
        """Build a comment from the ``data`` object of a ``t1`` thing.

        A comment without any text keeps an empty body.
        """
        body = data.get("body")
        if not isinstance(body, str):
            body = data.get("contentText")
        if not isinstance(body, str):
            body = ""

        comment_id = data.get("id")
        parent_id = data.get("parent_id")
        author = data.get("author")
        score = data.get("score")

        return cls(
            id=CommentId(comment_id if isinstance(comment_id, str) and comment_id else fallback_id),
            parent_id=parent_id if isinstance(parent_id, str) else None,
            author=author if isinstance(author, str) else None,
            body=body,
            score=score if isinstance(score, int) and not isinstance(score, bool) else None,
            depth=depth,
        )


class MoreItem(DomainModel):
    """Placeholder for comment ids Reddit did not inline.

    Produced by the batch processor and consumed by the resolver; never
    shown to users.
    """

    ids: tuple[str, ...] = Field(min_length=1)
    depth: int = Field(default=0, ge=0)

    @field_validator("ids")
    @classmethod
    def validate_ids(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject blank ids."""
        if any(not isinstance(i, str) or not i for i in v):
            raise ValueError("More item ids must be non-empty strings")
        return v
