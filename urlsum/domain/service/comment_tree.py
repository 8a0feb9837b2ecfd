"""Comment tree construction.

Reddit returns a comment forest as nested ``Listing`` objects. Some branches
are cut short by ``more`` placeholders whose ids have to be fetched
separately. This module turns raw ``children`` arrays into ``Comment``
entities plus the ``MoreItem`` work they leave behind, and assembles
everything (including comments resolved later) into one ordered tree.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from urlsum.domain.model import Comment, MoreItem
from urlsum.domain.value import CommentId, ThingKind


@dataclass
class CommentBatch:
    """Comments and placeholders extracted from one ``children`` array.

    ``comments`` is in pre-order: each comment precedes its own replies.
    """

    comments: list[Comment] = field(default_factory=list)
    more_items: list[MoreItem] = field(default_factory=list)
    count: int = 0

    def extend(self, other: "CommentBatch") -> None:
        self.comments.extend(other.comments)
        self.more_items.extend(other.more_items)
        self.count += other.count


def process_comment_batch(
    children: Iterable[Any], depth: int, parent_id: str | None = None
) -> CommentBatch:
    """Extract comments and "more" placeholders from a children array.

    - ``t1`` things become comments at ``depth``; their inline replies are
      processed recursively at ``depth + 1``.
    - ``more`` things with at least one id become a ``MoreItem`` at ``depth``.
    - Anything else is ignored.

    Args:
        children: Raw ``children`` array (list of ``{kind, data}`` objects)
        depth: Nesting level of the things in this array
        parent_id: Fullname used for comments that do not name their parent

    Returns:
        Batch with comments in pre-order, placeholders and the t1 count
    """
    batch = CommentBatch()

    for child in children:
        if not isinstance(child, dict):
            continue
        kind = child.get("kind")
        data = child.get("data")
        if not isinstance(data, dict):
            continue

        if kind == ThingKind.COMMENT.value:
            comment = Comment.from_thing_data(
                data, depth=depth, fallback_id=f"anon_{uuid4().hex[:12]}"
            )
            if comment.parent_id is None and parent_id is not None:
                comment = comment.model_copy(update={"parent_id": parent_id})

            batch.comments.append(comment)
            batch.count += 1

            reply_children = _reply_children(data)
            if reply_children:
                batch.extend(
                    process_comment_batch(
                        reply_children,
                        depth=depth + 1,
                        parent_id=f"{ThingKind.COMMENT.value}_{comment.id}",
                    )
                )

        elif kind == ThingKind.MORE.value:
            ids = [i for i in data.get("children") or [] if isinstance(i, str) and i]
            if ids:
                batch.more_items.append(MoreItem(ids=tuple(ids), depth=depth))

    return batch


def walk_listing(children: Iterable[Any], depth: int = 0) -> CommentBatch:
    """Process a whole comment listing.

    Inline replies are followed by recursion in ``process_comment_batch``, so
    every placeholder of the listing is collected before any of them is
    resolved.
    """
    return process_comment_batch(children, depth=depth)


def _reply_children(data: dict[str, Any]) -> list[Any]:
    # Reddit sends "" instead of a Listing when there are no replies
    replies = data.get("replies")
    if not isinstance(replies, dict):
        return []
    replies_data = replies.get("data")
    if not isinstance(replies_data, dict):
        return []
    children = replies_data.get("children")
    return children if isinstance(children, list) else []


class CommentForest:
    """Ordered comment forest for one extraction.

    Comments are attached under their parent when the parent is already
    known, otherwise at the top level in arrival order. A comment id is only
    ever stored once.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        # parent comment id (None for top level) -> child ids in arrival order
        self._children: dict[CommentId | None, list[CommentId]] = defaultdict(list)

    def __len__(self) -> int:
        return len(self._comments)

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self._comments

    def add(self, comment: Comment) -> bool:
        """Attach a comment.

        When the parent is present the depth is recomputed from it.

        Returns:
            False if the comment was already in the forest
        """
        if comment.id in self._comments:
            return False

        parent_key = self._parent_key(comment.parent_id)
        if parent_key is not None:
            depth = self._comments[parent_key].depth + 1
            if comment.depth != depth:
                comment = comment.model_copy(update={"depth": depth})

        self._comments[comment.id] = comment
        self._children[parent_key].append(comment.id)
        return True

    def extend(self, comments: Iterable[Comment]) -> int:
        """Attach comments in order, returning how many were new."""
        return sum(1 for comment in comments if self.add(comment))

    def flatten(self) -> list[Comment]:
        """All comments in pre-order (a comment precedes its replies)."""
        ordered: list[Comment] = []
        stack = list(reversed(self._children.get(None, [])))
        while stack:
            comment_id = stack.pop()
            ordered.append(self._comments[comment_id])
            stack.extend(reversed(self._children.get(comment_id, [])))
        return ordered

    def _parent_key(self, parent_id: str | None) -> CommentId | None:
        if not parent_id:
            return None
        prefix = f"{ThingKind.COMMENT.value}_"
        if not parent_id.startswith(prefix):
            return None
        key = CommentId(parent_id[len(prefix) :])
        return key if key in self._comments else None
