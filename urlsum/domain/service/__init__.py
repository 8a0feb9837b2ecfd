"""Domain services."""

from .comment_tree import (
    CommentBatch,
    CommentForest,
    process_comment_batch,
    walk_listing,
)
from .transcript import (
    COMMENTS_HEADER,
    EMPTY_LISTING_MESSAGE,
    format_comment,
    format_listing_post,
    format_post_metadata,
    render_listing,
    render_post,
)

__all__ = [
    "COMMENTS_HEADER",
    "CommentBatch",
    "CommentForest",
    "EMPTY_LISTING_MESSAGE",
    "format_comment",
    "format_listing_post",
    "format_post_metadata",
    "process_comment_batch",
    "render_listing",
    "render_post",
    "walk_listing",
]
