"""Domain model entities for urlsum."""

from urlsum.domain.model.comment import Comment, MoreItem
from urlsum.domain.model.extraction import (
    ChunkOutcome,
    ExtractionResult,
    ResolutionReport,
)
from urlsum.domain.model.post import ListingPost, Post

__all__ = [
    "ChunkOutcome",
    "Comment",
    "ExtractionResult",
    "ListingPost",
    "MoreItem",
    "Post",
    "ResolutionReport",
]
