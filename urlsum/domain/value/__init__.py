"""Domain value objects for urlsum."""

from urlsum.domain.value.identifiers import CommentId, PostId
from urlsum.domain.value.types import ChunkStatus, ErrorKind, LinkId, ThingKind

__all__ = [
    # Identifiers
    "CommentId",
    "PostId",
    # Types
    "ChunkStatus",
    "ErrorKind",
    "LinkId",
    "ThingKind",
]
