"""Identifiers for Reddit things.

Reddit ids are opaque base36 strings. A fullname prefixes the id with the
thing's kind tag (``t1_abc`` for a comment, ``t3_xyz`` for a post).
"""

from typing import NewType

CommentId = NewType("CommentId", str)
PostId = NewType("PostId", str)
