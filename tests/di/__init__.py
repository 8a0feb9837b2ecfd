"""Mock providers for testing."""

from .reddit import MockRedditProvider, RedditStub
from .container import build_test_container

__all__ = [
    "MockRedditProvider",
    "RedditStub",
    "build_test_container",
]
