"""Infrastructure providers."""

# Import bases
from .reddit import RedditProvider

# Import implementations (needed for __subclasses__())
from .reddit import ProdRedditProvider  # noqa: F401

__all__ = [
    "ProdRedditProvider",
    "RedditProvider",
]
