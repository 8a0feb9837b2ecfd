"""Content use cases."""

from .get_content import GetContentRequest, GetContentResponse, GetContentUseCase

__all__ = ["GetContentRequest", "GetContentResponse", "GetContentUseCase"]
