"""Content routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from urlsum.application.usecase.content import (
    GetContentRequest,
    GetContentResponse,
    GetContentUseCase,
)
from urlsum.interface.error import ErrorResponse

router = APIRouter(tags=["content"], route_class=DishkaRoute)


@router.get(
    "/content",
    response_model=GetContentResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def get_content(
    get_content_use_case: FromDishka[GetContentUseCase],
    url: str = Query(min_length=1, description="Reddit post, subreddit or front page URL"),
    include_all_comments: bool = Query(
        default=True, description='Resolve collapsed "more" comment placeholders'
    ),
) -> GetContentResponse:
    """Extract a Reddit URL as a plain-text transcript.

    Domain errors are rendered by the application's error handler.

    Args:
        get_content_use_case: Get content use case from DI
        url: Reddit URL
        include_all_comments: Whether to resolve "more" placeholders

    Returns:
        Transcript with the extracted comment count
    """
    return await get_content_use_case.execute(
        GetContentRequest(url=url, include_all_comments=include_all_comments)
    )
