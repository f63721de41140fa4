"""Summary routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Response, status

from forum.adapter.error import AdapterError
from forum.application.usecase.summary import (
    GetCommentSummaryRequest,
    GetCommentSummaryUseCase,
    GetPostSummaryRequest,
    GetPostSummaryUseCase,
    SummaryResponse,
    SummaryStatus,
)
from forum.domain.error import DomainError
from forum.interface.api.error import http_error

router = APIRouter(prefix="/posts", tags=["summaries"], route_class=DishkaRoute)


def _set_status(response: Response, summary: SummaryResponse) -> SummaryResponse:
    if summary.status == SummaryStatus.PENDING:
        response.status_code = status.HTTP_202_ACCEPTED
    return summary


@router.get("/{post_id}/summary", response_model=SummaryResponse)
async def get_post_summary(
    post_id: str,
    response: Response,
    get_post_summary_use_case: FromDishka[GetPostSummaryUseCase],
    wait: bool = Query(default=False),
) -> SummaryResponse:
    """Get the summary of a post's current content.

    Returns 202 with status "pending" while the summary is generated in the
    background; poll again or pass wait=true to block.

    Args:
        post_id: Post UUID
        response: Outgoing response (status code)
        get_post_summary_use_case: Get post summary use case from DI
        wait: Block until generation finishes
    """
    try:
        summary = await get_post_summary_use_case.execute(
            GetPostSummaryRequest(post_id=post_id, wait=wait)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return _set_status(response, summary)


@router.get("/{post_id}/comments/summary", response_model=SummaryResponse)
async def get_comment_summary(
    post_id: str,
    response: Response,
    get_comment_summary_use_case: FromDishka[GetCommentSummaryUseCase],
    wait: bool = Query(default=False),
) -> SummaryResponse:
    """Get the summary of a post's comment thread.

    Args:
        post_id: Post UUID
        response: Outgoing response (status code)
        get_comment_summary_use_case: Get comment summary use case from DI
        wait: Block until generation finishes
    """
    try:
        summary = await get_comment_summary_use_case.execute(
            GetCommentSummaryRequest(post_id=post_id, wait=wait)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return _set_status(response, summary)
