"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from forum.adapter.error import AdapterError
from forum.application.usecase.vote import (
    RecountVotesRequest,
    RecountVotesResponse,
    RecountVotesUseCase,
    SubmitVoteRequest,
    SubmitVoteResponse,
    SubmitVoteUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.error import http_error
from forum.interface.api.identity import acting_user_id

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    value: int  # 1 or -1


@router.post("/posts/{post_id}/vote", response_model=SubmitVoteResponse)
async def vote_on_post(
    post_id: str,
    request: VoteAPIRequest,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> SubmitVoteResponse:
    """Vote on a post.

    Voting the same value twice removes the vote; voting the opposite
    value switches it.

    Args:
        post_id: Post UUID
        request: Vote value
        submit_vote_use_case: Submit vote use case from DI
        user_id: Acting user from the X-User-Id header

    Returns:
        Transition and counters after the vote

    Raises:
        HTTPException: 401 without identity, 400 on invalid input, 404 for
            an unknown post, 409 on counter conflict, 503 on store outage
    """
    try:
        vote_request = SubmitVoteRequest(
            post_id=post_id, user_id=user_id, value=request.value
        )
        return await submit_vote_use_case.execute(vote_request)
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.post("/posts/{post_id}/recount", response_model=RecountVotesResponse)
async def recount_post_votes(
    post_id: str,
    recount_votes_use_case: FromDishka[RecountVotesUseCase],
) -> RecountVotesResponse:
    """Repair a post's counters from its vote records.

    Args:
        post_id: Post UUID
        recount_votes_use_case: Recount votes use case from DI

    Returns:
        Repaired counters
    """
    try:
        return await recount_votes_use_case.execute(
            RecountVotesRequest(post_id=post_id)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
