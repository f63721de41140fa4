"""Submit vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from forum.domain.error import NotFoundError
from forum.domain.service import PostService, VoteLedger
from forum.domain.value import PostId, TransitionKind, UserId


class SubmitVoteRequest(BaseModel):
    """Submit vote request."""

    post_id: str  # UUID string
    user_id: str | None  # Acting user, None if anonymous
    value: int  # +1 or -1

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: int) -> int:
        """Only +1 and -1 are valid votes."""
        if v not in (1, -1):
            raise ValueError("Vote value must be 1 or -1")
        return v


class SubmitVoteResponse(BaseModel):
    """Submit vote response."""

    post_id: str
    kind: TransitionKind
    previous: Optional[int]
    current: Optional[int]  # None after an unvote
    up_votes: int
    down_votes: int
    score: int


class SubmitVoteUseCase:
    """Use case for voting on a post."""

    def __init__(self, vote_ledger: VoteLedger, post_service: PostService) -> None:
        """Initialize submit vote use case.

        Args:
            vote_ledger: Vote ledger domain service
            post_service: Post domain service
        """
        self.vote_ledger = vote_ledger
        self.post_service = post_service

    async def execute(self, request: SubmitVoteRequest) -> SubmitVoteResponse:
        """Execute vote flow.

        Args:
            request: Submit vote request

        Returns:
            Classified transition and the post's counters after it

        Raises:
            NotAuthenticatedError: If no user is acting
            NotFoundError: If the post does not exist
            CounterUnderflowError: If counters and ledger are out of sync
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        outcome = await self.vote_ledger.submit_vote(post_id, user_id, request.value)

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        return SubmitVoteResponse(
            post_id=str(post.id),
            kind=outcome.kind,
            previous=int(outcome.previous) if outcome.previous is not None else None,
            current=int(outcome.current) if outcome.current is not None else None,
            up_votes=post.up_votes,
            down_votes=post.down_votes,
            score=post.score,
        )
