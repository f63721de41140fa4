"""Recount votes use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import CounterProjector
from forum.domain.value import PostId


class RecountVotesRequest(BaseModel):
    """Recount votes request."""

    post_id: str  # UUID string


class RecountVotesResponse(BaseModel):
    """Recount votes response."""

    post_id: str
    up_votes: int
    down_votes: int


class RecountVotesUseCase:
    """Use case for repairing a post's counters from its vote records."""

    def __init__(self, counter_projector: CounterProjector) -> None:
        """Initialize recount votes use case.

        Args:
            counter_projector: Counter projector domain service
        """
        self.counter_projector = counter_projector

    async def execute(self, request: RecountVotesRequest) -> RecountVotesResponse:
        """Execute recount flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.counter_projector.recount(PostId(UUID(request.post_id)))
        return RecountVotesResponse(
            post_id=str(post.id), up_votes=post.up_votes, down_votes=post.down_votes
        )
