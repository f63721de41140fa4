"""Counter projector domain service.

Projects vote transitions onto the denormalized counters of a post.
Counters only ever change through commutative increments, never through
read-modify-write of an absolute value.
"""

import logfire

from forum.domain.error import CounterUnderflowError, NotFoundError
from forum.domain.model import Post, VoteOutcome
from forum.domain.repository import IncrementResult, PostRepository, VoteRepository
from forum.domain.value import PostId, TransitionKind, VoteValue

from .base import Service

UP_VOTES = "up_votes"
DOWN_VOTES = "down_votes"


def counter_field(value: VoteValue) -> str:
    """Name of the counter that tracks a vote stance."""
    return UP_VOTES if value is VoteValue.UP else DOWN_VOTES


def counter_delta(outcome: VoteOutcome) -> dict[str, int]:
    """Counter deltas for a transition.

    | Outcome       | up_votes | down_votes |
    |---------------|----------|------------|
    | Cast(+1)      | +1       | 0          |
    | Cast(-1)      | 0        | +1         |
    | Unvote(+1)    | -1       | 0          |
    | Unvote(-1)    | 0        | -1         |
    | Switch(+1→-1) | -1       | +1         |
    | Switch(-1→+1) | +1       | -1         |
    """
    requested = counter_field(outcome.requested)
    if outcome.kind == TransitionKind.CAST:
        return {requested: 1}
    if outcome.kind == TransitionKind.UNVOTE:
        return {requested: -1}
    return {requested: 1, counter_field(outcome.requested.opposite): -1}


class CounterProjector(Service):
    """Domain service applying vote transitions to post counters."""

    def __init__(
        self, post_repository: PostRepository, vote_repository: VoteRepository
    ) -> None:
        """Initialize counter projector.

        Args:
            post_repository: Post repository
            vote_repository: Vote repository (used by recount)
        """
        self.post_repository = post_repository
        self.vote_repository = vote_repository

    async def apply_transition(self, subject_id: PostId, outcome: VoteOutcome) -> None:
        """Apply the counter delta of a transition.

        The delta is derived from the classified outcome, never from the
        raw request. All fields change in one atomic increment.

        Args:
            subject_id: Post ID
            outcome: Classified vote transition

        Raises:
            CounterUnderflowError: If a counter would go negative
            NotFoundError: If the post no longer exists
        """
        increments = counter_delta(outcome)
        with logfire.span(
            "counter_projector.apply_transition",
            post_id=str(subject_id),
            kind=outcome.kind.value,
            increments=increments,
        ):
            result = await self.post_repository.increment_counters(
                subject_id, increments
            )

            if result == IncrementResult.UNDERFLOW_REJECTED:
                logfire.error(
                    "Counter underflow, ledger and counters out of sync",
                    post_id=str(subject_id),
                    voter_id=str(outcome.voter_id),
                    kind=outcome.kind.value,
                    increments=increments,
                )
                raise CounterUnderflowError(str(subject_id), increments)

            logfire.info(
                "Post counters updated",
                post_id=str(subject_id),
                kind=outcome.kind.value,
                increments=increments,
            )

    async def recount(self, subject_id: PostId) -> Post:
        """Re-derive a post's counters from the vote ledger.

        Repairs counters after a desynchronization by incrementing them by
        the difference between the ledger totals and the stored values.

        Args:
            subject_id: Post ID

        Returns:
            Post with repaired counters

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("counter_projector.recount", post_id=str(subject_id)):
            post = await self.post_repository.find_by_id(subject_id)
            if not post:
                raise NotFoundError("Post", str(subject_id))

            records = await self.vote_repository.find_by_subject(subject_id)
            expected = {
                UP_VOTES: sum(1 for r in records if r.value is VoteValue.UP),
                DOWN_VOTES: sum(1 for r in records if r.value is VoteValue.DOWN),
            }
            increments = {
                UP_VOTES: expected[UP_VOTES] - post.up_votes,
                DOWN_VOTES: expected[DOWN_VOTES] - post.down_votes,
            }
            increments = {k: v for k, v in increments.items() if v}

            if increments:
                result = await self.post_repository.increment_counters(
                    subject_id, increments
                )
                if result == IncrementResult.UNDERFLOW_REJECTED:
                    # Votes landed between the read and the patch
                    raise CounterUnderflowError(str(subject_id), increments)
                logfire.warn(
                    "Post counters repaired",
                    post_id=str(subject_id),
                    increments=increments,
                )

            repaired = await self.post_repository.find_by_id(subject_id)
            if not repaired:
                raise NotFoundError("Post", str(subject_id))
            return repaired
