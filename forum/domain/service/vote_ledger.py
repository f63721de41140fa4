"""Vote ledger domain service.

The ledger owns the per-(post, voter) vote record and drives the rest of
the vote path: counters follow the ledger, notifications follow counters.

The store has no multi-document transactions, so the read-classify-write
sequence is not atomic. Two concurrent submissions from the same voter can
interleave; the record then ends up last-writer-wins and the counters are
projected from what each submission observed. Counters are eventually
consistent with the ledger, and CounterProjector.recount repairs any drift.
"""

from typing import Optional, Sequence

import logfire

from forum.domain.error import NotAuthenticatedError, NotFoundError
from forum.domain.model import VoteOutcome, VoteRecord
from forum.domain.repository import PostRepository, VoteRepository
from forum.domain.value import PostId, TransitionKind, UserId, VoteValue

from .base import Service
from .counter_projector import CounterProjector
from .notification_dispatcher import NotificationDispatcher


class VoteLedger(Service):
    """Domain service for vote submission."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        counter_projector: CounterProjector,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize vote ledger.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            counter_projector: Counter projector domain service
            notification_dispatcher: Notification dispatcher domain service
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.counter_projector = counter_projector
        self.notification_dispatcher = notification_dispatcher

    async def submit_vote(
        self, subject_id: PostId, voter_id: Optional[UserId], value: VoteValue | int
    ) -> VoteOutcome:
        """Submit a vote, toggling, switching or casting as appropriate.

        The ledger record is written before the counters move, so counters
        never reflect a transition whose record did not land. If the counter
        update fails, the previous record is restored before re-raising.

        Args:
            subject_id: Post ID
            voter_id: Voting user's ID
            value: +1 or -1

        Returns:
            Classified outcome of the submission

        Raises:
            NotAuthenticatedError: If voter_id is missing
            NotFoundError: If the post does not exist
            CounterUnderflowError: If the counters are out of sync
            StoreUnavailableError: If the store is unreachable
        """
        if voter_id is None:
            raise NotAuthenticatedError("vote")

        requested = VoteValue(value)
        with logfire.span(
            "vote_ledger.submit_vote",
            post_id=str(subject_id),
            voter_id=str(voter_id),
            value=int(requested),
        ):
            post = await self.post_repository.find_by_id(subject_id)
            if not post:
                logfire.warn("Vote on non-existent post", post_id=str(subject_id))
                raise NotFoundError("Post", str(subject_id))

            existing = await self.vote_repository.find(subject_id, voter_id)
            outcome = VoteOutcome.classify(
                subject_id=subject_id,
                voter_id=voter_id,
                previous=existing.value if existing else None,
                requested=requested,
            )

            await self._record(outcome)

            try:
                await self.counter_projector.apply_transition(subject_id, outcome)
            except Exception:
                await self._restore(existing, subject_id, voter_id)
                raise

            await self.notification_dispatcher.maybe_notify(
                outcome,
                owner_id=post.author_id,
                voter_id=voter_id,
                subject_id=subject_id,
            )

            logfire.info(
                "Vote submitted",
                post_id=str(subject_id),
                voter_id=str(voter_id),
                kind=outcome.kind.value,
                previous=(
                    int(outcome.previous) if outcome.previous is not None else None
                ),
                requested=int(requested),
            )
            return outcome

    async def get_vote(
        self, subject_id: PostId, voter_id: UserId
    ) -> Optional[VoteValue]:
        """Get a user's current vote on a post.

        Args:
            subject_id: Post ID
            voter_id: User ID

        Returns:
            The recorded value, None if the user has not voted
        """
        record = await self.vote_repository.find(subject_id, voter_id)
        return record.value if record else None

    async def get_votes_for_subjects(
        self, voter_id: UserId, subject_ids: Sequence[PostId]
    ) -> dict[PostId, Optional[VoteValue]]:
        """Look up a user's votes on several posts.

        Args:
            voter_id: User ID
            subject_ids: Posts to check

        Returns:
            Dictionary mapping post ID to the recorded value (None if no vote)
        """
        if not subject_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        records = await self.vote_repository.find_by_voter_and_subjects(
            voter_id, subject_ids
        )
        by_subject = {str(r.subject_id): r.value for r in records}
        return {sid: by_subject.get(str(sid)) for sid in subject_ids}

    async def _record(self, outcome: VoteOutcome) -> None:
        """Write the ledger side of a transition."""
        if outcome.kind == TransitionKind.UNVOTE:
            await self.vote_repository.delete(outcome.subject_id, outcome.voter_id)
        else:
            await self.vote_repository.save(
                VoteRecord(
                    subject_id=outcome.subject_id,
                    voter_id=outcome.voter_id,
                    value=outcome.requested,
                )
            )

    async def _restore(
        self,
        existing: Optional[VoteRecord],
        subject_id: PostId,
        voter_id: UserId,
    ) -> None:
        """Put the ledger back the way it was before a failed submission."""
        try:
            if existing:
                await self.vote_repository.save(existing)
            else:
                await self.vote_repository.delete(subject_id, voter_id)
            logfire.warn(
                "Vote record restored after counter failure",
                post_id=str(subject_id),
                voter_id=str(voter_id),
            )
        except Exception as e:
            logfire.error(
                "Vote record restore failed, recount required",
                post_id=str(subject_id),
                voter_id=str(voter_id),
                error=str(e),
            )
