"""Vote ledger entities.

A voter holds at most one live vote per post. The record is the single
source of truth for what the voter chose; its absence means "no vote".
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import PostId, TransitionKind, UserId, VoteValue


class VoteRecord(DomainModel):
    """Authoritative vote of one user on one post.

    Unique per (subject_id, voter_id).
    """

    subject_id: PostId
    voter_id: UserId
    value: VoteValue
    updated_at: datetime = Field(default_factory=datetime.now)


def classify_transition(
    previous: Optional[VoteValue], requested: VoteValue
) -> TransitionKind:
    """Classify a vote request against the voter's previous stance.

    Args:
        previous: Value currently recorded for the voter, None if no vote
        requested: Value the voter submitted

    Returns:
        CAST when there was no vote, UNVOTE when the same value was
        re-submitted, SWITCH when the opposite value was submitted
    """
    if previous is None:
        return TransitionKind.CAST
    if previous == requested:
        return TransitionKind.UNVOTE
    return TransitionKind.SWITCH


class VoteOutcome(DomainModel):
    """Result of classifying one vote request.

    Derived, never persisted. Counter deltas and notification policy are
    computed from the outcome alone.
    """

    kind: TransitionKind
    subject_id: PostId
    voter_id: UserId
    previous: Optional[VoteValue] = None
    requested: VoteValue

    @classmethod
    def classify(
        cls,
        subject_id: PostId,
        voter_id: UserId,
        previous: Optional[VoteValue],
        requested: VoteValue,
    ) -> "VoteOutcome":
        """Build the outcome for a request given the observed previous value."""
        return cls(
            kind=classify_transition(previous, requested),
            subject_id=subject_id,
            voter_id=voter_id,
            previous=previous,
            requested=requested,
        )

    @property
    def current(self) -> Optional[VoteValue]:
        """Voter's stance after the transition (None after an unvote)."""
        if self.kind == TransitionKind.UNVOTE:
            return None
        return self.requested
