"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from forum.domain.model.vote import VoteRecord
from forum.domain.value import PostId, UserId


class VoteRepository(ABC):
    """Repository for VoteRecord entity.

    Records are keyed by (subject_id, voter_id), so saving the same pair
    twice overwrites instead of duplicating.
    """

    @abstractmethod
    async def find(self, subject_id: PostId, voter_id: UserId) -> Optional[VoteRecord]:
        """Find a user's vote on a post.

        Args:
            subject_id: The post's ID
            voter_id: The voter's ID

        Returns:
            The vote record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_subject(self, subject_id: PostId) -> list[VoteRecord]:
        """Find all votes on a post.

        Args:
            subject_id: The post's ID

        Returns:
            List of vote records on the post
        """
        pass

    @abstractmethod
    async def find_by_voter_and_subjects(
        self, voter_id: UserId, subject_ids: Sequence[PostId]
    ) -> list[VoteRecord]:
        """Find a user's votes on multiple posts (batch query).

        Args:
            voter_id: The voter's ID
            subject_ids: Posts to check

        Returns:
            Vote records of the voter on the given posts
        """
        pass

    @abstractmethod
    async def save(self, record: VoteRecord) -> VoteRecord:
        """Create or overwrite a vote record (last writer wins)."""
        pass

    @abstractmethod
    async def delete(self, subject_id: PostId, voter_id: UserId) -> None:
        """Delete a user's vote on a post. No-op if absent."""
        pass
