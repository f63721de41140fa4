"""Document store implementation of Vote repository."""

from typing import Optional, Sequence

from forum.domain.model import VoteRecord
from forum.domain.repository import DocumentStore, VoteRepository
from forum.domain.value import Collection, PostId, UserId
from forum.persistence.mappers import doc_to_vote, vote_doc_id, vote_to_doc


class DocumentVoteRepository(VoteRepository):
    """VoteRepository backed by the votes collection.

    The document ID is derived from (subject_id, voter_id), which is what
    enforces one live vote per voter per post.
    """

    def __init__(self, store: DocumentStore) -> None:
        """Initialize repository with a document store.

        Args:
            store: Document store
        """
        self.store = store

    async def find(self, subject_id: PostId, voter_id: UserId) -> Optional[VoteRecord]:
        """Find a user's vote on a post."""
        doc = await self.store.get(
            Collection.VOTES.value, vote_doc_id(subject_id, voter_id)
        )
        return doc_to_vote(doc) if doc else None

    async def find_by_subject(self, subject_id: PostId) -> list[VoteRecord]:
        """Find all votes on a post."""
        docs = await self.store.query_where_equals(
            Collection.VOTES.value, "subject_id", str(subject_id)
        )
        return [doc_to_vote(doc) for doc in docs]

    async def find_by_voter_and_subjects(
        self, voter_id: UserId, subject_ids: Sequence[PostId]
    ) -> list[VoteRecord]:
        """Find a user's votes on multiple posts (batch query)."""
        if not subject_ids:
            return []

        wanted = {str(sid) for sid in subject_ids}
        docs = await self.store.query_where_equals(
            Collection.VOTES.value, "voter_id", str(voter_id)
        )
        return [doc_to_vote(doc) for doc in docs if doc["subject_id"] in wanted]

    async def save(self, record: VoteRecord) -> VoteRecord:
        """Create or overwrite a vote record."""
        await self.store.put(
            Collection.VOTES.value,
            vote_doc_id(record.subject_id, record.voter_id),
            vote_to_doc(record),
        )
        return record

    async def delete(self, subject_id: PostId, voter_id: UserId) -> None:
        """Delete a user's vote on a post."""
        await self.store.delete(
            Collection.VOTES.value, vote_doc_id(subject_id, voter_id)
        )
