"""Document store implementation of Summary repository."""

from typing import Optional
from uuid import UUID

from forum.domain.model import Summary
from forum.domain.repository import DocumentStore, SummaryRepository
from forum.domain.value import Collection, Fingerprint, SummaryKind
from forum.persistence.mappers import doc_to_summary, summary_to_doc


class DocumentSummaryRepository(SummaryRepository):
    """SummaryRepository backed by the summaries collection."""

    def __init__(self, store: DocumentStore) -> None:
        """Initialize repository with a document store.

        Args:
            store: Document store
        """
        self.store = store

    async def save(self, summary: Summary) -> Summary:
        """Store a summary record."""
        await self.store.put(
            Collection.SUMMARIES.value, str(summary.id), summary_to_doc(summary)
        )
        return summary

    async def find_by_fingerprint(
        self, subject_id: UUID, kind: SummaryKind, fingerprint: Fingerprint
    ) -> Optional[Summary]:
        """Find the newest summary generated from the given content."""
        matching = [
            s
            for s in await self.find_by_subject(subject_id, kind)
            if s.source_fingerprint == fingerprint
        ]
        return matching[0] if matching else None

    async def find_by_subject(
        self, subject_id: UUID, kind: SummaryKind
    ) -> list[Summary]:
        """Find every summary generated for a subject, newest first."""
        docs = await self.store.query_where_equals(
            Collection.SUMMARIES.value, "subject_id", str(subject_id)
        )
        summaries = [doc_to_summary(doc) for doc in docs if doc["kind"] == kind.value]
        summaries.sort(key=lambda s: s.generated_at, reverse=True)
        return summaries
