"""Summary repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from forum.domain.model.summary import Summary
from forum.domain.value import Fingerprint, SummaryKind


class SummaryRepository(ABC):
    """Repository for generated summaries.

    Every generation is stored as a new record. Lookups for the current
    summary go through the fingerprint, so stale records are never
    mistaken for current ones.
    """

    @abstractmethod
    async def save(self, summary: Summary) -> Summary:
        """Store a summary record."""
        pass

    @abstractmethod
    async def find_by_fingerprint(
        self, subject_id: UUID, kind: SummaryKind, fingerprint: Fingerprint
    ) -> Optional[Summary]:
        """Find the most recent summary generated from the given content.

        Args:
            subject_id: Summarized post ID
            kind: Summary kind
            fingerprint: Fingerprint of the summarized content

        Returns:
            The newest matching summary, None if there is none
        """
        pass

    @abstractmethod
    async def find_by_subject(
        self, subject_id: UUID, kind: SummaryKind
    ) -> list[Summary]:
        """Find every summary ever generated for a subject, newest first."""
        pass
