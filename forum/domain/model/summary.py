"""Summary entity.

Summaries are expensive generated artifacts cached against the fingerprint
of the content they were generated from. Older records stay in storage for
audit but only the one matching the current fingerprint is authoritative.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Fingerprint, SummaryId, SummaryKind


class Summary(DomainModel):
    """Generated summary of a post or of a post's comment thread."""

    id: SummaryId
    subject_id: UUID
    kind: SummaryKind
    source_fingerprint: Fingerprint
    summary_text: str = Field(min_length=1)
    source_count: int = Field(default=1, ge=0)  # Comments summarized
    generated_at: datetime = Field(default_factory=datetime.now)
