"""Shared summary response model."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from forum.domain.model import Summary
from forum.domain.value import SummaryKind


class SummaryStatus(str, Enum):
    """Availability of a summary for the current content."""

    READY = "ready"  # Matches the current content
    PENDING = "pending"  # Being generated in the background
    UNAVAILABLE = "unavailable"  # Generation failed or was abandoned
    EMPTY = "empty"  # Nothing to summarize


class SummaryResponse(BaseModel):
    """Summary lookup response."""

    post_id: str
    kind: SummaryKind
    status: SummaryStatus
    summary_text: Optional[str] = None
    source_count: Optional[int] = None
    generated_at: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        post_id: str,
        kind: SummaryKind,
        summary: Optional[Summary],
        missing: SummaryStatus,
    ) -> "SummaryResponse":
        """Build a response from a summary lookup.

        Args:
            post_id: Post ID
            kind: Summary kind
            summary: Current summary, None if there is none yet
            missing: Status reported when summary is None
        """
        if summary is None:
            return cls(post_id=post_id, kind=kind, status=missing)
        return cls(
            post_id=post_id,
            kind=kind,
            status=SummaryStatus.READY,
            summary_text=summary.summary_text,
            source_count=summary.source_count,
            generated_at=summary.generated_at,
        )
