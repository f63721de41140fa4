"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CommentId,
    NotificationId,
    PostId,
    SummaryId,
    UserId,
)
from forum.domain.value.types import (
    Collection,
    Fingerprint,
    Handle,
    NotificationType,
    SummaryKind,
    TransitionKind,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "NotificationId",
    "SummaryId",
    # Types
    "Collection",
    "Fingerprint",
    "Handle",
    "NotificationType",
    "SummaryKind",
    "TransitionKind",
    "VoteValue",
]
