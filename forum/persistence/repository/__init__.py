"""Document store repository implementations."""

from forum.persistence.repository.comment import DocumentCommentRepository
from forum.persistence.repository.notification import DocumentNotificationRepository
from forum.persistence.repository.post import DocumentPostRepository
from forum.persistence.repository.summary import DocumentSummaryRepository
from forum.persistence.repository.vote import DocumentVoteRepository

__all__ = [
    "DocumentPostRepository",
    "DocumentCommentRepository",
    "DocumentVoteRepository",
    "DocumentNotificationRepository",
    "DocumentSummaryRepository",
]
