"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.notification import NotificationRepository
from forum.domain.repository.post import PostRepository
from forum.domain.repository.store import Document, DocumentStore, IncrementResult
from forum.domain.repository.summary import SummaryRepository
from forum.domain.repository.vote import VoteRepository

__all__ = [
    "Document",
    "DocumentStore",
    "IncrementResult",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
    "NotificationRepository",
    "SummaryRepository",
]
