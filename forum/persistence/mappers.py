"""Mappers for converting between store documents and domain models.

Documents are the JSON form of the pydantic models (UUIDs and datetimes as
strings), so equality filters in the store compare plain strings.
"""

from typing import Any, Dict
from uuid import UUID

from forum.domain.model import Comment, Notification, Post, Summary, VoteRecord


def post_to_doc(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a store document."""
    return post.model_dump(mode="json")


def doc_to_post(doc: Dict[str, Any]) -> Post:
    """Convert a store document to Post domain model."""
    return Post.model_validate(doc)


def comment_to_doc(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to a store document."""
    return comment.model_dump(mode="json")


def doc_to_comment(doc: Dict[str, Any]) -> Comment:
    """Convert a store document to Comment domain model."""
    return Comment.model_validate(doc)


def vote_to_doc(record: VoteRecord) -> Dict[str, Any]:
    """Convert VoteRecord domain model to a store document."""
    return record.model_dump(mode="json")


def doc_to_vote(doc: Dict[str, Any]) -> VoteRecord:
    """Convert a store document to VoteRecord domain model."""
    return VoteRecord.model_validate(doc)


def vote_doc_id(subject_id: UUID, voter_id: UUID) -> str:
    """Deterministic document ID for the (post, voter) pair."""
    return f"{subject_id}:{voter_id}"


def notification_to_doc(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to a store document."""
    return notification.model_dump(mode="json")


def doc_to_notification(doc: Dict[str, Any]) -> Notification:
    """Convert a store document to Notification domain model."""
    return Notification.model_validate(doc)


def summary_to_doc(summary: Summary) -> Dict[str, Any]:
    """Convert Summary domain model to a store document."""
    return summary.model_dump(mode="json")


def doc_to_summary(doc: Dict[str, Any]) -> Summary:
    """Convert a store document to Summary domain model."""
    return Summary.model_validate(doc)
