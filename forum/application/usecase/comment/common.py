"""Shared comment response model."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.model import Comment
from forum.domain.value.types import Handle


class CommentResponse(BaseModel):
    """Comment representation returned by comment use cases."""

    comment_id: str
    post_id: str
    author_id: str
    author_handle: Handle
    content: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        """Build a response from a comment."""
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author_handle=comment.author_handle,
            content=comment.content,
            created_at=comment.created_at,
        )
