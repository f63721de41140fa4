"""Comment entity."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, Handle, PostId, UserId


class Comment(DomainModel):
    """Comment on a post.

    Comment threads are flat and ordered by creation time.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_handle: Handle
    content: str = Field(min_length=1, max_length=10000)
    created_at: datetime = Field(default_factory=datetime.now)
