"""Shared post response model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from forum.domain.model import Post
from forum.domain.value.types import Handle


class PostResponse(BaseModel):
    """Post representation returned by post use cases."""

    post_id: str
    author_id: str
    author_handle: Handle
    title: str
    content: str
    media_url: Optional[str]
    up_votes: int
    down_votes: int
    score: int
    content_version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        """Build a response from a post."""
        return cls(
            post_id=str(post.id),
            author_id=str(post.author_id),
            author_handle=post.author_handle,
            title=post.title,
            content=post.content,
            media_url=post.media_url,
            up_votes=post.up_votes,
            down_votes=post.down_votes,
            score=post.score,
            content_version=post.content_version,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
