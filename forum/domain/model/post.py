"""Post aggregate root.

Posts are the subjects members vote on. The vote counters are denormalized
onto the post and only ever change through commutative increments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Handle, PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    Business rules:
    - up_votes and down_votes are never negative
    - content_version grows by one on every content edit
    """

    id: PostId
    author_id: UserId
    author_handle: Handle
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=10000)
    media_url: Optional[str] = None
    up_votes: int = Field(default=0, ge=0)
    down_votes: int = Field(default=0, ge=0)
    content_version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def score(self) -> int:
        """Net score (upvotes minus downvotes)."""
        return self.up_votes - self.down_votes
