"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments on a post, oldest first.

        Args:
            post_id: The post's ID

        Returns:
            Comments ordered by creation time ascending
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save or overwrite a comment."""
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        pass
