"""Post repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.store import IncrementResult
from forum.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save or overwrite a post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post.

        Args:
            post_id: The post ID to delete
        """
        pass

    @abstractmethod
    async def increment_counters(
        self, post_id: PostId, increments: Mapping[str, int]
    ) -> IncrementResult:
        """Atomically apply vote counter deltas.

        Args:
            post_id: Post ID
            increments: Counter field ("up_votes", "down_votes") to delta

        Returns:
            APPLIED, or UNDERFLOW_REJECTED if a counter would go negative

        Raises:
            NotFoundError: If the post does not exist
        """
        pass

    @abstractmethod
    async def update_content(
        self, post_id: PostId, title: str, content: str
    ) -> Optional[Post]:
        """Replace a post's title and content and bump its content version.

        Vote counters are left untouched.

        Args:
            post_id: Post ID
            title: New title
            content: New content

        Returns:
            The updated post

        Raises:
            NotFoundError: If the post does not exist
        """
        pass
