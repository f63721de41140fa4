"""Comment domain service."""

from typing import Optional

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, SummaryKind

from .base import Service
from .summary_cache import SummaryCache


class CommentService(Service):
    """Domain service for comment operations.

    Every change to a thread invalidates in-flight generation of that
    post's comment summary.
    """

    def __init__(
        self, comment_repository: CommentRepository, summary_cache: SummaryCache
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            summary_cache: Summary cache domain service
        """
        self.comment_repository = comment_repository
        self.summary_cache = summary_cache

    async def save_comment(self, comment: Comment) -> Comment:
        """Save a new comment.

        Args:
            comment: Comment to save

        Returns:
            Saved comment
        """
        with logfire.span(
            "comment_service.save_comment",
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
        ):
            saved = await self.comment_repository.save(comment)
            self.summary_cache.invalidate(comment.post_id, SummaryKind.COMMENTS)
            logfire.info("Comment saved", comment_id=str(saved.id))
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Get a comment by ID, None if it does not exist."""
        return await self.comment_repository.find_by_id(comment_id)

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get a post's comments, oldest first."""
        return await self.comment_repository.find_by_post(post_id)

    async def update_content(self, comment_id: CommentId, content: str) -> Comment:
        """Edit a comment.

        Args:
            comment_id: Comment ID
            content: New content

        Returns:
            Updated comment

        Raises:
            NotFoundError: If comment not found
            ValidationError: If the edited content is empty or too long
        """
        with logfire.span(
            "comment_service.update_content", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            updated = Comment.model_validate(
                {**comment.model_dump(), "content": content.strip()}
            )
            saved = await self.comment_repository.save(updated)
            self.summary_cache.invalidate(comment.post_id, SummaryKind.COMMENTS)
            logfire.info("Comment updated", comment_id=str(comment_id))
            return saved

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment. No-op if it does not exist."""
        with logfire.span(
            "comment_service.delete_comment", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found for deletion", comment_id=str(comment_id))
                return

            await self.comment_repository.delete(comment_id)
            self.summary_cache.invalidate(comment.post_id, SummaryKind.COMMENTS)
            logfire.info("Comment deleted", comment_id=str(comment_id))
