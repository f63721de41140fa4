"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError, NotAuthorizedError, NotFoundError
from forum.domain.service import CommentService
from forum.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str | None  # Acting user, must be the author


class DeleteCommentUseCase:
    """Use case for deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Execute delete comment flow.

        Raises:
            NotAuthenticatedError: If no user is acting
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        if not request.user_id:
            raise NotAuthenticatedError("delete a comment")

        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", request.comment_id)
        if str(comment.author_id) != request.user_id:
            raise NotAuthorizedError("Only the author can delete this comment")

        await self.comment_service.delete_comment(comment_id)
