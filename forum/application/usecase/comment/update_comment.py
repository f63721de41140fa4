"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError, NotAuthorizedError, NotFoundError
from forum.domain.service import CommentService
from forum.domain.value import CommentId

from .common import CommentResponse


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str | None  # Acting user, must be the author
    content: str


class UpdateCommentUseCase:
    """Use case for editing a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotAuthenticatedError: If no user is acting
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        if not request.user_id:
            raise NotAuthenticatedError("edit a comment")

        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", request.comment_id)
        if str(comment.author_id) != request.user_id:
            raise NotAuthorizedError("Only the author can edit this comment")

        updated = await self.comment_service.update_content(
            comment_id, request.content
        )
        return CommentResponse.from_comment(updated)
