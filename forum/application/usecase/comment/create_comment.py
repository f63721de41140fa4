"""Create comment use case."""

from uuid import UUID, uuid4

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError, NotFoundError
from forum.domain.model import Comment
from forum.domain.service import CommentService, PostService
from forum.domain.value import CommentId, Handle, PostId, UserId

from .common import CommentResponse


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    author_id: str | None  # Acting user, None if anonymous
    author_handle: str
    content: str


class CreateCommentUseCase:
    """Use case for commenting on a post."""

    def __init__(
        self, comment_service: CommentService, post_service: PostService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Raises:
            NotAuthenticatedError: If no user is acting
            NotFoundError: If the post does not exist
        """
        if not request.author_id:
            raise NotAuthenticatedError("comment")

        post_id = PostId(UUID(request.post_id))
        if not await self.post_service.get_post_by_id(post_id):
            raise NotFoundError("Post", request.post_id)

        comment = Comment(
            id=CommentId(uuid4()),
            post_id=post_id,
            author_id=UserId(UUID(request.author_id)),
            author_handle=Handle(request.author_handle),
            content=request.content.strip(),
        )
        saved = await self.comment_service.save_comment(comment)
        return CommentResponse.from_comment(saved)
