"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError, NotAuthorizedError, NotFoundError
from forum.domain.service import PostService
from forum.domain.value import PostId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str | None  # Acting user, must be the author


class DeletePostUseCase:
    """Use case for deleting a post and its comments."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> None:
        """Execute delete post flow.

        Raises:
            NotAuthenticatedError: If no user is acting
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        if not request.user_id:
            raise NotAuthenticatedError("delete a post")

        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)
        if str(post.author_id) != request.user_id:
            raise NotAuthorizedError("Only the author can delete this post")

        await self.post_service.delete_post(post_id)
