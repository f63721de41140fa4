"""Update post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError, NotAuthorizedError, NotFoundError
from forum.domain.service import PostService
from forum.domain.value import PostId

from .common import PostResponse


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string
    user_id: str | None  # Acting user, must be the author
    title: str
    content: str


class UpdatePostUseCase:
    """Use case for editing a post's title and content."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> PostResponse:
        """Execute update post flow.

        Args:
            request: Update post request

        Returns:
            The post after the edit

        Raises:
            NotAuthenticatedError: If no user is acting
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        if not request.user_id:
            raise NotAuthenticatedError("edit a post")

        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)
        if str(post.author_id) != request.user_id:
            raise NotAuthorizedError("Only the author can edit this post")

        updated = await self.post_service.update_content(
            post_id, request.title, request.content
        )
        return PostResponse.from_post(updated)
