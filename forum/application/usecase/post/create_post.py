"""Create post use case."""

from uuid import UUID, uuid4

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError
from forum.domain.model import Post
from forum.domain.service import PostService
from forum.domain.value import Handle, PostId, UserId

from .common import PostResponse


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str | None  # Acting user, None if anonymous
    author_handle: str
    title: str
    content: str = ""
    media_url: str | None = None


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        Raises:
            NotAuthenticatedError: If no user is acting
        """
        if not request.author_id:
            raise NotAuthenticatedError("create a post")

        post = Post(
            id=PostId(uuid4()),
            author_id=UserId(UUID(request.author_id)),
            author_handle=Handle(request.author_handle),
            title=request.title.strip(),
            content=request.content.strip(),
            media_url=request.media_url,
        )
        saved = await self.post_service.save_post(post)
        return PostResponse.from_post(saved)
