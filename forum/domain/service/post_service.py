"""Post domain service."""

from typing import Optional

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import Post
from forum.domain.repository import CommentRepository, PostRepository
from forum.domain.value import PostId, SummaryKind

from .base import Service
from .summary_cache import SummaryCache


class PostService(Service):
    """Domain service for post content operations.

    Content edits bump the post's content version and invalidate any
    in-flight summary generation. Summaries are never regenerated here;
    they are produced lazily on the next read.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        summary_cache: SummaryCache,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            summary_cache: Summary cache domain service
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.summary_cache = summary_cache

    async def save_post(self, post: Post) -> Post:
        """Save a new post.

        Vote counters always start at zero regardless of the input.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            fresh = post.model_copy(
                update={"up_votes": 0, "down_votes": 0, "content_version": 1}
            )
            saved = await self.post_repository.save(fresh)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Optional[Post]:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
            return post

    async def update_content(self, post_id: PostId, title: str, content: str) -> Post:
        """Edit a post's title and content.

        Args:
            post_id: Post ID
            title: New title
            content: New content

        Returns:
            Updated post

        Raises:
            NotFoundError: If post not found
            ValidationError: If the edited title or content is invalid
        """
        with logfire.span("post_service.update_content", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                raise NotFoundError("Post", str(post_id))

            # Validated before the patch, which writes fields unchecked
            edited = Post.model_validate(
                {**post.model_dump(), "title": title.strip(), "content": content.strip()}
            )
            if edited.title == post.title and edited.content == post.content:
                logfire.info("Post content unchanged", post_id=str(post_id))
                return post

            saved = await self.post_repository.update_content(
                post_id, edited.title, edited.content
            )
            if not saved:
                raise NotFoundError("Post", str(post_id))
            self.summary_cache.invalidate(post_id, SummaryKind.POST)

            logfire.info(
                "Post content updated",
                post_id=str(post_id),
                content_version=saved.content_version,
            )
            return saved

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and its comments.

        Args:
            post_id: Post ID
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            await self.post_repository.delete(post_id)
            for comment in await self.comment_repository.find_by_post(post_id):
                await self.comment_repository.delete(comment.id)
            self.summary_cache.invalidate(post_id)
            logfire.info("Post deleted", post_id=str(post_id))
