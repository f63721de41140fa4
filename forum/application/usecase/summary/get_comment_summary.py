"""Get comment summary use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.config import Settings
from forum.domain.error import NotFoundError
from forum.domain.service import (
    CommentService,
    PostService,
    SummaryCache,
    SummaryGenerator,
    comments_fingerprint,
    comments_source_text,
)
from forum.domain.value import PostId, SummaryKind

from .common import SummaryResponse, SummaryStatus


class GetCommentSummaryRequest(BaseModel):
    """Get comment summary request."""

    post_id: str  # UUID string
    wait: bool = False  # Block until generation finishes


class GetCommentSummaryUseCase:
    """Use case for reading the summary of a post's comment thread."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        summary_cache: SummaryCache,
        summary_generator: SummaryGenerator,
        settings: Settings,
    ) -> None:
        """Initialize get comment summary use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            summary_cache: Summary cache domain service
            summary_generator: Summarization provider
            settings: Application settings
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.summary_cache = summary_cache
        self.summary_generator = summary_generator
        self.settings = settings

    async def execute(self, request: GetCommentSummaryRequest) -> SummaryResponse:
        """Execute get comment summary flow.

        Args:
            request: Get comment summary request

        Returns:
            Summary response, EMPTY if the post has no comments

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        comments = await self.comment_service.get_comments_for_post(post_id)
        if not comments:
            return SummaryResponse(
                post_id=request.post_id,
                kind=SummaryKind.COMMENTS,
                status=SummaryStatus.EMPTY,
                source_count=0,
            )

        text = comments_source_text(comments)
        max_length = self.settings.summaries.comments_max_length

        async def generate() -> str:
            return await self.summary_generator.generate(text, max_length)

        fingerprint = comments_fingerprint(comments)
        if request.wait:
            summary = await self.summary_cache.get_or_generate(
                post_id,
                SummaryKind.COMMENTS,
                fingerprint,
                generate,
                source_count=len(comments),
            )
            missing = SummaryStatus.UNAVAILABLE
        else:
            summary = await self.summary_cache.schedule(
                post_id,
                SummaryKind.COMMENTS,
                fingerprint,
                generate,
                source_count=len(comments),
            )
            missing = SummaryStatus.PENDING

        return SummaryResponse.build(
            request.post_id, SummaryKind.COMMENTS, summary, missing
        )
