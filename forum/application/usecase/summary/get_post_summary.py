"""Get post summary use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.config import Settings
from forum.domain.error import NotFoundError
from forum.domain.service import (
    PostService,
    SummaryCache,
    SummaryGenerator,
    post_fingerprint,
    post_source_text,
)
from forum.domain.value import PostId, SummaryKind

from .common import SummaryResponse, SummaryStatus


class GetPostSummaryRequest(BaseModel):
    """Get post summary request."""

    post_id: str  # UUID string
    wait: bool = False  # Block until generation finishes


class GetPostSummaryUseCase:
    """Use case for reading the summary of a post's current content."""

    def __init__(
        self,
        post_service: PostService,
        summary_cache: SummaryCache,
        summary_generator: SummaryGenerator,
        settings: Settings,
    ) -> None:
        """Initialize get post summary use case.

        Args:
            post_service: Post domain service
            summary_cache: Summary cache domain service
            summary_generator: Summarization provider
            settings: Application settings
        """
        self.post_service = post_service
        self.summary_cache = summary_cache
        self.summary_generator = summary_generator
        self.settings = settings

    async def execute(self, request: GetPostSummaryRequest) -> SummaryResponse:
        """Execute get post summary flow.

        A summary is only generated when none matches the post's current
        content. Without ``wait`` the generation runs in the background and
        the response reports it as pending.

        Args:
            request: Get post summary request

        Returns:
            Summary response

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        text = post_source_text(post)
        max_length = self.settings.summaries.post_max_length

        async def generate() -> str:
            return await self.summary_generator.generate(text, max_length)

        fingerprint = post_fingerprint(post)
        if request.wait:
            summary = await self.summary_cache.get_or_generate(
                post_id, SummaryKind.POST, fingerprint, generate
            )
            missing = SummaryStatus.UNAVAILABLE
        else:
            summary = await self.summary_cache.schedule(
                post_id, SummaryKind.POST, fingerprint, generate
            )
            missing = SummaryStatus.PENDING

        return SummaryResponse.build(request.post_id, SummaryKind.POST, summary, missing)
