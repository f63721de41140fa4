"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from forum.domain.repository import (
    CommentRepository,
    DocumentStore,
    NotificationRepository,
    PostRepository,
    SummaryRepository,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    CounterProjector,
    LiveProjectionBus,
    NotificationDispatcher,
    PostService,
    SummaryCache,
    VoteLedger,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Stateless services are REQUEST-scoped. SummaryCache and LiveProjectionBus
    own background tasks that outlive a request, so they are APP-scoped and
    shut down with the container.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    async def get_summary_cache(
        self, summary_repository: SummaryRepository
    ) -> AsyncIterator[SummaryCache]:
        """Provide the process-wide summary cache."""
        cache = SummaryCache(summary_repository=summary_repository)
        yield cache
        await cache.close()

    @provide(scope=Scope.APP)
    async def get_live_projection_bus(
        self, store: DocumentStore
    ) -> AsyncIterator[LiveProjectionBus]:
        """Provide the process-wide live projection bus."""
        bus = LiveProjectionBus(store=store)
        yield bus
        await bus.close()

    @provide
    def get_counter_projector(
        self, post_repository: PostRepository, vote_repository: VoteRepository
    ) -> CounterProjector:
        """Provide counter projector domain service."""
        return CounterProjector(
            post_repository=post_repository, vote_repository=vote_repository
        )

    @provide
    def get_notification_dispatcher(
        self, notification_repository: NotificationRepository
    ) -> NotificationDispatcher:
        """Provide notification dispatcher domain service."""
        return NotificationDispatcher(notification_repository=notification_repository)

    @provide
    def get_vote_ledger(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        counter_projector: CounterProjector,
        notification_dispatcher: NotificationDispatcher,
    ) -> VoteLedger:
        """Provide vote ledger domain service."""
        return VoteLedger(
            vote_repository=vote_repository,
            post_repository=post_repository,
            counter_projector=counter_projector,
            notification_dispatcher=notification_dispatcher,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        summary_cache: SummaryCache,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            summary_cache=summary_cache,
        )

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, summary_cache: SummaryCache
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, summary_cache=summary_cache
        )
