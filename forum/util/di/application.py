"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    UpdateCommentUseCase,
)
from forum.application.usecase.notification import ListNotificationsUseCase
from forum.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    UpdatePostUseCase,
)
from forum.application.usecase.summary import (
    GetCommentSummaryUseCase,
    GetPostSummaryUseCase,
)
from forum.application.usecase.vote import RecountVotesUseCase, SubmitVoteUseCase
from forum.config import Settings
from forum.domain.service import (
    CommentService,
    CounterProjector,
    NotificationDispatcher,
    PostService,
    SummaryCache,
    SummaryGenerator,
    VoteLedger,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_vote_use_case(
        self, vote_ledger: VoteLedger, post_service: PostService
    ) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(vote_ledger=vote_ledger, post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_recount_votes_use_case(
        self, counter_projector: CounterProjector
    ) -> RecountVotesUseCase:
        """Provide recount votes use case."""
        return RecountVotesUseCase(counter_projector=counter_projector)

    # Summary use cases
    @provide(scope=Scope.REQUEST)
    def get_post_summary_use_case(
        self,
        post_service: PostService,
        summary_cache: SummaryCache,
        summary_generator: SummaryGenerator,
        settings: Settings,
    ) -> GetPostSummaryUseCase:
        """Provide get post summary use case."""
        return GetPostSummaryUseCase(
            post_service=post_service,
            summary_cache=summary_cache,
            summary_generator=summary_generator,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_comment_summary_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        summary_cache: SummaryCache,
        summary_generator: SummaryGenerator,
        settings: Settings,
    ) -> GetCommentSummaryUseCase:
        """Provide get comment summary use case."""
        return GetCommentSummaryUseCase(
            post_service=post_service,
            comment_service=comment_service,
            summary_cache=summary_cache,
            summary_generator=summary_generator,
            settings=settings,
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(self, post_service: PostService) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_dispatcher: NotificationDispatcher
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_dispatcher=notification_dispatcher)
