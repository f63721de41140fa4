"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forum.config import Settings
from forum.domain.repository import (
    CommentRepository,
    DocumentStore,
    NotificationRepository,
    PostRepository,
    SummaryRepository,
    VoteRepository,
)
from forum.persistence.database import create_engine, create_session_factory
from forum.persistence.repository import (
    DocumentCommentRepository,
    DocumentNotificationRepository,
    DocumentPostRepository,
    DocumentSummaryRepository,
    DocumentVoteRepository,
)
from forum.persistence.store import PostgresDocumentStore
from forum.util.di.base import ProviderBase
from forum.util.error import ConfigurationError
from forum.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base.

    Implementations provide the DocumentStore; repositories on top of it
    come from RepositoryProvider.
    """

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine."""
        if not settings.database.url:
            raise ConfigurationError("DATABASE__URL must be configured")

        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_document_store(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> DocumentStore:
        """Provide the PostgreSQL document store."""
        return PostgresDocumentStore(
            session_factory, poll_interval=settings.database.feed_poll_interval
        )


class RepositoryProvider(ProviderBase):
    """Document-backed repositories over whichever store is configured.

    Repositories hold no state beyond the store, so they share its scope.
    """

    scope = Scope.APP

    @provide
    def get_post_repository(self, store: DocumentStore) -> PostRepository:
        """Provide Post repository."""
        return DocumentPostRepository(store)

    @provide
    def get_comment_repository(self, store: DocumentStore) -> CommentRepository:
        """Provide Comment repository."""
        return DocumentCommentRepository(store)

    @provide
    def get_vote_repository(self, store: DocumentStore) -> VoteRepository:
        """Provide Vote repository."""
        return DocumentVoteRepository(store)

    @provide
    def get_notification_repository(
        self, store: DocumentStore
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return DocumentNotificationRepository(store)

    @provide
    def get_summary_repository(self, store: DocumentStore) -> SummaryRepository:
        """Provide Summary repository."""
        return DocumentSummaryRepository(store)
