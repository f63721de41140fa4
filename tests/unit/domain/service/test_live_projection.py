"""Unit tests for the live projection bus."""

import asyncio
from datetime import datetime
from uuid import uuid4

import pytest

from forum.domain.model import Summary
from forum.domain.repository import (
    CommentRepository,
    DocumentStore,
    PostRepository,
    SummaryRepository,
)
from forum.domain.service import FeedQuery, LiveProjectionBus
from forum.domain.value import Collection, Fingerprint, SummaryId, SummaryKind
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _next(queue: asyncio.Queue) -> list:
    return await asyncio.wait_for(queue.get(), timeout=1.0)


def _summary(subject_id, kind: SummaryKind, generated_at: datetime) -> Summary:
    return Summary(
        id=SummaryId(uuid4()),
        subject_id=subject_id,
        kind=kind,
        source_fingerprint=Fingerprint.of(f"{subject_id}:{generated_at}"),
        summary_text="A summary.",
        generated_at=generated_at,
    )


async def _assert_quiet(queue: asyncio.Queue) -> None:
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(queue.get(), timeout=0.05)


class TestSubscribe:
    """Tests for delivery and ordering."""

    @pytest.mark.asyncio
    async def test_initial_snapshot_newest_first(self, unit_env):
        """The current state is delivered immediately, newest post first."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        older = await posts.save(make_post(created_at=datetime(2025, 1, 1)))
        newer = await posts.save(make_post(created_at=datetime(2025, 1, 2)))
        queue: asyncio.Queue = asyncio.Queue()

        # Act
        async with bus.subscribe(FeedQuery.all_posts(), queue.put_nowait):
            items = await _next(queue)

        # Assert
        assert [p.id for p in items] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_equal_timestamps_order_by_id(self, unit_env):
        """Entities with the same timestamp keep a stable id order."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        moment = datetime(2025, 3, 1, 9, 30)
        saved = [await posts.save(make_post(created_at=moment)) for _ in range(4)]
        queue: asyncio.Queue = asyncio.Queue()

        # Act
        async with bus.subscribe(FeedQuery.all_posts(), queue.put_nowait):
            items = await _next(queue)

        # Assert
        assert [p.id for p in items] == sorted((p.id for p in saved), key=str)

    @pytest.mark.asyncio
    async def test_changes_are_delivered(self, unit_env):
        """New and deleted comments produce fresh materializations."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        comments = await unit_env.get(CommentRepository)
        post = await posts.save(make_post())
        first = await comments.save(make_comment(post.id, "first", offset_seconds=0))
        queue: asyncio.Queue = asyncio.Queue()

        async with bus.subscribe(FeedQuery.comments_of(post.id), queue.put_nowait):
            assert [c.id for c in await _next(queue)] == [first.id]

            # Act
            second = await comments.save(
                make_comment(post.id, "second", offset_seconds=10)
            )
            after_add = await _next(queue)
            await comments.delete(first.id)
            after_delete = await _next(queue)

        # Assert
        assert [c.id for c in after_add] == [first.id, second.id]
        assert [c.id for c in after_delete] == [second.id]

    @pytest.mark.asyncio
    async def test_comments_of_filters_by_post(self, unit_env):
        """A thread feed ignores comments on other posts."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        comments = await unit_env.get(CommentRepository)
        followed = await posts.save(make_post())
        other = await posts.save(make_post())
        queue: asyncio.Queue = asyncio.Queue()

        async with bus.subscribe(
            FeedQuery.comments_of(followed.id), queue.put_nowait
        ) as subscription:
            assert await _next(queue) == []

            # Act
            await comments.save(make_comment(other.id, "elsewhere"))

            # Assert
            await _assert_quiet(queue)
            assert subscription.deliveries == 1

    @pytest.mark.asyncio
    async def test_identical_materialization_delivered_once(self, unit_env):
        """A write that leaves the entity set unchanged is not redelivered."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        store = await unit_env.get(DocumentStore)
        post = await posts.save(make_post())
        queue: asyncio.Queue = asyncio.Queue()

        async with bus.subscribe(FeedQuery.all_posts(), queue.put_nowait):
            await _next(queue)

            # Act
            collection = Collection.POSTS.value
            await store.put(
                collection, str(post.id), await store.get(collection, str(post.id))
            )

            # Assert
            await _assert_quiet(queue)

    @pytest.mark.asyncio
    async def test_async_callback(self, unit_env):
        """Coroutine callbacks are awaited."""
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        await posts.save(make_post())
        received = asyncio.Event()

        async def on_change(items):
            await asyncio.sleep(0)
            received.set()

        async with bus.subscribe(FeedQuery.all_posts(), on_change):
            await asyncio.wait_for(received.wait(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_failing_callback_keeps_feed_alive(self, unit_env):
        """An exception in the callback is logged and delivery continues."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        queue: asyncio.Queue = asyncio.Queue()
        calls = 0

        def on_change(items):
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("consumer bug")
            queue.put_nowait(items)

        async with bus.subscribe(FeedQuery.all_posts(), on_change) as subscription:
            await asyncio.sleep(0.01)

            # Act
            post = await posts.save(make_post())
            items = await _next(queue)

            # Assert
            assert [p.id for p in items] == [post.id]
            assert subscription.active

    @pytest.mark.asyncio
    async def test_invalid_document_is_skipped(self, unit_env):
        """A record that fails validation is left out and the feed keeps running."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        store = await unit_env.get(DocumentStore)
        valid = await posts.save(make_post(created_at=datetime(2025, 1, 1)))
        broken = make_post(created_at=datetime(2025, 1, 2)).model_dump(mode="json")
        broken["title"] = ""
        queue: asyncio.Queue = asyncio.Queue()

        async with bus.subscribe(FeedQuery.all_posts(), queue.put_nowait) as subscription:
            await _next(queue)

            # Act
            await store.put(Collection.POSTS.value, broken["id"], broken)
            await _assert_quiet(queue)
            later = await posts.save(make_post(created_at=datetime(2025, 1, 3)))
            items = await _next(queue)

            # Assert
            assert [p.id for p in items] == [later.id, valid.id]
            assert subscription.active

    @pytest.mark.asyncio
    async def test_summaries_of_filters_by_kind(self, unit_env):
        """A summary feed follows one post and one kind, newest first."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        summaries = await unit_env.get(SummaryRepository)
        post_id = make_post().id
        other_id = make_post().id
        older = await summaries.save(
            _summary(post_id, SummaryKind.POST, datetime(2025, 1, 1))
        )
        await summaries.save(_summary(post_id, SummaryKind.COMMENTS, datetime(2025, 1, 2)))
        await summaries.save(_summary(other_id, SummaryKind.POST, datetime(2025, 1, 3)))
        queue: asyncio.Queue = asyncio.Queue()
        query = FeedQuery.summaries_of(post_id, SummaryKind.POST)

        async with bus.subscribe(query, queue.put_nowait):
            assert [s.id for s in await _next(queue)] == [older.id]

            # Act
            newer = await summaries.save(
                _summary(post_id, SummaryKind.POST, datetime(2025, 1, 4))
            )
            items = await _next(queue)

        # Assert
        assert [s.id for s in items] == [newer.id, older.id]


class TestCancel:
    """Tests for releasing subscriptions."""

    @pytest.mark.asyncio
    async def test_no_delivery_after_cancel(self, unit_env):
        """Once cancel() returns, writes are no longer delivered."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        queue: asyncio.Queue = asyncio.Queue()
        subscription = bus.subscribe(FeedQuery.all_posts(), queue.put_nowait)
        await _next(queue)

        # Act
        subscription.cancel()
        await posts.save(make_post())

        # Assert
        await _assert_quiet(queue)
        assert not subscription.active
        assert bus.active_count == 0

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self, unit_env):
        """Cancelling twice is harmless."""
        bus = await unit_env.get(LiveProjectionBus)
        subscription = bus.subscribe(FeedQuery.all_posts(), lambda items: None)

        subscription.cancel()
        subscription.cancel()
        await subscription.aclose()

        assert not subscription.active

    @pytest.mark.asyncio
    async def test_context_exit_releases_store_feed(self, unit_env):
        """Leaving the context closes the underlying change feed."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        store = await unit_env.get(DocumentStore)
        queue: asyncio.Queue = asyncio.Queue()

        # Act
        async with bus.subscribe(FeedQuery.all_posts(), queue.put_nowait):
            await _next(queue)
            watching = store.notifier.watcher_count(Collection.POSTS.value)

        # Assert
        assert watching == 1
        assert store.notifier.watcher_count(Collection.POSTS.value) == 0

    @pytest.mark.asyncio
    async def test_bus_close_releases_all(self, unit_env):
        """close() releases every open subscription."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        post = make_post()
        subscriptions = [
            bus.subscribe(FeedQuery.all_posts(), lambda items: None),
            bus.subscribe(FeedQuery.comments_of(post.id), lambda items: None),
        ]

        # Act
        await bus.close()

        # Assert
        assert bus.active_count == 0
        assert not any(s.active for s in subscriptions)
