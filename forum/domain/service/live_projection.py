"""Live projection bus.

Turns the store's raw change feed into typed, ordered, deduplicated
materializations delivered to callbacks. Each subscription owns one
asyncio task; it must be released with cancel()/aclose() or by using it
as an async context manager.
"""

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Optional, Union

import logfire
from pydantic import ValidationError

from forum.domain.model import Comment, Post, Summary
from forum.domain.repository import Document, DocumentStore
from forum.domain.value import Collection, PostId, SummaryKind
from forum.domain.value.common import ValueObject

from .base import Service

Entity = Union[Post, Comment, Summary]
OnChange = Callable[[list[Any]], Union[None, Awaitable[None]]]

_ENTITY_TYPES: dict[Collection, type[Entity]] = {
    Collection.POSTS: Post,
    Collection.COMMENTS: Comment,
    Collection.SUMMARIES: Summary,
}


class FeedQuery(ValueObject):
    """Descriptor of a live entity set.

    Items are ordered by ``order_by`` in the given direction, with ties
    broken by entity id so the order never flickers between deliveries.
    """

    collection: Collection
    field: Optional[str] = None
    value: Optional[str] = None
    order_by: str = "created_at"
    descending: bool = False
    kind: Optional[SummaryKind] = None

    @classmethod
    def all_posts(cls) -> "FeedQuery":
        """All posts, newest first."""
        return cls(collection=Collection.POSTS, order_by="created_at", descending=True)

    @classmethod
    def comments_of(cls, post_id: PostId) -> "FeedQuery":
        """Comments of a post, oldest first."""
        return cls(
            collection=Collection.COMMENTS,
            field="post_id",
            value=str(post_id),
            order_by="created_at",
        )

    @classmethod
    def summaries_of(cls, post_id: PostId, kind: SummaryKind) -> "FeedQuery":
        """Summaries of a post or of its comment thread, newest first."""
        return cls(
            collection=Collection.SUMMARIES,
            field="subject_id",
            value=str(post_id),
            order_by="generated_at",
            descending=True,
            kind=kind,
        )

    def materialize(self, docs: list[Document]) -> list[Entity]:
        """Convert raw documents into a stably ordered list of entities.

        Documents that do not validate as the collection's entity are
        skipped and logged, so one bad record never stalls the feed.
        """
        entity_type = _ENTITY_TYPES[self.collection]
        items = []
        for doc in docs:
            if self.kind is not None and doc.get("kind") != self.kind.value:
                continue
            try:
                items.append(entity_type.model_validate(doc))
            except ValidationError as e:
                logfire.warn(
                    "Skipping invalid document in live feed",
                    collection=self.collection.value,
                    doc_id=doc.get("id"),
                    error=str(e),
                )
        items.sort(key=lambda item: str(item.id))
        items.sort(key=lambda item: getattr(item, self.order_by), reverse=self.descending)
        return items


class LiveSubscription:
    """Handle on a live feed subscription.

    cancel() takes effect immediately: once it returns no further callback
    starts. aclose() additionally waits for the delivery task to finish.
    """

    def __init__(
        self,
        query: FeedQuery,
        on_change: OnChange,
        feed: AsyncIterator[list[Document]],
        release: Callable[["LiveSubscription"], None],
    ) -> None:
        """Initialize subscription. Delivery begins with start().

        Args:
            query: Entity set being followed
            on_change: Callback (sync or async) taking the materialization
            feed: Raw snapshot iterator from the document store
            release: Called once on cancel to deregister from the bus
        """
        self.query = query
        self._on_change = on_change
        self._feed = feed
        self._release = release
        self._cancelled = False
        self._last: Optional[list[Entity]] = None
        self._task: Optional[asyncio.Task] = None
        self.deliveries = 0

    @property
    def active(self) -> bool:
        """Whether the subscription still delivers updates."""
        return not self._cancelled and self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start pumping the feed."""
        self._task = asyncio.create_task(
            self._pump(), name=f"live:{self.query.collection.value}"
        )

    def cancel(self) -> None:
        """Stop delivery. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._release(self)

    async def aclose(self) -> None:
        """Stop delivery and wait until the pump has shut down."""
        self.cancel()
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def __aenter__(self) -> "LiveSubscription":
        """Enter the subscription scope; delivery is already running."""
        return self

    async def __aexit__(self, *exc_info) -> None:
        """Release the subscription and wait for the pump to stop."""
        await self.aclose()

    async def _pump(self) -> None:
        """Materialize each snapshot and deliver it when it changed.

        Runs until cancelled or the store feed ends; the feed is always
        closed on exit.
        """
        try:
            async for docs in self._feed:
                if self._cancelled:
                    break
                items = self.query.materialize(docs)
                if items == self._last:
                    continue
                self._last = items
                await self._deliver(items)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logfire.error(
                "Live feed stopped",
                collection=self.query.collection.value,
                error=str(e),
                error_type=type(e).__name__,
            )
        finally:
            await self._feed.aclose()  # type: ignore[attr-defined]

    async def _deliver(self, items: list[Entity]) -> None:
        """Invoke the callback, logging its errors."""
        if self._cancelled:
            return
        try:
            result = self._on_change(items)
            if inspect.isawaitable(result):
                await result
            self.deliveries += 1
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # A failing consumer must not stop the feed
            logfire.error(
                "Live feed callback failed",
                collection=self.query.collection.value,
                error=str(e),
                error_type=type(e).__name__,
            )


class LiveProjectionBus(Service):
    """Fans the store's change feed out to typed subscriptions."""

    def __init__(self, store: DocumentStore) -> None:
        """Initialize live projection bus.

        Args:
            store: Document store providing the change feed
        """
        self.store = store
        self._subscriptions: set[LiveSubscription] = set()

    @property
    def active_count(self) -> int:
        """Number of live subscriptions."""
        return len(self._subscriptions)

    def subscribe(self, query: FeedQuery, on_change: OnChange) -> LiveSubscription:
        """Subscribe to a live entity set.

        The callback receives the full ordered materialization after every
        relevant change, starting with the current state. Identical
        consecutive materializations are delivered once.

        Args:
            query: Entity set to follow
            on_change: Callback (sync or async) taking the list of entities

        Returns:
            Subscription handle; release it with cancel() or aclose()
        """
        feed = self.store.subscribe(
            query.collection.value,
            field=query.field,
            value=query.value,
            order_by=query.order_by,
            descending=query.descending,
        )
        subscription = LiveSubscription(
            query, on_change, feed, release=self._subscriptions.discard
        )
        self._subscriptions.add(subscription)
        subscription.start()
        logfire.info(
            "Live subscription opened",
            collection=query.collection.value,
            active=len(self._subscriptions),
        )
        return subscription

    async def close(self) -> None:
        """Release every subscription."""
        for subscription in list(self._subscriptions):
            await subscription.aclose()
