"""Live feed routes (Server-Sent Events).

Each connection owns one LiveProjectionBus subscription, released when
the client disconnects.
"""

import asyncio
from collections.abc import AsyncIterator
from datetime import datetime
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, TypeAdapter
from sse_starlette.sse import EventSourceResponse

from forum.application.usecase.comment import CommentResponse
from forum.application.usecase.post import PostResponse
from forum.domain.model import Comment, Post, Summary
from forum.domain.service import FeedQuery, LiveProjectionBus, VoteLedger
from forum.domain.value import PostId, SummaryKind, UserId
from forum.interface.api.identity import acting_user_id

router = APIRouter(prefix="/feed", tags=["feed"], route_class=DishkaRoute)

PING_INTERVAL = 15


class FeedPost(PostResponse):
    """Post as seen by the acting user."""

    my_vote: int | None = None


_posts_adapter = TypeAdapter(list[FeedPost])
_comments_adapter = TypeAdapter(list[CommentResponse])


class FeedSummary(BaseModel):
    """Most recently generated summary of a post or its thread."""

    post_id: str
    kind: SummaryKind
    summary_text: str
    source_count: int
    generated_at: datetime

    @classmethod
    def from_summary(cls, summary: Summary) -> "FeedSummary":
        """Create from domain model."""
        return cls(
            post_id=str(summary.subject_id),
            kind=summary.kind,
            summary_text=summary.summary_text,
            source_count=summary.source_count,
            generated_at=summary.generated_at,
        )


class FeedEvent(BaseModel):
    """Single feed delivery."""

    event: str
    data: str


async def _stream(
    bus: LiveProjectionBus, query: FeedQuery, render
) -> AsyncIterator[dict]:
    """Relay subscription deliveries as SSE events."""
    queue: asyncio.Queue[list] = asyncio.Queue()
    async with bus.subscribe(query, queue.put) as subscription:
        logfire.info("Feed stream opened", collection=query.collection.value)
        try:
            while True:
                try:
                    items = await asyncio.wait_for(queue.get(), timeout=PING_INTERVAL)
                except asyncio.TimeoutError:
                    if not subscription.active:
                        break  # Feed stopped, let the client reconnect
                    continue
                yield (await render(items)).model_dump()
        finally:
            logfire.info("Feed stream closed", collection=query.collection.value)


async def _render_summary(summaries: list[Summary]) -> FeedEvent:
    latest = FeedSummary.from_summary(summaries[0]) if summaries else None
    return FeedEvent(
        event="summary", data=latest.model_dump_json() if latest else "null"
    )


@router.get("/posts")
async def stream_posts(
    bus: FromDishka[LiveProjectionBus],
    vote_ledger: FromDishka[VoteLedger],
    user_id: str | None = Depends(acting_user_id),
) -> EventSourceResponse:
    """Stream all posts, newest first, after every change.

    Each event carries the full ordered list. When the request carries a
    user, each post includes that user's current vote.
    """

    async def render(posts: list[Post]) -> FeedEvent:
        votes = {}
        if user_id:
            votes = await vote_ledger.get_votes_for_subjects(
                UserId(UUID(user_id)), [p.id for p in posts]
            )
        items = [
            FeedPost(
                **PostResponse.from_post(post).model_dump(),
                my_vote=int(votes[post.id]) if votes.get(post.id) is not None else None,
            )
            for post in posts
        ]
        return FeedEvent(event="posts", data=_posts_adapter.dump_json(items).decode())

    return EventSourceResponse(
        _stream(bus, FeedQuery.all_posts(), render),
        ping=PING_INTERVAL,
        headers={"X-Accel-Buffering": "no", "Cache-Control": "no-cache"},
    )


@router.get("/posts/{post_id}/comments")
async def stream_comments(
    post_id: str, bus: FromDishka[LiveProjectionBus]
) -> EventSourceResponse:
    """Stream a post's comments, oldest first, after every change."""
    try:
        query = FeedQuery.comments_of(PostId(UUID(post_id)))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    async def render(comments: list[Comment]) -> FeedEvent:
        items = [CommentResponse.from_comment(c) for c in comments]
        return FeedEvent(
            event="comments", data=_comments_adapter.dump_json(items).decode()
        )

    return EventSourceResponse(
        _stream(bus, query, render),
        ping=PING_INTERVAL,
        headers={"X-Accel-Buffering": "no", "Cache-Control": "no-cache"},
    )


@router.get("/posts/{post_id}/summary")
async def stream_summary(
    post_id: str,
    bus: FromDishka[LiveProjectionBus],
    kind: SummaryKind = Query(default=SummaryKind.POST),
) -> EventSourceResponse:
    """Stream the newest summary of a post or of its comment thread.

    Each event carries the most recently generated summary, or null until
    one exists. A summary of edited content may be stale until regenerated.
    """
    try:
        query = FeedQuery.summaries_of(PostId(UUID(post_id)), kind)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return EventSourceResponse(
        _stream(bus, query, _render_summary),
        ping=PING_INTERVAL,
        headers={"X-Accel-Buffering": "no", "Cache-Control": "no-cache"},
    )
