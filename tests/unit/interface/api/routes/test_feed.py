"""Unit tests for the live feed relay."""

import asyncio
import json

import pytest

from forum.domain.repository import PostRepository
from forum.domain.service import (
    FeedQuery,
    LiveProjectionBus,
    SummaryCache,
    post_fingerprint,
)
from forum.domain.value import SummaryKind
from forum.interface.api.routes.feed import FeedEvent, _render_summary, _stream
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _render(posts) -> FeedEvent:
    return FeedEvent(event="posts", data=json.dumps([str(p.id) for p in posts]))


class TestStream:
    """Tests for _stream."""

    @pytest.mark.asyncio
    async def test_relays_deliveries_as_events(self, unit_env):
        """Should emit one SSE event per materialization."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        posts = await unit_env.get(PostRepository)
        events = _stream(bus, FeedQuery.all_posts(), _render)

        # Act
        first = await asyncio.wait_for(events.__anext__(), timeout=1.0)
        post = await posts.save(make_post())
        second = await asyncio.wait_for(events.__anext__(), timeout=1.0)
        await events.aclose()

        # Assert
        assert first == {"event": "posts", "data": "[]"}
        assert json.loads(second["data"]) == [str(post.id)]

    @pytest.mark.asyncio
    async def test_disconnect_releases_subscription(self, unit_env):
        """Should cancel the subscription when the stream is closed."""
        bus = await unit_env.get(LiveProjectionBus)
        events = _stream(bus, FeedQuery.all_posts(), _render)
        await asyncio.wait_for(events.__anext__(), timeout=1.0)

        assert bus.active_count == 1
        await events.aclose()
        assert bus.active_count == 0


class TestSummaryStream:
    """Tests for the summary feed."""

    @pytest.mark.asyncio
    async def test_null_until_generated_then_latest(self, unit_env):
        """Should emit null first, then the newly generated summary."""
        # Arrange
        bus = await unit_env.get(LiveProjectionBus)
        cache = await unit_env.get(SummaryCache)
        post = make_post(content="Cryo-EM data")
        events = _stream(
            bus, FeedQuery.summaries_of(post.id, SummaryKind.POST), _render_summary
        )

        # Act
        first = await asyncio.wait_for(events.__anext__(), timeout=1.0)

        async def generator() -> str:
            return "Cryo-EM summary."

        await cache.get_or_generate(
            post.id, SummaryKind.POST, post_fingerprint(post), generator
        )
        second = await asyncio.wait_for(events.__anext__(), timeout=1.0)
        await events.aclose()

        # Assert
        assert first == {"event": "summary", "data": "null"}
        assert second["event"] == "summary"
        data = json.loads(second["data"])
        assert data["post_id"] == str(post.id)
        assert data["kind"] == "post"
        assert data["summary_text"] == "Cryo-EM summary."
