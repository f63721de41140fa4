"""Unit tests for PostService."""

import asyncio

import pytest
from pydantic import ValidationError

from forum.domain.error import NotFoundError
from forum.domain.repository import CommentRepository
from forum.domain.service import (
    CounterProjector,
    PostService,
    SummaryCache,
    VoteLedger,
    post_fingerprint,
)
from forum.domain.model import VoteOutcome
from forum.domain.value import SummaryKind, VoteValue
from tests.conftest import make_comment, make_post, make_user_id
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSavePost:
    """Tests for save_post."""

    @pytest.mark.asyncio
    async def test_counters_start_at_zero(self, unit_env):
        """Incoming counter values are ignored on creation."""
        service = await unit_env.get(PostService)

        saved = await service.save_post(make_post(up_votes=9, down_votes=4))

        assert (saved.up_votes, saved.down_votes, saved.content_version) == (0, 0, 1)
        assert await service.get_post_by_id(saved.id) == saved

    @pytest.mark.asyncio
    async def test_get_missing_post(self, unit_env):
        """Unknown posts come back as None."""
        service = await unit_env.get(PostService)

        assert await service.get_post_by_id(make_post().id) is None


class TestUpdateContent:
    """Tests for update_content."""

    @pytest.mark.asyncio
    async def test_edit_keeps_counters_and_bumps_version(self, unit_env):
        """Editing never touches the vote counters."""
        # Arrange
        service = await unit_env.get(PostService)
        projector = await unit_env.get(CounterProjector)
        post = await service.save_post(make_post(title="Draft", content="v1"))
        outcome = VoteOutcome.classify(
            subject_id=post.id,
            voter_id=make_user_id(),
            previous=None,
            requested=VoteValue.UP,
        )
        await projector.apply_transition(post.id, outcome)

        # Act
        updated = await service.update_content(post.id, " Final ", "v2\n")

        # Assert
        assert updated.title == "Final"
        assert updated.content == "v2"
        assert updated.content_version == 2
        assert (updated.up_votes, updated.down_votes) == (1, 0)

    @pytest.mark.asyncio
    async def test_unchanged_content_is_noop(self, unit_env):
        """Saving identical content does not bump the version."""
        service = await unit_env.get(PostService)
        post = await service.save_post(make_post(title="Same", content="Body"))

        updated = await service.update_content(post.id, "Same", "Body")

        assert updated.content_version == 1

    @pytest.mark.asyncio
    async def test_blank_title_rejected_before_write(self, unit_env):
        """A whitespace-only title is refused and the post stays usable."""
        # Arrange
        service = await unit_env.get(PostService)
        ledger = await unit_env.get(VoteLedger)
        post = await service.save_post(make_post(title="Keep me", content="Body"))

        # Act
        with pytest.raises(ValidationError):
            await service.update_content(post.id, "   ", "New body")

        # Assert
        stored = await service.get_post_by_id(post.id)
        assert stored.title == "Keep me"
        assert stored.content == "Body"
        assert stored.content_version == 1
        outcome = await ledger.submit_vote(post.id, make_user_id(), VoteValue.UP)
        assert outcome.current == VoteValue.UP

    @pytest.mark.asyncio
    async def test_missing_post_raises(self, unit_env):
        """Editing a post that does not exist raises NotFoundError."""
        service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await service.update_content(make_post().id, "Title", "Body")

    @pytest.mark.asyncio
    async def test_edit_cancels_inflight_summary(self, unit_env):
        """A running summary for the old content is abandoned."""
        # Arrange
        service = await unit_env.get(PostService)
        cache = await unit_env.get(SummaryCache)
        post = await service.save_post(make_post(content="before"))
        gate = asyncio.Event()

        async def slow_generator() -> str:
            await gate.wait()
            return "summary of old content"

        await cache.schedule(
            post.id, SummaryKind.POST, post_fingerprint(post), slow_generator
        )

        # Act
        await service.update_content(post.id, post.title, "after")
        gate.set()
        await asyncio.sleep(0.01)

        # Assert
        assert not cache.is_generating(post.id, SummaryKind.POST)
        assert await cache.get_latest(post.id, SummaryKind.POST) is None


class TestDeletePost:
    """Tests for delete_post."""

    @pytest.mark.asyncio
    async def test_delete_removes_comments(self, unit_env):
        """Deleting a post also deletes its comment thread."""
        # Arrange
        service = await unit_env.get(PostService)
        comments = await unit_env.get(CommentRepository)
        post = await service.save_post(make_post())
        other = await service.save_post(make_post())
        await comments.save(make_comment(post.id, "gone"))
        kept = await comments.save(make_comment(other.id, "kept"))

        # Act
        await service.delete_post(post.id)

        # Assert
        assert await service.get_post_by_id(post.id) is None
        assert await comments.find_by_post(post.id) == []
        assert [c.id for c in await comments.find_by_post(other.id)] == [kept.id]
