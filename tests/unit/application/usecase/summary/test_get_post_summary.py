"""Unit tests for GetPostSummaryUseCase."""

import asyncio
from uuid import uuid4

import pytest

from forum.adapter.huggingface import MockSummaryGenerator
from forum.application.usecase.post import UpdatePostRequest, UpdatePostUseCase
from forum.application.usecase.summary import (
    GetPostSummaryRequest,
    GetPostSummaryUseCase,
    SummaryStatus,
)
from forum.domain.error import NotFoundError
from forum.domain.repository import PostRepository
from forum.domain.service import SummaryCache
from forum.domain.value import SummaryKind
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetPostSummaryUseCase:
    """Tests for GetPostSummaryUseCase."""

    @pytest.mark.asyncio
    async def test_wait_returns_ready_summary(self, unit_env):
        """With wait the summary is generated inline."""
        # Arrange
        use_case = await unit_env.get(GetPostSummaryUseCase)
        generator = await unit_env.get(MockSummaryGenerator)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(title="Results", content="We found X."))

        # Act
        response = await use_case.execute(
            GetPostSummaryRequest(post_id=str(post.id), wait=True)
        )

        # Assert
        assert response.status == SummaryStatus.READY
        assert response.kind == SummaryKind.POST
        assert response.summary_text.startswith("Summary ")
        assert generator.calls == [("Results\n\nWe found X.", 200)]

    @pytest.mark.asyncio
    async def test_repeat_reads_hit_cache(self, unit_env):
        """Unchanged content is summarized once."""
        use_case = await unit_env.get(GetPostSummaryUseCase)
        generator = await unit_env.get(MockSummaryGenerator)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        request = GetPostSummaryRequest(post_id=str(post.id), wait=True)

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert first.summary_text == second.summary_text
        assert len(generator.calls) == 1

    @pytest.mark.asyncio
    async def test_background_read_is_pending_then_ready(self, unit_env):
        """Without wait the first read is pending."""
        # Arrange
        use_case = await unit_env.get(GetPostSummaryUseCase)
        cache = await unit_env.get(SummaryCache)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        request = GetPostSummaryRequest(post_id=str(post.id))

        # Act
        pending = await use_case.execute(request)
        while cache.is_generating(post.id, SummaryKind.POST):
            await asyncio.sleep(0.005)
        ready = await use_case.execute(request)

        # Assert
        assert pending.status == SummaryStatus.PENDING
        assert pending.summary_text is None
        assert ready.status == SummaryStatus.READY

    @pytest.mark.asyncio
    async def test_edit_regenerates(self, unit_env):
        """After an edit the summary reflects the new content."""
        # Arrange
        use_case = await unit_env.get(GetPostSummaryUseCase)
        update = await unit_env.get(UpdatePostUseCase)
        generator = await unit_env.get(MockSummaryGenerator)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(title="T", content="old findings"))
        request = GetPostSummaryRequest(post_id=str(post.id), wait=True)
        before = await use_case.execute(request)

        # Act
        await update.execute(
            UpdatePostRequest(
                post_id=str(post.id),
                user_id=str(post.author_id),
                title="T",
                content="new findings",
            )
        )
        after = await use_case.execute(request)

        # Assert
        assert before.summary_text != after.summary_text
        assert len(generator.calls) == 2
        assert generator.calls[1][0] == "T\n\nnew findings"

    @pytest.mark.asyncio
    async def test_generation_failure_is_unavailable(self, unit_env):
        """A failing provider yields UNAVAILABLE, and nothing is cached."""
        # Arrange
        use_case = await unit_env.get(GetPostSummaryUseCase)
        generator = await unit_env.get(MockSummaryGenerator)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        request = GetPostSummaryRequest(post_id=str(post.id), wait=True)
        generator.fail = True

        # Act
        failed = await use_case.execute(request)
        generator.fail = False
        recovered = await use_case.execute(request)

        # Assert
        assert failed.status == SummaryStatus.UNAVAILABLE
        assert recovered.status == SummaryStatus.READY
        assert len(generator.calls) == 2

    @pytest.mark.asyncio
    async def test_unknown_post(self, unit_env):
        """Summaries of missing posts raise NotFoundError."""
        use_case = await unit_env.get(GetPostSummaryUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetPostSummaryRequest(post_id=str(uuid4())))
