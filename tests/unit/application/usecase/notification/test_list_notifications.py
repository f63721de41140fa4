"""Unit tests for ListNotificationsUseCase."""

import pytest

from forum.application.usecase.notification import (
    ListNotificationsRequest,
    ListNotificationsUseCase,
)
from forum.application.usecase.vote import SubmitVoteRequest, SubmitVoteUseCase
from forum.domain.error import NotAuthenticatedError
from forum.domain.repository import PostRepository
from forum.domain.value import NotificationType
from tests.conftest import make_post, make_user_id
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListNotificationsUseCase:
    """Tests for ListNotificationsUseCase."""

    @pytest.mark.asyncio
    async def test_owner_sees_votes_on_their_post(self, unit_env):
        """Casts and switches notify the owner; unvotes do not."""
        # Arrange
        vote = await unit_env.get(SubmitVoteUseCase)
        use_case = await unit_env.get(ListNotificationsUseCase)
        post_repo = await unit_env.get(PostRepository)
        owner = make_user_id()
        post = await post_repo.save(make_post(author_id=owner))
        voter = str(make_user_id())
        for value in (1, -1, -1):  # cast, switch, unvote
            await vote.execute(
                SubmitVoteRequest(post_id=str(post.id), user_id=voter, value=value)
            )

        # Act
        response = await use_case.execute(ListNotificationsRequest(user_id=str(owner)))

        # Assert
        assert response.total == 2
        assert {item.type for item in response.items} == {
            NotificationType.UPVOTE,
            NotificationType.DOWNVOTE,
        }
        assert all(item.from_user_id == voter for item in response.items)
        assert all(item.post_id == str(post.id) for item in response.items)

    @pytest.mark.asyncio
    async def test_empty_inbox(self, unit_env):
        """A user nobody voted for has no notifications."""
        use_case = await unit_env.get(ListNotificationsUseCase)

        response = await use_case.execute(
            ListNotificationsRequest(user_id=str(make_user_id()))
        )

        assert response.items == []
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        """Reading notifications requires an acting user."""
        use_case = await unit_env.get(ListNotificationsUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(ListNotificationsRequest(user_id=None))
