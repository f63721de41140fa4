"""Unit tests for NotificationDispatcher."""

from uuid import uuid4

import pytest

from forum.domain.error import NotificationDispatchError
from forum.domain.model import Notification, VoteOutcome
from forum.domain.repository import NotificationRepository
from forum.domain.service import NotificationDispatcher
from forum.domain.value import NotificationId, NotificationType, UserId, VoteValue
from tests.conftest import make_post, make_user_id
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class BrokenNotificationRepository(NotificationRepository):
    """Notification repository whose writes always fail."""

    async def save(self, notification: Notification) -> Notification:
        raise ConnectionError("write timed out")

    async def find_by_recipient(self, user_id: UserId) -> list[Notification]:
        return []


def _outcome(voter: UserId, previous, requested) -> VoteOutcome:
    return VoteOutcome.classify(
        subject_id=make_post().id,
        voter_id=voter,
        previous=previous,
        requested=requested,
    )


class TestMaybeNotify:
    """Tests for the notification policy."""

    @pytest.mark.asyncio
    async def test_cast_notifies_owner(self, unit_env):
        """A first upvote notifies the owner with an upvote notification."""
        # Arrange
        dispatcher = await unit_env.get(NotificationDispatcher)
        owner, voter = make_user_id(), make_user_id()
        outcome = _outcome(voter, None, VoteValue.UP)

        # Act
        notification = await dispatcher.maybe_notify(
            outcome, owner_id=owner, voter_id=voter, subject_id=outcome.subject_id
        )

        # Assert
        assert notification is not None
        assert notification.type == NotificationType.UPVOTE
        assert notification.to_user_id == owner
        assert notification.from_user_id == voter
        assert await dispatcher.list_for_user(owner) == [notification]

    @pytest.mark.asyncio
    async def test_unvote_never_notifies(self, unit_env):
        """Removing a vote is silent."""
        dispatcher = await unit_env.get(NotificationDispatcher)
        owner, voter = make_user_id(), make_user_id()
        outcome = _outcome(voter, VoteValue.DOWN, VoteValue.DOWN)

        result = await dispatcher.maybe_notify(
            outcome, owner_id=owner, voter_id=voter, subject_id=outcome.subject_id
        )

        assert result is None
        assert await dispatcher.list_for_user(owner) == []

    @pytest.mark.asyncio
    async def test_self_vote_never_notifies(self, unit_env):
        """Owners are not notified about their own votes."""
        dispatcher = await unit_env.get(NotificationDispatcher)
        owner = make_user_id()
        outcome = _outcome(owner, None, VoteValue.UP)

        result = await dispatcher.maybe_notify(
            outcome, owner_id=owner, voter_id=owner, subject_id=outcome.subject_id
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_missing_owner_never_notifies(self, unit_env):
        """Posts without an owner are skipped."""
        dispatcher = await unit_env.get(NotificationDispatcher)
        voter = make_user_id()
        outcome = _outcome(voter, None, VoteValue.DOWN)

        result = await dispatcher.maybe_notify(
            outcome, owner_id=None, voter_id=voter, subject_id=outcome.subject_id
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_write_failure_is_swallowed(self):
        """A failed notification write is logged, not raised."""
        dispatcher = NotificationDispatcher(BrokenNotificationRepository())
        owner, voter = make_user_id(), make_user_id()
        outcome = _outcome(voter, VoteValue.UP, VoteValue.DOWN)

        result = await dispatcher.maybe_notify(
            outcome, owner_id=owner, voter_id=voter, subject_id=outcome.subject_id
        )

        assert result is None


class TestDispatch:
    """Tests for dispatch."""

    @pytest.mark.asyncio
    async def test_dispatch_wraps_write_errors(self):
        """Repository errors surface as NotificationDispatchError."""
        dispatcher = NotificationDispatcher(BrokenNotificationRepository())
        notification = Notification(
            id=NotificationId(uuid4()),
            type=NotificationType.DOWNVOTE,
            from_user_id=make_user_id(),
            to_user_id=make_user_id(),
            post_id=make_post().id,
        )

        with pytest.raises(NotificationDispatchError):
            await dispatcher.dispatch(notification)

    @pytest.mark.asyncio
    async def test_list_for_user_newest_first(self, unit_env):
        """Notifications are listed newest first."""
        # Arrange
        dispatcher = await unit_env.get(NotificationDispatcher)
        owner = make_user_id()
        post_id = make_post().id
        for voter in (make_user_id(), make_user_id(), make_user_id()):
            await dispatcher.maybe_notify(
                _outcome(voter, None, VoteValue.UP),
                owner_id=owner,
                voter_id=voter,
                subject_id=post_id,
            )

        # Act
        notifications = await dispatcher.list_for_user(owner)

        # Assert
        assert len(notifications) == 3
        timestamps = [n.created_at for n in notifications]
        assert timestamps == sorted(timestamps, reverse=True)
