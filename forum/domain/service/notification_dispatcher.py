"""Notification dispatcher domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from forum.domain.error import NotificationDispatchError
from forum.domain.model import Notification, VoteOutcome
from forum.domain.repository import NotificationRepository
from forum.domain.value import (
    NotificationId,
    NotificationType,
    PostId,
    TransitionKind,
    UserId,
)

from .base import Service


class NotificationDispatcher(Service):
    """Emits one notification per meaningful vote transition.

    Policy:
    - CAST and SWITCH notify the post owner once
    - UNVOTE never notifies
    - Self-votes never notify
    Notifications are best-effort; failures never reach the voter.
    """

    def __init__(self, notification_repository: NotificationRepository) -> None:
        """Initialize notification dispatcher.

        Args:
            notification_repository: Notification repository
        """
        self.notification_repository = notification_repository

    async def maybe_notify(
        self,
        outcome: VoteOutcome,
        owner_id: Optional[UserId],
        voter_id: UserId,
        subject_id: PostId,
    ) -> Optional[Notification]:
        """Notify the post owner if the transition calls for it.

        Args:
            outcome: Classified vote transition
            owner_id: Post author
            voter_id: User who voted
            subject_id: Post voted on

        Returns:
            The written notification, or None if none was sent
        """
        if outcome.kind == TransitionKind.UNVOTE:
            return None

        if owner_id is None:
            logfire.warn("Post has no owner to notify", post_id=str(subject_id))
            return None

        if owner_id == voter_id:
            logfire.debug("Self-vote notification suppressed", post_id=str(subject_id))
            return None

        notification = Notification(
            id=NotificationId(uuid4()),
            type=NotificationType.for_vote(outcome.requested),
            from_user_id=voter_id,
            to_user_id=owner_id,
            post_id=subject_id,
        )

        try:
            return await self.dispatch(notification)
        except NotificationDispatchError as e:
            logfire.error(
                "Notification dispatch failed",
                post_id=str(subject_id),
                to_user_id=str(owner_id),
                error=str(e),
            )
            return None

    async def dispatch(self, notification: Notification) -> Notification:
        """Write a notification record.

        Args:
            notification: Notification to write

        Returns:
            The written notification

        Raises:
            NotificationDispatchError: If the record could not be written
        """
        with logfire.span(
            "notification_dispatcher.dispatch",
            type=notification.type.value,
            post_id=str(notification.post_id),
            to_user_id=str(notification.to_user_id),
        ):
            try:
                saved = await self.notification_repository.save(notification)
            except Exception as e:
                raise NotificationDispatchError(str(e)) from e

            logfire.info(
                "Notification sent",
                type=saved.type.value,
                post_id=str(saved.post_id),
                to_user_id=str(saved.to_user_id),
            )
            return saved

    async def list_for_user(self, user_id: UserId) -> list[Notification]:
        """List a user's notifications, newest first.

        Args:
            user_id: Recipient's ID

        Returns:
            List of notifications
        """
        return await self.notification_repository.find_by_recipient(user_id)
