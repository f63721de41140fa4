"""Notification repository interface."""

from abc import ABC, abstractmethod

from forum.domain.model.notification import Notification
from forum.domain.value import UserId


class NotificationRepository(ABC):
    """Append-only repository for notifications."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Append a notification.

        Args:
            notification: The notification to write

        Returns:
            The saved notification
        """
        pass

    @abstractmethod
    async def find_by_recipient(self, user_id: UserId) -> list[Notification]:
        """Find notifications addressed to a user, newest first.

        Args:
            user_id: Recipient's ID

        Returns:
            List of notifications
        """
        pass
