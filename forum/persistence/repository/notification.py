"""Document store implementation of Notification repository."""

from forum.domain.model import Notification
from forum.domain.repository import DocumentStore, NotificationRepository
from forum.domain.value import Collection, UserId
from forum.persistence.mappers import doc_to_notification, notification_to_doc


class DocumentNotificationRepository(NotificationRepository):
    """NotificationRepository backed by the notifications collection."""

    def __init__(self, store: DocumentStore) -> None:
        """Initialize repository with a document store.

        Args:
            store: Document store
        """
        self.store = store

    async def save(self, notification: Notification) -> Notification:
        """Append a notification."""
        await self.store.put(
            Collection.NOTIFICATIONS.value,
            str(notification.id),
            notification_to_doc(notification),
        )
        return notification

    async def find_by_recipient(self, user_id: UserId) -> list[Notification]:
        """Find notifications addressed to a user, newest first."""
        docs = await self.store.query_where_equals(
            Collection.NOTIFICATIONS.value, "to_user_id", str(user_id)
        )
        notifications = [doc_to_notification(doc) for doc in docs]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications
