"""List notifications use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import NotAuthenticatedError
from forum.domain.service import NotificationDispatcher
from forum.domain.value import NotificationType, UserId


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str | None  # Acting user, None if anonymous


class NotificationItem(BaseModel):
    """Single notification."""

    notification_id: str
    type: NotificationType
    from_user_id: str
    post_id: str
    created_at: datetime


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    items: list[NotificationItem]
    total: int


class ListNotificationsUseCase:
    """Use case for reading the acting user's notifications."""

    def __init__(self, notification_dispatcher: NotificationDispatcher) -> None:
        """Initialize list notifications use case.

        Args:
            notification_dispatcher: Notification dispatcher domain service
        """
        self.notification_dispatcher = notification_dispatcher

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow.

        Raises:
            NotAuthenticatedError: If no user is acting
        """
        if not request.user_id:
            raise NotAuthenticatedError("read notifications")

        notifications = await self.notification_dispatcher.list_for_user(
            UserId(UUID(request.user_id))
        )
        items = [
            NotificationItem(
                notification_id=str(n.id),
                type=n.type,
                from_user_id=str(n.from_user_id),
                post_id=str(n.post_id),
                created_at=n.created_at,
            )
            for n in notifications
        ]
        return ListNotificationsResponse(items=items, total=len(items))
