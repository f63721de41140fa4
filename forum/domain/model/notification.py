"""Notification entity."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import NotificationId, NotificationType, PostId, UserId


class Notification(DomainModel):
    """Vote notification delivered to a post owner.

    Append-only. No uniqueness constraint; the dispatch policy decides how
    many are written.
    """

    id: NotificationId
    type: NotificationType
    from_user_id: UserId
    to_user_id: UserId
    post_id: PostId
    created_at: datetime = Field(default_factory=datetime.now)
