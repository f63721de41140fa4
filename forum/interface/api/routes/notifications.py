"""Notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends

from forum.adapter.error import AdapterError
from forum.application.usecase.notification import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.error import http_error
from forum.interface.api.identity import acting_user_id

router = APIRouter(prefix="/notifications", tags=["notifications"], route_class=DishkaRoute)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> ListNotificationsResponse:
    """List the acting user's vote notifications, newest first."""
    try:
        return await list_notifications_use_case.execute(
            ListNotificationsRequest(user_id=user_id)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
