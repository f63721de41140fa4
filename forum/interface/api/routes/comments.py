"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from forum.adapter.error import AdapterError
from forum.application.usecase.comment import (
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.error import http_error
from forum.interface.api.identity import acting_user_id

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    author_handle: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1, max_length=10000)


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=10000)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> CommentResponse:
    """Comment on a post.

    Args:
        post_id: Post UUID
        request: Comment data
        create_comment_use_case: Create comment use case from DI
        user_id: Acting user from the X-User-Id header

    Returns:
        Created comment
    """
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                author_id=user_id,
                author_handle=request.author_handle,
                content=request.content,
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> CommentResponse:
    """Edit a comment. Only the author can edit."""
    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id, user_id=user_id, content=request.content
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> None:
    """Delete a comment. Only the author can delete."""
    try:
        await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
