"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from forum.adapter.error import AdapterError
from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    PostResponse,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.error import http_error
from forum.interface.api.identity import acting_user_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    author_handle: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=10000)
    media_url: str | None = None


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=10000)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> PostResponse:
    """Create a new post.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        user_id: Acting user from the X-User-Id header

    Returns:
        Created post
    """
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=user_id,
                author_handle=request.author_handle,
                title=request.title,
                content=request.content,
                media_url=request.media_url,
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> PostResponse:
    """Edit a post's title and content.

    Only the author can edit. Vote counters are unaffected.
    """
    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=post_id,
                user_id=user_id,
                title=request.title,
                content=request.content,
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    user_id: str | None = Depends(acting_user_id),
) -> None:
    """Delete a post and its comments. Only the author can delete."""
    try:
        await delete_post_use_case.execute(
            DeletePostRequest(post_id=post_id, user_id=user_id)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
