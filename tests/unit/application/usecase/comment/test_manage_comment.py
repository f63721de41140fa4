"""Unit tests for comment use cases."""

from uuid import uuid4

import pytest

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.domain.error import NotAuthenticatedError, NotAuthorizedError, NotFoundError
from forum.domain.repository import PostRepository
from forum.domain.service import CommentService
from forum.domain.value import Handle
from tests.conftest import make_post, make_user_id
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCommentUseCases:
    """Tests for creating, editing and deleting comments."""

    @pytest.mark.asyncio
    async def test_create_comment(self, unit_env):
        """A comment is attached to an existing post."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author = str(make_user_id())

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=author,
                author_handle="ada",
                content="Great result",
            )
        )

        # Assert
        assert response.post_id == str(post.id)
        assert response.author_id == author
        assert response.author_handle == Handle("ada")

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, unit_env):
        """Commenting on an unknown post raises NotFoundError."""
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id=str(uuid4()),
                    author_id=str(make_user_id()),
                    author_handle="ada",
                    content="Hello?",
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_comment_rejected(self, unit_env):
        """Commenting requires an acting user."""
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id=str(post.id),
                    author_id=None,
                    author_handle="ada",
                    content="Hi",
                )
            )

    @pytest.mark.asyncio
    async def test_only_author_edits_and_deletes(self, unit_env):
        """Other users can neither edit nor delete a comment."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        update = await unit_env.get(UpdateCommentUseCase)
        delete = await unit_env.get(DeleteCommentUseCase)
        comments = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author, stranger = str(make_user_id()), str(make_user_id())
        created = await create.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=author,
                author_handle="ada",
                content="First draft",
            )
        )

        # Act / Assert
        with pytest.raises(NotAuthorizedError):
            await update.execute(
                UpdateCommentRequest(
                    comment_id=created.comment_id, user_id=stranger, content="Spam"
                )
            )
        with pytest.raises(NotAuthorizedError):
            await delete.execute(
                DeleteCommentRequest(comment_id=created.comment_id, user_id=stranger)
            )

        edited = await update.execute(
            UpdateCommentRequest(
                comment_id=created.comment_id, user_id=author, content="Final"
            )
        )
        assert edited.content == "Final"

        await delete.execute(
            DeleteCommentRequest(comment_id=created.comment_id, user_id=author)
        )
        assert await comments.get_comments_for_post(post.id) == []
