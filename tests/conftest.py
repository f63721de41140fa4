"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from forum.domain.model import Comment, Post
from forum.domain.value import CommentId, Handle, PostId, UserId


def make_user_id() -> UserId:
    """Generate a fresh user ID."""
    return UserId(uuid4())


def make_post(
    author_id: UserId | None = None,
    title: str = "Test Post",
    content: str = "Test content",
    created_at: datetime | None = None,
    **overrides,
) -> Post:
    """Build a post with sensible defaults.

    Args:
        author_id: Post owner, random if omitted
        title: Post title
        content: Post content
        created_at: Creation time, now if omitted
        **overrides: Any other Post field
    """
    created_at = created_at or datetime.now()
    fields = dict(
        id=PostId(uuid4()),
        author_id=author_id or make_user_id(),
        author_handle=Handle("author"),
        title=title,
        content=content,
        created_at=created_at,
        updated_at=created_at,
    )
    fields.update(overrides)
    return Post(**fields)


def make_comment(
    post_id: PostId,
    content: str = "Test comment",
    author_handle: str = "commenter",
    offset_seconds: int = 0,
) -> Comment:
    """Build a comment on a post.

    Args:
        post_id: Parent post
        content: Comment text
        author_handle: Display name of the author
        offset_seconds: Shift from a fixed base time, to control ordering
    """
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=make_user_id(),
        author_handle=Handle(author_handle),
        content=content,
        created_at=datetime(2025, 1, 1, 12, 0, 0) + timedelta(seconds=offset_seconds),
    )
