"""Document store implementation of Comment repository."""

from typing import Optional

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository, DocumentStore
from forum.domain.value import Collection, CommentId, PostId
from forum.persistence.mappers import comment_to_doc, doc_to_comment


class DocumentCommentRepository(CommentRepository):
    """CommentRepository backed by the comments collection."""

    def __init__(self, store: DocumentStore) -> None:
        """Initialize repository with a document store.

        Args:
            store: Document store
        """
        self.store = store

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        doc = await self.store.get(Collection.COMMENTS.value, str(comment_id))
        return doc_to_comment(doc) if doc else None

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments on a post, oldest first."""
        docs = await self.store.query_where_equals(
            Collection.COMMENTS.value, "post_id", str(post_id)
        )
        comments = [doc_to_comment(doc) for doc in docs]
        comments.sort(key=lambda c: (c.created_at, str(c.id)))
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save or overwrite a comment."""
        await self.store.put(
            Collection.COMMENTS.value, str(comment.id), comment_to_doc(comment)
        )
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        await self.store.delete(Collection.COMMENTS.value, str(comment_id))
