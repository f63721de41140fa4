"""Document store implementation of Post repository."""

from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from forum.domain.model import Post
from forum.domain.repository import DocumentStore, IncrementResult, PostRepository
from forum.domain.value import Collection, PostId
from forum.persistence.mappers import doc_to_post, post_to_doc


class DocumentPostRepository(PostRepository):
    """PostRepository backed by the posts collection."""

    def __init__(self, store: DocumentStore) -> None:
        """Initialize repository with a document store.

        Args:
            store: Document store
        """
        self.store = store

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        doc = await self.store.get(Collection.POSTS.value, str(post_id))
        return doc_to_post(doc) if doc else None

    async def save(self, post: Post) -> Post:
        """Save or overwrite a post."""
        await self.store.put(Collection.POSTS.value, str(post.id), post_to_doc(post))
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        await self.store.delete(Collection.POSTS.value, str(post_id))

    async def increment_counters(
        self, post_id: PostId, increments: Mapping[str, int]
    ) -> IncrementResult:
        """Atomically apply vote counter deltas."""
        return await self.store.patch_atomic_increment(
            Collection.POSTS.value, str(post_id), increments
        )

    async def update_content(
        self, post_id: PostId, title: str, content: str
    ) -> Optional[Post]:
        """Patch title and content without touching the vote counters."""
        await self.store.patch(
            Collection.POSTS.value,
            str(post_id),
            {
                "title": title,
                "content": content,
                "updated_at": datetime.now().isoformat(),
            },
        )
        await self.store.patch_atomic_increment(
            Collection.POSTS.value, str(post_id), {"content_version": 1}
        )
        return await self.find_by_id(post_id)
