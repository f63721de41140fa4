"""In-memory document store for testing and local development."""

import copy
from collections import defaultdict
from collections.abc import AsyncIterator, Mapping
from typing import Any, Optional

from forum.domain.error import NotFoundError
from forum.domain.repository.store import Document, DocumentStore, IncrementResult
from forum.persistence.store.feed import ChangeNotifier


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore for testing.

    Documents are deep-copied on the way in and out so callers can never
    mutate stored state by accident.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = defaultdict(dict)
        self.notifier = ChangeNotifier()

    async def put(self, collection: str, doc_id: str, doc: Document) -> str:
        """Create or overwrite a document."""
        self._collections[collection][doc_id] = copy.deepcopy(doc)
        self.notifier.notify(collection)
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch a document."""
        doc = self._collections[collection].get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def patch(self, collection: str, doc_id: str, fields: Document) -> None:
        """Merge fields into an existing document."""
        doc = self._collections[collection].get(doc_id)
        if doc is None:
            raise NotFoundError(collection, doc_id)
        doc.update(copy.deepcopy(fields))
        self.notifier.notify(collection)

    async def patch_atomic_increment(
        self, collection: str, doc_id: str, increments: Mapping[str, int]
    ) -> IncrementResult:
        """Atomically add deltas, rejecting the whole patch on underflow."""
        doc = self._collections[collection].get(doc_id)
        if doc is None:
            raise NotFoundError(collection, doc_id)

        updated = {
            field: int(doc.get(field, 0)) + delta
            for field, delta in increments.items()
        }
        if any(v < 0 for v in updated.values()):
            return IncrementResult.UNDERFLOW_REJECTED

        doc.update(updated)
        self.notifier.notify(collection)
        return IncrementResult.APPLIED

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document."""
        if self._collections[collection].pop(doc_id, None) is not None:
            self.notifier.notify(collection)

    async def query_where_equals(
        self, collection: str, field: str, value: Any
    ) -> list[Document]:
        """Find documents whose field equals value."""
        return [
            copy.deepcopy(doc)
            for doc in self._collections[collection].values()
            if doc.get(field) == value
        ]

    async def subscribe(
        self,
        collection: str,
        field: Optional[str] = None,
        value: Any = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> AsyncIterator[list[Document]]:
        """Stream snapshots, waking on every write to the collection."""
        with self.notifier.watch(collection) as wakeup:
            while True:
                wakeup.clear()
                yield self._snapshot(collection, field, value, order_by, descending)
                await wakeup.wait()

    def _snapshot(
        self,
        collection: str,
        field: Optional[str],
        value: Any,
        order_by: Optional[str],
        descending: bool,
    ) -> list[Document]:
        docs = [
            copy.deepcopy(doc)
            for doc in self._collections[collection].values()
            if field is None or doc.get(field) == value
        ]
        if order_by is not None:
            docs.sort(
                key=lambda d: (d.get(order_by) is None, d.get(order_by)),
                reverse=descending,
            )
        return docs
