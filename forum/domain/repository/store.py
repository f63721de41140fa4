"""Document store port.

The forum persists every entity as a JSON document in a named collection.
The store offers no multi-document transactions; the only atomic multi-field
operation is the counter increment.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from enum import Enum
from typing import Any, Optional

Document = dict[str, Any]


class IncrementResult(str, Enum):
    """Result of an atomic counter increment."""

    APPLIED = "applied"
    UNDERFLOW_REJECTED = "underflow_rejected"


class DocumentStore(ABC):
    """Remote document store with a live change feed.

    Implementations raise StoreUnavailableError for transient failures.
    """

    @abstractmethod
    async def put(self, collection: str, doc_id: str, doc: Document) -> str:
        """Create or overwrite a document.

        Args:
            collection: Collection name
            doc_id: Document identifier
            doc: Document body (JSON-compatible)

        Returns:
            The document identifier
        """
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch a document.

        Args:
            collection: Collection name
            doc_id: Document identifier

        Returns:
            The document if found, None otherwise
        """
        pass

    @abstractmethod
    async def patch(self, collection: str, doc_id: str, fields: Document) -> None:
        """Merge top-level fields into an existing document.

        Args:
            collection: Collection name
            doc_id: Document identifier
            fields: Fields to overwrite; other fields are left untouched

        Raises:
            NotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def patch_atomic_increment(
        self, collection: str, doc_id: str, increments: Mapping[str, int]
    ) -> IncrementResult:
        """Atomically add deltas to integer fields of a document.

        All deltas are applied together or not at all. If any field would
        end up below zero, nothing is written.

        Args:
            collection: Collection name
            doc_id: Document identifier
            increments: Field name to delta

        Returns:
            APPLIED or UNDERFLOW_REJECTED

        Raises:
            NotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        pass

    @abstractmethod
    async def query_where_equals(
        self, collection: str, field: str, value: Any
    ) -> list[Document]:
        """Find all documents whose field equals value.

        Args:
            collection: Collection name
            field: Top-level field name
            value: JSON-compatible value to match

        Returns:
            Matching documents, unordered
        """
        pass

    @abstractmethod
    def subscribe(
        self,
        collection: str,
        field: Optional[str] = None,
        value: Any = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> AsyncIterator[list[Document]]:
        """Stream snapshots of a filtered, ordered collection.

        The first snapshot is emitted immediately. A new snapshot follows
        every mutation of the collection; bursts of writes may be coalesced
        into a single snapshot. Closing the iterator releases the feed.

        Args:
            collection: Collection name
            field: Optional equality filter field
            value: Value for the equality filter
            order_by: Optional field to order by
            descending: Order direction

        Returns:
            Async iterator of full snapshots
        """
        pass
