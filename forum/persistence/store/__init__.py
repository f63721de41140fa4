"""Document store implementations."""

from forum.persistence.store.inmemory import InMemoryDocumentStore
from forum.persistence.store.postgres import PostgresDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "PostgresDocumentStore",
]
