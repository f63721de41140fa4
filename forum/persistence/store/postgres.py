"""PostgreSQL implementation of the document store.

Documents are stored as JSONB rows. Counter increments are a single guarded
UPDATE, so concurrent voters never overwrite each other's deltas.
"""

import asyncio
import contextlib
from collections.abc import AsyncIterator, Mapping
from typing import Any, Optional

import logfire
from sqlalchemy import Text, and_, cast, delete, func, literal, select, update
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, array, insert
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from forum.adapter.error import StoreUnavailableError
from forum.domain.error import NotFoundError
from forum.domain.repository.store import Document, DocumentStore, IncrementResult
from forum.persistence.store.feed import ChangeNotifier
from forum.persistence.tables import documents_table


class PostgresDocumentStore(DocumentStore):
    """PostgreSQL implementation of DocumentStore.

    Each operation runs in its own short transaction; there are no
    multi-document transactions. Change feeds wake immediately on writes
    made through this instance and poll to observe other processes.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        poll_interval: float = 2.0,
    ) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
            poll_interval: Seconds between change-feed polls
        """
        self.session_factory = session_factory
        self.poll_interval = poll_interval
        self.notifier = ChangeNotifier()

    @contextlib.asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Open a session and transaction, mapping connection errors."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except (OperationalError, InterfaceError) as e:
            logfire.warn("Document store unavailable", error=str(e))
            raise StoreUnavailableError(str(e)) from e

    def _key(self, collection: str, doc_id: str):
        return and_(
            documents_table.c.collection == collection,
            documents_table.c.id == doc_id,
        )

    async def put(self, collection: str, doc_id: str, doc: Document) -> str:
        """Upsert a document."""
        stmt = insert(documents_table).values(
            collection=collection, id=doc_id, data=doc
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[documents_table.c.collection, documents_table.c.id],
            set_={"data": stmt.excluded.data, "updated_at": func.now()},
        )
        async with self._transaction() as session:
            await session.execute(stmt)
        self.notifier.notify(collection)
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch a document."""
        stmt = select(documents_table.c.data).where(self._key(collection, doc_id))
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def patch(self, collection: str, doc_id: str, fields: Document) -> None:
        """Merge fields into an existing document with JSONB concatenation."""
        stmt = (
            update(documents_table)
            .where(self._key(collection, doc_id))
            .values(
                data=documents_table.c.data.op("||")(literal(fields, type_=JSONB)),
                updated_at=func.now(),
            )
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise NotFoundError(collection, doc_id)
        self.notifier.notify(collection)

    async def patch_atomic_increment(
        self, collection: str, doc_id: str, increments: Mapping[str, int]
    ) -> IncrementResult:
        """Apply all deltas in one UPDATE guarded against negative results."""
        data = documents_table.c.data
        new_data = data
        guards = [self._key(collection, doc_id)]
        for field, delta in increments.items():
            new_value = func.coalesce(data[field].as_integer(), 0) + delta
            new_data = func.jsonb_set(
                new_data, cast(array([field]), ARRAY(Text)), func.to_jsonb(new_value)
            )
            if delta < 0:
                guards.append(new_value >= 0)

        stmt = (
            update(documents_table)
            .where(*guards)
            .values(data=new_data, updated_at=func.now())
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            applied = result.rowcount > 0  # type: ignore[attr-defined]
            if not applied:
                exists = await session.execute(
                    select(documents_table.c.id).where(self._key(collection, doc_id))
                )
                if exists.first() is None:
                    raise NotFoundError(collection, doc_id)

        if not applied:
            return IncrementResult.UNDERFLOW_REJECTED
        self.notifier.notify(collection)
        return IncrementResult.APPLIED

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document."""
        stmt = delete(documents_table).where(self._key(collection, doc_id))
        async with self._transaction() as session:
            await session.execute(stmt)
        self.notifier.notify(collection)

    async def query_where_equals(
        self, collection: str, field: str, value: Any
    ) -> list[Document]:
        """Find documents by JSONB containment."""
        stmt = select(documents_table.c.data).where(
            documents_table.c.collection == collection,
            documents_table.c.data.contains({field: value}),
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def subscribe(
        self,
        collection: str,
        field: Optional[str] = None,
        value: Any = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> AsyncIterator[list[Document]]:
        """Stream snapshots on local writes and every poll interval."""
        stmt = select(documents_table.c.data).where(
            documents_table.c.collection == collection
        )
        if field is not None:
            stmt = stmt.where(documents_table.c.data.contains({field: value}))
        if order_by is not None:
            order_col = documents_table.c.data[order_by].astext
            stmt = stmt.order_by(order_col.desc() if descending else order_col.asc())

        with self.notifier.watch(collection) as wakeup:
            while True:
                wakeup.clear()
                async with self._transaction() as session:
                    result = await session.execute(stmt)
                    snapshot = list(result.scalars().all())
                yield snapshot
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(wakeup.wait(), timeout=self.poll_interval)
