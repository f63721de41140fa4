"""SQLAlchemy table definitions for the document store.

Every collection lives in a single JSONB table keyed by (collection, id).
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table, func
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

documents_table = Table(
    "documents",
    metadata,
    Column("collection", String(100), primary_key=True),
    Column("id", String(255), primary_key=True),
    Column("data", JSONB, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

# Containment (@>) lookups for query_where_equals
Index("idx_documents_data", documents_table.c.data, postgresql_using="gin")
