"""SQLite storage implementations."""

from printpress.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from printpress.infrastructure.storage.sqlite.job_store import SQLiteJobStore
from printpress.infrastructure.storage.sqlite.paper_store import SQLitePaperStore
from printpress.infrastructure.storage.sqlite.stock_store import SQLiteStockStore
from printpress.infrastructure.storage.sqlite.tenant_store import SQLiteTenantStore

# Singleton instances
_paper_store: SQLitePaperStore | None = None
_stock_store: SQLiteStockStore | None = None
_job_store: SQLiteJobStore | None = None
_tenant_store: SQLiteTenantStore | None = None


async def get_paper_store() -> SQLitePaperStore:
    """Get singleton paper store instance."""
    global _paper_store
    if _paper_store is None:
        _paper_store = SQLitePaperStore()
    return _paper_store


async def get_stock_store() -> SQLiteStockStore:
    """Get singleton stock ledger store instance."""
    global _stock_store
    if _stock_store is None:
        _stock_store = SQLiteStockStore()
    return _stock_store


async def get_job_store() -> SQLiteJobStore:
    """Get singleton job store instance."""
    global _job_store
    if _job_store is None:
        _job_store = SQLiteJobStore()
    return _job_store


async def get_tenant_store() -> SQLiteTenantStore:
    """Get singleton tenant store instance."""
    global _tenant_store
    if _tenant_store is None:
        _tenant_store = SQLiteTenantStore()
    return _tenant_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLitePaperStore",
    "SQLiteStockStore",
    "SQLiteJobStore",
    "SQLiteTenantStore",
    # Factory functions
    "get_paper_store",
    "get_stock_store",
    "get_job_store",
    "get_tenant_store",
]
