"""Storage infrastructure implementations."""

from printpress.infrastructure.storage.sqlite import (
    SQLiteJobStore,
    SQLitePaperStore,
    SQLiteStockStore,
    SQLiteTenantStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    "SQLitePaperStore",
    "SQLiteStockStore",
    "SQLiteJobStore",
    "SQLiteTenantStore",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
