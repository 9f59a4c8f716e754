"""Storage infrastructure implementations."""

from stockledger.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteLedgerPoster,
    SQLitePhysicalCountStore,
    SQLiteWarehouseDocumentStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteInventoryStore",
    "SQLiteWarehouseDocumentStore",
    "SQLitePhysicalCountStore",
    "SQLiteLedgerPoster",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
