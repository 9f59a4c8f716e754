"""SQLite storage implementations."""

from stockledger.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    database_errors,
    get_connection,
    get_pool,
    get_transaction,
)
from stockledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from stockledger.infrastructure.storage.sqlite.ledger_poster import SQLiteLedgerPoster
from stockledger.infrastructure.storage.sqlite.physical_count_store import (
    SQLitePhysicalCountStore,
)
from stockledger.infrastructure.storage.sqlite.warehouse_document_store import (
    SQLiteWarehouseDocumentStore,
)

# Aliases for backward compatibility
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_warehouse_document_store: SQLiteWarehouseDocumentStore | None = None
_physical_count_store: SQLitePhysicalCountStore | None = None
_ledger_poster: SQLiteLedgerPoster | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_warehouse_document_store() -> SQLiteWarehouseDocumentStore:
    """Get singleton warehouse document store instance."""
    global _warehouse_document_store
    if _warehouse_document_store is None:
        _warehouse_document_store = SQLiteWarehouseDocumentStore()
    return _warehouse_document_store


async def get_physical_count_store() -> SQLitePhysicalCountStore:
    """Get singleton physical count store instance."""
    global _physical_count_store
    if _physical_count_store is None:
        _physical_count_store = SQLitePhysicalCountStore()
    return _physical_count_store


async def get_ledger_poster() -> SQLiteLedgerPoster:
    """Get singleton ledger poster instance."""
    global _ledger_poster
    if _ledger_poster is None:
        _ledger_poster = SQLiteLedgerPoster()
    return _ledger_poster


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "database_errors",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteWarehouseDocumentStore",
    "SQLitePhysicalCountStore",
    "SQLiteLedgerPoster",
    # Factory functions
    "get_inventory_store",
    "get_warehouse_document_store",
    "get_physical_count_store",
    "get_ledger_poster",
]
