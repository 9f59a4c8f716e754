"""Core interfaces (ports) for dependency injection."""

from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.ledger_poster import ILedgerPoster
from stockledger.core.interfaces.physical_count_store import IPhysicalCountStore
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore

__all__ = [
    "IInventoryStore",
    "IWarehouseDocumentStore",
    "IPhysicalCountStore",
    "ILedgerPoster",
]
