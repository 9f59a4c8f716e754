"""Core domain entities."""

from stockledger.core.entities.inventory import (
    Item,
    Movement,
    MovementKind,
    Warehouse,
    derive_warehouse_code,
)
from stockledger.core.entities.physical_count import (
    CountTotals,
    PhysicalCountLine,
    PhysicalCountSession,
)
from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    EntrySourceType,
    WarehouseEntryDocument,
    WarehouseEntryLine,
    WarehouseTransferDocument,
    WarehouseTransferLine,
)

__all__ = [
    # Catalog and ledger
    "Item",
    "Warehouse",
    "Movement",
    "MovementKind",
    "derive_warehouse_code",
    # Warehouse documents
    "DocumentStatus",
    "EntrySourceType",
    "WarehouseEntryDocument",
    "WarehouseEntryLine",
    "WarehouseTransferDocument",
    "WarehouseTransferLine",
    # Physical count
    "PhysicalCountSession",
    "PhysicalCountLine",
    "CountTotals",
]
