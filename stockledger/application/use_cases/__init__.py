"""Application use cases."""

from stockledger.application.use_cases.build_physical_count import (
    BuildPhysicalCountUseCase,
    PhysicalCountSheet,
)
from stockledger.application.use_cases.check_transfer_availability import (
    CheckTransferAvailabilityUseCase,
)
from stockledger.application.use_cases.create_warehouse_entry import (
    CreateWarehouseEntryUseCase,
)
from stockledger.application.use_cases.create_warehouse_transfer import (
    CreateWarehouseTransferUseCase,
)
from stockledger.application.use_cases.delete_warehouse import DeleteWarehouseUseCase
from stockledger.application.use_cases.get_physical_counts import GetPhysicalCountsUseCase
from stockledger.application.use_cases.get_warehouse_documents import (
    GetWarehouseDocumentsUseCase,
)
from stockledger.application.use_cases.inventory_reports import InventoryReportsUseCase
from stockledger.application.use_cases.post_warehouse_entry import PostWarehouseEntryUseCase
from stockledger.application.use_cases.post_warehouse_transfer import (
    PostTransferResult,
    PostWarehouseTransferUseCase,
)
from stockledger.application.use_cases.save_physical_count import SavePhysicalCountUseCase

__all__ = [
    "CreateWarehouseEntryUseCase",
    "PostWarehouseEntryUseCase",
    "CreateWarehouseTransferUseCase",
    "PostWarehouseTransferUseCase",
    "PostTransferResult",
    "GetWarehouseDocumentsUseCase",
    "CheckTransferAvailabilityUseCase",
    "BuildPhysicalCountUseCase",
    "PhysicalCountSheet",
    "SavePhysicalCountUseCase",
    "GetPhysicalCountsUseCase",
    "InventoryReportsUseCase",
    "DeleteWarehouseUseCase",
]
