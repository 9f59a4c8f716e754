"""
Application layer - Use cases, DTOs, snapshots and workflow steps.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Loading catalog and ledger snapshots for the pure projections
3. Implementing use cases that run store calls as named workflow steps

Use cases are the only entry point for API handlers.
"""

from stockledger.application.snapshot import InventorySnapshot, SnapshotLoader
from stockledger.application.use_cases import (
    BuildPhysicalCountUseCase,
    CheckTransferAvailabilityUseCase,
    CreateWarehouseEntryUseCase,
    CreateWarehouseTransferUseCase,
    DeleteWarehouseUseCase,
    GetPhysicalCountsUseCase,
    InventoryReportsUseCase,
    PostWarehouseEntryUseCase,
    PostWarehouseTransferUseCase,
    SavePhysicalCountUseCase,
)
from stockledger.application.workflow import StepRunner, WorkflowStep

__all__ = [
    # Snapshots and workflows
    "InventorySnapshot",
    "SnapshotLoader",
    "StepRunner",
    "WorkflowStep",
    # Use Cases
    "CreateWarehouseEntryUseCase",
    "PostWarehouseEntryUseCase",
    "CreateWarehouseTransferUseCase",
    "PostWarehouseTransferUseCase",
    "CheckTransferAvailabilityUseCase",
    "BuildPhysicalCountUseCase",
    "SavePhysicalCountUseCase",
    "GetPhysicalCountsUseCase",
    "InventoryReportsUseCase",
    "DeleteWarehouseUseCase",
]
