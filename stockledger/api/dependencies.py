"""
Dependency injection container for FastAPI.

Provides use case instances and the request tenant to route handlers.
"""

from functools import lru_cache

from fastapi import Header

from stockledger.application.use_cases import (
    BuildPhysicalCountUseCase,
    CheckTransferAvailabilityUseCase,
    CreateWarehouseEntryUseCase,
    CreateWarehouseTransferUseCase,
    DeleteWarehouseUseCase,
    GetPhysicalCountsUseCase,
    GetWarehouseDocumentsUseCase,
    InventoryReportsUseCase,
    PostWarehouseEntryUseCase,
    PostWarehouseTransferUseCase,
    SavePhysicalCountUseCase,
)
from stockledger.config import Settings, bind_tenant, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Tenant dependency
def get_tenant_id(
    x_tenant_id: str | None = Header(default=None, alias="X-Tenant-ID"),
) -> str:
    """Tenant from the X-Tenant-ID header, else the configured default."""
    tenant_id = (x_tenant_id or "").strip() or get_settings().inventory.default_tenant_id
    bind_tenant(tenant_id)
    return tenant_id


# Inventory use case dependencies
def get_inventory_reports_use_case() -> InventoryReportsUseCase:
    """Get inventory reports use case."""
    return InventoryReportsUseCase()


def get_delete_warehouse_use_case() -> DeleteWarehouseUseCase:
    """Get delete warehouse use case."""
    return DeleteWarehouseUseCase()


# Warehouse document use case dependencies
def get_create_warehouse_entry_use_case() -> CreateWarehouseEntryUseCase:
    """Get create warehouse entry use case."""
    return CreateWarehouseEntryUseCase()


def get_post_warehouse_entry_use_case() -> PostWarehouseEntryUseCase:
    """Get post warehouse entry use case."""
    return PostWarehouseEntryUseCase()


def get_create_warehouse_transfer_use_case() -> CreateWarehouseTransferUseCase:
    """Get create warehouse transfer use case."""
    return CreateWarehouseTransferUseCase()


def get_post_warehouse_transfer_use_case() -> PostWarehouseTransferUseCase:
    """Get post warehouse transfer use case."""
    return PostWarehouseTransferUseCase()


def get_check_transfer_availability_use_case() -> CheckTransferAvailabilityUseCase:
    """Get transfer availability preview use case."""
    return CheckTransferAvailabilityUseCase()


def get_warehouse_documents_use_case() -> GetWarehouseDocumentsUseCase:
    """Get warehouse document lookup use case."""
    return GetWarehouseDocumentsUseCase()


# Physical count use case dependencies
def get_build_physical_count_use_case() -> BuildPhysicalCountUseCase:
    """Get physical count sheet use case."""
    return BuildPhysicalCountUseCase()


def get_save_physical_count_use_case() -> SavePhysicalCountUseCase:
    """Get save physical count use case."""
    return SavePhysicalCountUseCase()


def get_physical_counts_use_case() -> GetPhysicalCountsUseCase:
    """Get physical count history use case."""
    return GetPhysicalCountsUseCase()
