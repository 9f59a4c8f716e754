"""API route modules."""

from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.inventory import router as inventory_router
from stockledger.api.routes.physical_counts import router as physical_counts_router
from stockledger.api.routes.warehouse_entries import router as warehouse_entries_router
from stockledger.api.routes.warehouse_transfers import router as warehouse_transfers_router

__all__ = [
    "health_router",
    "inventory_router",
    "warehouse_entries_router",
    "warehouse_transfers_router",
    "physical_counts_router",
]
