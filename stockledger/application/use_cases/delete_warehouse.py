"""Delete Warehouse Use Case - refused while items call it home."""

from stockledger.config import get_logger
from stockledger.core.exceptions import WarehouseInUseError, WarehouseNotFoundError
from stockledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class DeleteWarehouseUseCase:
    """Delete a warehouse that no item uses as its home warehouse."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, tenant_id: str, warehouse_id: str) -> None:
        store = await self._get_inventory_store()

        if await store.get_warehouse(tenant_id, warehouse_id) is None:
            raise WarehouseNotFoundError(warehouse_id)

        items = await store.list_items(tenant_id)
        referencing = [item.id for item in items if item.warehouse_id == warehouse_id]
        if referencing:
            raise WarehouseInUseError(warehouse_id, referencing)

        await store.delete_warehouse(tenant_id, warehouse_id)
        logger.info("warehouse_deleted", tenant_id=tenant_id, warehouse_id=warehouse_id)
