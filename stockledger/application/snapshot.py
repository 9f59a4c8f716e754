"""Catalog and ledger snapshot shared by the read-side use cases."""

import asyncio
from dataclasses import dataclass, field

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Item, Movement, Warehouse
from stockledger.core.exceptions import PersistenceError
from stockledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class InventorySnapshot:
    """Items, movements and warehouses of one tenant read at one moment."""

    items: list[Item] = field(default_factory=list)
    movements: list[Movement] = field(default_factory=list)
    warehouses: list[Warehouse] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "InventorySnapshot":
        return cls()

    @property
    def items_by_id(self) -> dict[str, Item]:
        return {item.id: item for item in self.items}

    @property
    def warehouses_by_id(self) -> dict[str, Warehouse]:
        return {w.id: w for w in self.warehouses}


class SnapshotLoader:
    """
    Loads an InventorySnapshot with the three reads running concurrently.

    ``current`` holds the last loaded snapshot. When any read fails it is
    reset to an empty snapshot so stale data is never shown next to an error.
    """

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store
        self.current = InventorySnapshot.empty()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def load(self, tenant_id: str) -> InventorySnapshot:
        store = await self._get_inventory_store()
        try:
            items, movements, warehouses = await asyncio.gather(
                store.list_items(tenant_id),
                store.list_movements(tenant_id),
                store.list_warehouses(tenant_id),
            )
        except Exception as e:
            self.current = InventorySnapshot.empty()
            logger.error("snapshot_load_failed", tenant_id=tenant_id, error=str(e))
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(
                f"Failed to load inventory snapshot: {e}",
                code="SNAPSHOT_LOAD_FAILED",
                details={"tenant_id": tenant_id},
            ) from e

        self.current = InventorySnapshot(
            items=list(items),
            movements=list(movements),
            warehouses=list(warehouses),
        )
        logger.debug(
            "snapshot_loaded",
            tenant_id=tenant_id,
            items=len(items),
            movements=len(movements),
            warehouses=len(warehouses),
        )
        return self.current
