"""Abstract interface for the item catalog and movement ledger."""

from abc import ABC, abstractmethod

from stockledger.core.entities.inventory import Item, Movement, Warehouse


class IInventoryStore(ABC):
    """Tenant-scoped access to items, warehouses and stock movements.

    Catalog maintenance (creating and editing items and warehouses) lives
    outside the engine; ``create_item`` and ``create_warehouse`` exist so the
    catalog can be seeded.
    """

    @abstractmethod
    async def list_items(self, tenant_id: str) -> list[Item]:
        """List all items of a tenant, ordered by name."""
        pass

    @abstractmethod
    async def get_item(self, tenant_id: str, item_id: str) -> Item | None:
        """Get item by ID."""
        pass

    @abstractmethod
    async def create_item(self, tenant_id: str, item: Item) -> Item:
        """Create a catalog item."""
        pass

    @abstractmethod
    async def list_warehouses(self, tenant_id: str) -> list[Warehouse]:
        """List all warehouses of a tenant, ordered by name."""
        pass

    @abstractmethod
    async def get_warehouse(self, tenant_id: str, warehouse_id: str) -> Warehouse | None:
        """Get warehouse by ID."""
        pass

    @abstractmethod
    async def create_warehouse(self, tenant_id: str, warehouse: Warehouse) -> Warehouse:
        """Create a warehouse."""
        pass

    @abstractmethod
    async def delete_warehouse(self, tenant_id: str, warehouse_id: str) -> bool:
        """Delete a warehouse. Returns False when it did not exist."""
        pass

    @abstractmethod
    async def list_movements(self, tenant_id: str) -> list[Movement]:
        """List all movements of a tenant, newest first."""
        pass

    @abstractmethod
    async def add_movement(self, tenant_id: str, movement: Movement) -> Movement:
        """Append a movement to the ledger."""
        pass

    @abstractmethod
    async def add_movements(
        self, tenant_id: str, movements: list[Movement]
    ) -> list[Movement]:
        """Append several movements in one transaction."""
        pass
