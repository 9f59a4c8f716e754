"""Pytest configuration and fixtures."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from stockledger.core.entities.inventory import Item, Movement, MovementKind, Warehouse

TENANT = "tenant-a"


@pytest.fixture
def tenant_id() -> str:
    return TENANT


@pytest.fixture
def warehouses() -> list[Warehouse]:
    """Two warehouses: main store and branch."""
    return [
        Warehouse(id="W1", name="Main Store", location="Algiers"),
        Warehouse(id="W2", name="Branch", location="Oran"),
    ]


@pytest.fixture
def cable() -> Item:
    """Item homed in W1 with 50 units, valued at average cost 10."""
    return Item(
        id="I1",
        sku="CBL-325",
        name="Cable 3x2.5mm",
        category="Electrical",
        warehouse_id="W1",
        current_stock=50,
        minimum_stock=5,
        cost_price=8.0,
        selling_price=15.0,
        average_cost=10.0,
    )


@pytest.fixture
def pipe() -> Item:
    """Item homed in W2 with no average cost, valued at cost price 4."""
    return Item(
        id="I2",
        sku="PVC-20",
        name="PVC Pipe 20mm",
        category="Plumbing",
        warehouse_id="W2",
        current_stock=5,
        minimum_stock=10,
        cost_price=4.0,
        selling_price=6.0,
    )


@pytest.fixture
def items(cable: Item, pipe: Item) -> list[Item]:
    return [cable, pipe]


@pytest.fixture
def make_transfer():
    """Factory for transfer movements."""

    def _make(
        item_id: str,
        quantity: float,
        from_warehouse_id: str = "W1",
        to_warehouse_id: str = "W2",
        movement_date: date | None = None,
    ) -> Movement:
        return Movement(
            item_id=item_id,
            movement_type=MovementKind.TRANSFER,
            quantity=quantity,
            movement_date=movement_date or date(2024, 3, 1),
            from_warehouse_id=from_warehouse_id,
            to_warehouse_id=to_warehouse_id,
        )

    return _make


@pytest.fixture
def mock_inventory_store(items, warehouses):
    """Inventory store holding the two warehouses and two items, empty ledger."""
    store = AsyncMock()
    store.list_items.return_value = items
    store.list_movements.return_value = []
    store.list_warehouses.return_value = warehouses
    store.get_item.side_effect = lambda tenant_id, item_id: next(
        (item for item in items if item.id == item_id), None
    )
    store.get_warehouse.side_effect = lambda tenant_id, warehouse_id: next(
        (w for w in warehouses if w.id == warehouse_id), None
    )
    store.add_movements.side_effect = lambda tenant_id, movements: [
        m.model_copy(update={"id": f"M{i}"}) for i, m in enumerate(movements, start=1)
    ]
    return store


@pytest.fixture
def mock_document_store():
    store = AsyncMock()
    store.create_entry.return_value = "E-1"
    store.create_transfer.return_value = "T-1"
    return store
