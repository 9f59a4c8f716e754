"""Tests for SQLite ledger posting."""

from datetime import date

import pytest

from stockledger.core.entities.inventory import Item, MovementKind
from stockledger.core.entities.warehouse_document import (
    WarehouseEntryDocument,
    WarehouseEntryLine,
)
from stockledger.core.exceptions import ItemNotFoundError, ValidationError
from stockledger.infrastructure.storage.sqlite.ledger_poster import (
    SQLiteLedgerPoster,
    weighted_average_cost,
)


def _entry(*lines: WarehouseEntryLine) -> WarehouseEntryDocument:
    return WarehouseEntryDocument(
        id="E-1", warehouse_id="W1", document_date=date(2024, 3, 10), lines=list(lines)
    )


class TestWeightedAverageCost:
    def test_blends_costs(self):
        # (100*10 + 50*12) / 150
        assert round(weighted_average_cost(100, 10.0, 50, 12.0), 2) == 10.67

    def test_empty_stock_takes_new_cost(self):
        assert weighted_average_cost(0, 0.0, 5, 7.0) == 7.0
        assert weighted_average_cost(0, 3.0, 0, 7.0) == 7.0


class TestSQLiteLedgerPoster:
    async def test_entry_recorded_and_stock_raised(self, seeded_store, tenant_id):
        await SQLiteLedgerPoster().post_entry(
            tenant_id, _entry(WarehouseEntryLine(line_no=1, item_id="I1", quantity=50, unit_cost=12.0))
        )

        [movement] = await seeded_store.list_movements(tenant_id)
        assert movement.movement_type == MovementKind.ENTRY
        assert movement.reference == "E-1"
        assert movement.movement_date == date(2024, 3, 10)

        item = await seeded_store.get_item(tenant_id, "I1")
        assert item.current_stock == 100
        assert item.average_cost == 11.0

    async def test_cost_price_seeds_average(self, seeded_store, tenant_id):
        await SQLiteLedgerPoster().post_entry(
            tenant_id, _entry(WarehouseEntryLine(item_id="I2", quantity=5, unit_cost=6.0))
        )
        item = await seeded_store.get_item(tenant_id, "I2")
        assert item.current_stock == 10
        assert item.average_cost == 5.0

    async def test_untracked_item_keeps_stock(self, seeded_store, tenant_id, untracked_item):
        await seeded_store.create_item(tenant_id, untracked_item)
        await SQLiteLedgerPoster().post_entry(
            tenant_id, _entry(WarehouseEntryLine(item_id="I3", quantity=1.5, unit_cost=30.0))
        )
        item = await seeded_store.get_item(tenant_id, "I3")
        assert item.current_stock == 0
        assert item.average_cost is None
        assert len(await seeded_store.list_movements(tenant_id)) == 1

    async def test_missing_item_rolls_back_whole_entry(self, seeded_store, tenant_id):
        with pytest.raises(ItemNotFoundError):
            await SQLiteLedgerPoster().post_entry(
                tenant_id,
                _entry(
                    WarehouseEntryLine(item_id="I1", quantity=5, unit_cost=10.0),
                    WarehouseEntryLine(item_id="GHOST", quantity=1, unit_cost=1.0),
                ),
            )
        assert await seeded_store.list_movements(tenant_id) == []
        assert (await seeded_store.get_item(tenant_id, "I1")).current_stock == 50


class TestStockCeiling:
    @pytest.fixture
    async def capped_item(self, seeded_store, tenant_id) -> Item:
        item = Item(
            id="I4",
            sku="BRK-10",
            name="Breaker 10A",
            warehouse_id="W1",
            current_stock=45,
            maximum_stock=50,
            average_cost=10.0,
        )
        await seeded_store.create_item(tenant_id, item)
        return item

    async def test_entry_up_to_ceiling_accepted(self, seeded_store, tenant_id, capped_item):
        await SQLiteLedgerPoster().post_entry(
            tenant_id, _entry(WarehouseEntryLine(item_id="I4", quantity=5, unit_cost=10.0))
        )
        assert (await seeded_store.get_item(tenant_id, "I4")).current_stock == 50

    async def test_entry_past_ceiling_rejected_and_nothing_applied(
        self, seeded_store, tenant_id, capped_item
    ):
        with pytest.raises(ValidationError, match="maximum_stock"):
            await SQLiteLedgerPoster().post_entry(
                tenant_id,
                _entry(
                    WarehouseEntryLine(item_id="I1", quantity=5, unit_cost=10.0),
                    WarehouseEntryLine(item_id="I4", quantity=10, unit_cost=20.0),
                ),
            )

        assert await seeded_store.list_movements(tenant_id) == []
        capped = await seeded_store.get_item(tenant_id, "I4")
        assert capped.current_stock == 45
        assert capped.average_cost == 10.0
        assert (await seeded_store.get_item(tenant_id, "I1")).current_stock == 50
        assert "I4" in [item.id for item in await seeded_store.list_items(tenant_id)]

    async def test_repeated_lines_checked_cumulatively(
        self, seeded_store, tenant_id, capped_item
    ):
        with pytest.raises(ValidationError):
            await SQLiteLedgerPoster().post_entry(
                tenant_id,
                _entry(
                    WarehouseEntryLine(item_id="I4", quantity=3, unit_cost=10.0),
                    WarehouseEntryLine(item_id="I4", quantity=3, unit_cost=10.0),
                ),
            )
        assert (await seeded_store.get_item(tenant_id, "I4")).current_stock == 45
