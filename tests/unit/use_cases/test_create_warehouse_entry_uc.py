"""Tests for CreateWarehouseEntryUseCase."""

from datetime import date

import pytest

from stockledger.application.dto.requests import (
    CreateWarehouseEntryRequest,
    EntryLineRequest,
)
from stockledger.application.use_cases.create_warehouse_entry import (
    CreateWarehouseEntryUseCase,
)
from stockledger.core.entities.warehouse_document import DocumentStatus
from stockledger.core.exceptions import (
    DatabaseError,
    ItemNotFoundError,
    ValidationError,
    WarehouseNotFoundError,
    WorkflowStepError,
)


@pytest.fixture
def use_case(mock_inventory_store, mock_document_store):
    return CreateWarehouseEntryUseCase(
        inventory_store=mock_inventory_store,
        document_store=mock_document_store,
    )


class TestCreateWarehouseEntryUseCase:
    async def test_draft_created(self, use_case, mock_document_store, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1",
            document_date=date(2024, 3, 1),
            lines=[EntryLineRequest(item_id="I1", quantity=10, unit_cost=12.0)],
        )
        document = await use_case.execute(tenant_id, request)

        assert document.id == "E-1"
        assert document.status == DocumentStatus.DRAFT
        assert document.total_value == 120.0
        header, lines = mock_document_store.create_entry.call_args[0][1:]
        assert header.warehouse_id == "W1"
        assert [(line.line_no, line.item_id) for line in lines] == [(1, "I1")]

    async def test_blank_lines_dropped(self, use_case, mock_document_store, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1",
            lines=[
                EntryLineRequest(item_id=None, quantity=3),
                EntryLineRequest(item_id="I1", quantity=0),
                EntryLineRequest(item_id="I2", quantity=2),
            ],
        )
        document = await use_case.execute(tenant_id, request)
        assert [line.item_id for line in document.lines] == ["I2"]

    async def test_no_valid_lines_rejected_before_store(
        self, use_case, mock_inventory_store, mock_document_store, tenant_id
    ):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1", lines=[EntryLineRequest(item_id="I1", quantity=-1)]
        )
        with pytest.raises(ValidationError):
            await use_case.execute(tenant_id, request)
        mock_inventory_store.get_warehouse.assert_not_called()
        mock_document_store.create_entry.assert_not_called()

    async def test_unit_cost_defaults_to_item_cost(self, use_case, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1",
            lines=[
                EntryLineRequest(item_id="I1", quantity=1),
                EntryLineRequest(item_id="I2", quantity=1),
            ],
        )
        document = await use_case.execute(tenant_id, request)
        # average cost for I1, cost price for I2
        assert [line.unit_cost for line in document.lines] == [10.0, 4.0]

    async def test_fractional_quantity_of_tracked_item(self, use_case, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1", lines=[EntryLineRequest(item_id="I1", quantity=2.5)]
        )
        with pytest.raises(ValidationError, match="whole units"):
            await use_case.execute(tenant_id, request)

    async def test_unknown_warehouse(self, use_case, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W9", lines=[EntryLineRequest(item_id="I1", quantity=1)]
        )
        with pytest.raises(WarehouseNotFoundError):
            await use_case.execute(tenant_id, request)

    async def test_unknown_item(self, use_case, mock_document_store, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1", lines=[EntryLineRequest(item_id="GHOST", quantity=1)]
        )
        with pytest.raises(ItemNotFoundError):
            await use_case.execute(tenant_id, request)
        mock_document_store.create_entry.assert_not_called()

    async def test_store_failure_names_step(self, use_case, mock_document_store, tenant_id):
        mock_document_store.create_entry.side_effect = DatabaseError("insert", "disk full")
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1", lines=[EntryLineRequest(item_id="I1", quantity=1)]
        )
        with pytest.raises(WorkflowStepError) as exc_info:
            await use_case.execute(tenant_id, request)
        assert exc_info.value.failed_step == "create_document"
        assert exc_info.value.completed_steps == []

    async def test_to_response(self, use_case, tenant_id):
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1", lines=[EntryLineRequest(item_id="I1", quantity=4, unit_cost=2.5)]
        )
        response = use_case.to_response(await use_case.execute(tenant_id, request))
        assert response.status == "draft"
        assert response.total_quantity == 4
        assert response.lines[0].line_value == 10.0

    async def test_entry_past_stock_ceiling_rejected(
        self, use_case, mock_inventory_store, mock_document_store, cable, tenant_id
    ):
        capped = cable.model_copy(update={"maximum_stock": 60})
        mock_inventory_store.get_item.side_effect = lambda tenant_id, item_id: capped
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1",
            lines=[
                EntryLineRequest(item_id="I1", quantity=6),
                EntryLineRequest(item_id="I1", quantity=5),
            ],
        )
        with pytest.raises(ValidationError, match="maximum_stock"):
            await use_case.execute(tenant_id, request)
        mock_document_store.create_entry.assert_not_called()

    async def test_entry_up_to_stock_ceiling_accepted(
        self, use_case, mock_inventory_store, cable, tenant_id
    ):
        capped = cable.model_copy(update={"maximum_stock": 60})
        mock_inventory_store.get_item.side_effect = lambda tenant_id, item_id: capped
        request = CreateWarehouseEntryRequest(
            warehouse_id="W1", lines=[EntryLineRequest(item_id="I1", quantity=10)]
        )
        document = await use_case.execute(tenant_id, request)
        assert document.total_quantity == 10
