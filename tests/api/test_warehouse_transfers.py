"""API tests for warehouse transfer endpoints."""

from datetime import date

import pytest

from stockledger.api.dependencies import (
    get_check_transfer_availability_use_case,
    get_create_warehouse_transfer_use_case,
    get_post_warehouse_transfer_use_case,
    get_warehouse_documents_use_case,
)
from stockledger.api.main import app
from stockledger.application.use_cases import (
    CheckTransferAvailabilityUseCase,
    CreateWarehouseTransferUseCase,
    GetWarehouseDocumentsUseCase,
    PostWarehouseTransferUseCase,
)
from stockledger.core.entities.warehouse_document import (
    WarehouseTransferDocument,
    WarehouseTransferLine,
)


def _transfer(quantity: float) -> WarehouseTransferDocument:
    return WarehouseTransferDocument(
        id="T-1",
        from_warehouse_id="W1",
        to_warehouse_id="W2",
        transfer_date=date(2024, 3, 1),
        lines=[WarehouseTransferLine(line_no=1, item_id="I1", quantity=quantity)],
    )


@pytest.fixture
def transfer_use_cases(mock_inventory_store, mock_document_store):
    app.dependency_overrides[get_check_transfer_availability_use_case] = lambda: (
        CheckTransferAvailabilityUseCase(mock_inventory_store)
    )
    app.dependency_overrides[get_create_warehouse_transfer_use_case] = lambda: (
        CreateWarehouseTransferUseCase(mock_inventory_store, mock_document_store)
    )
    app.dependency_overrides[get_post_warehouse_transfer_use_case] = lambda: (
        PostWarehouseTransferUseCase(mock_inventory_store, mock_document_store)
    )
    app.dependency_overrides[get_warehouse_documents_use_case] = lambda: (
        GetWarehouseDocumentsUseCase(mock_document_store)
    )
    return mock_document_store


class TestWarehouseTransfersAPI:
    async def test_availability_preview(self, client, transfer_use_cases):
        response = await client.post(
            "/api/warehouse-transfers/availability",
            json={"from_warehouse_id": "W1", "lines": [{"item_id": "I1", "quantity": 60}]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["all_sufficient"] is False
        assert data["lines"][0]["available"] == 50

    async def test_create(self, client, transfer_use_cases):
        response = await client.post(
            "/api/warehouse-transfers",
            json={
                "from_warehouse_id": "W1",
                "to_warehouse_id": "W2",
                "lines": [{"item_id": "I1", "quantity": 20}],
            },
        )
        assert response.status_code == 201
        assert response.json()["id"] == "T-1"

    async def test_create_same_endpoints_is_400(self, client, transfer_use_cases):
        response = await client.post(
            "/api/warehouse-transfers",
            json={
                "from_warehouse_id": "W1",
                "to_warehouse_id": "W1",
                "lines": [{"item_id": "I1", "quantity": 1}],
            },
        )
        assert response.status_code == 400

    async def test_post(self, client, transfer_use_cases, mock_inventory_store):
        transfer_use_cases.get_transfer.return_value = _transfer(20)
        response = await client.post("/api/warehouse-transfers/T-1/post")
        assert response.status_code == 200
        assert response.json()["status"] == "posted"
        mock_inventory_store.add_movements.assert_awaited_once()

    async def test_post_over_balance_is_409(
        self, client, transfer_use_cases, mock_inventory_store
    ):
        transfer_use_cases.get_transfer.return_value = _transfer(51)
        response = await client.post("/api/warehouse-transfers/T-1/post")

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["details"]["shortages"] == [
            {"item_id": "I1", "name": "Cable 3x2.5mm", "requested": 51.0, "available": 50.0}
        ]
        mock_inventory_store.add_movements.assert_not_called()

    async def test_list_and_missing(self, client, transfer_use_cases):
        transfer_use_cases.list_transfers.return_value = [_transfer(1)]
        transfer_use_cases.get_transfer.return_value = None

        listing = await client.get("/api/warehouse-transfers")
        assert listing.json()["total"] == 1
        missing = await client.get("/api/warehouse-transfers/T-404")
        assert missing.status_code == 404
