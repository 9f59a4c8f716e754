"""Unit tests for warehouse entry and transfer documents."""

from datetime import date

import pytest
from pydantic import ValidationError

from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    EntrySourceType,
    WarehouseEntryDocument,
    WarehouseEntryLine,
    WarehouseTransferDocument,
    WarehouseTransferLine,
)


class TestWarehouseEntryDocument:
    def test_defaults_to_manual_draft(self):
        doc = WarehouseEntryDocument(warehouse_id="W1", document_date=date(2024, 1, 1))
        assert doc.status == DocumentStatus.DRAFT
        assert doc.source_type == EntrySourceType.MANUAL
        assert doc.lines == []

    def test_totals(self):
        doc = WarehouseEntryDocument(
            warehouse_id="W1",
            document_date=date(2024, 1, 1),
            lines=[
                WarehouseEntryLine(item_id="I1", quantity=10, unit_cost=2.5),
                WarehouseEntryLine(item_id="I2", quantity=4, unit_cost=10.0),
            ],
        )
        assert doc.total_quantity == 14
        assert doc.total_value == 65.0

    def test_line_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            WarehouseEntryLine(item_id="I1", quantity=0)

    def test_line_cost_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            WarehouseEntryLine(item_id="I1", quantity=1, unit_cost=-1)


class TestWarehouseTransferDocument:
    def test_endpoints_must_differ(self):
        with pytest.raises(ValidationError, match="must differ"):
            WarehouseTransferDocument(
                from_warehouse_id="W1",
                to_warehouse_id="W1",
                transfer_date=date(2024, 1, 1),
            )

    def test_requested_by_item_aggregates_lines(self):
        doc = WarehouseTransferDocument(
            from_warehouse_id="W1",
            to_warehouse_id="W2",
            transfer_date=date(2024, 1, 1),
            lines=[
                WarehouseTransferLine(item_id="I1", quantity=3),
                WarehouseTransferLine(item_id="I2", quantity=1),
                WarehouseTransferLine(item_id="I1", quantity=4),
            ],
        )
        assert doc.requested_by_item() == {"I1": 7.0, "I2": 1.0}
