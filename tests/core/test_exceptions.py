"""Unit tests for domain exceptions."""

import pytest

from stockledger.core.exceptions import (
    DatabaseError,
    DocumentStateError,
    EntryDocumentNotFoundError,
    InsufficientStockError,
    ItemNotFoundError,
    NotFoundError,
    PersistenceError,
    PhysicalCountNotFoundError,
    StockLedgerError,
    TransferDocumentNotFoundError,
    ValidationError,
    WarehouseInUseError,
    WarehouseNotFoundError,
    WorkflowStepError,
)


class TestStockLedgerError:
    def test_basic_initialization(self):
        error = StockLedgerError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "StockLedgerError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = StockLedgerError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = StockLedgerError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestValidationError:
    def test_carries_field_and_value(self):
        error = ValidationError(field="lines", message="no valid lines", value=[])
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "lines"
        assert error.details["value"] == "[]"
        assert "no valid lines" in str(error)

    def test_value_truncated(self):
        error = ValidationError(field="description", message="too long", value="x" * 500)
        assert len(error.details["value"]) == 100


class TestInsufficientStockError:
    def test_lists_shortages(self):
        shortages = [{"item_id": "I1", "name": "Cable", "requested": 6, "available": 5}]
        error = InsufficientStockError("W1", shortages)
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.shortages == shortages
        assert error.details["warehouse_id"] == "W1"
        assert "Cable" in str(error)


class TestStateErrors:
    def test_document_state_error(self):
        error = DocumentStateError("D1", "posted", "post")
        assert error.code == "INVALID_DOCUMENT_STATE"
        assert error.details == {"document_id": "D1", "status": "posted", "operation": "post"}

    def test_warehouse_in_use_error(self):
        error = WarehouseInUseError("W1", ["I1", "I2"])
        assert error.code == "WAREHOUSE_IN_USE"
        assert error.details["item_ids"] == ["I1", "I2"]


@pytest.mark.parametrize(
    "error, code",
    [
        (ItemNotFoundError("I1"), "ITEM_NOT_FOUND"),
        (WarehouseNotFoundError("W1"), "WAREHOUSE_NOT_FOUND"),
        (EntryDocumentNotFoundError("E1"), "ENTRY_NOT_FOUND"),
        (TransferDocumentNotFoundError("T1"), "TRANSFER_NOT_FOUND"),
        (PhysicalCountNotFoundError("S1"), "PHYSICAL_COUNT_NOT_FOUND"),
    ],
)
def test_not_found_family(error, code):
    assert isinstance(error, NotFoundError)
    assert error.code == code


class TestPersistenceErrors:
    def test_database_error(self):
        error = DatabaseError("list_items", "disk I/O error")
        assert isinstance(error, PersistenceError)
        assert error.details == {"operation": "list_items", "error": "disk I/O error"}

    def test_workflow_step_error(self):
        error = WorkflowStepError(
            workflow="post_warehouse_entry",
            failed_step="post_ledger",
            completed_steps=["load_document"],
            error="boom",
        )
        assert isinstance(error, PersistenceError)
        assert error.failed_step == "post_ledger"
        assert error.completed_steps == ["load_document"]
        assert "post_ledger" in str(error)
