"""
Domain exceptions for the stock ledger.

Validation and availability errors are raised before any store call is
made. Persistence errors wrap failures of the external record store and
are never retried.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(StockLedgerError):
    """Requested transfer quantities exceed the source warehouse balance."""

    def __init__(self, warehouse_id: str, shortages: list[dict[str, Any]]):
        names = ", ".join(str(s.get("name") or s.get("item_id")) for s in shortages)
        super().__init__(
            f"Insufficient stock in warehouse {warehouse_id} for: {names}",
            code="INSUFFICIENT_STOCK",
            details={"warehouse_id": warehouse_id, "shortages": shortages},
        )
        self.warehouse_id = warehouse_id
        self.shortages = shortages


class DocumentStateError(StockLedgerError):
    """Operation not allowed for the document's current status."""

    def __init__(self, document_id: str, status: str, operation: str):
        super().__init__(
            f"Cannot {operation} document {document_id} in status '{status}'",
            code="INVALID_DOCUMENT_STATE",
            details={
                "document_id": document_id,
                "status": status,
                "operation": operation,
            },
        )


class WarehouseInUseError(StockLedgerError):
    """Warehouse is still the home warehouse of one or more items."""

    def __init__(self, warehouse_id: str, item_ids: list[str]):
        super().__init__(
            f"Warehouse {warehouse_id} is the home warehouse of {len(item_ids)} item(s)",
            code="WAREHOUSE_IN_USE",
            details={"warehouse_id": warehouse_id, "item_ids": item_ids[:50]},
        )


# Lookup Exceptions
class NotFoundError(StockLedgerError):
    """Base exception for missing records."""

    pass


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: str):
        super().__init__(
            f"Item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class WarehouseNotFoundError(NotFoundError):
    def __init__(self, warehouse_id: str):
        super().__init__(
            f"Warehouse not found: {warehouse_id}",
            code="WAREHOUSE_NOT_FOUND",
            details={"warehouse_id": warehouse_id},
        )


class EntryDocumentNotFoundError(NotFoundError):
    def __init__(self, document_id: str):
        super().__init__(
            f"Warehouse entry not found: {document_id}",
            code="ENTRY_NOT_FOUND",
            details={"document_id": document_id},
        )


class TransferDocumentNotFoundError(NotFoundError):
    def __init__(self, document_id: str):
        super().__init__(
            f"Warehouse transfer not found: {document_id}",
            code="TRANSFER_NOT_FOUND",
            details={"document_id": document_id},
        )


class PhysicalCountNotFoundError(NotFoundError):
    def __init__(self, session_id: str):
        super().__init__(
            f"Physical count session not found: {session_id}",
            code="PHYSICAL_COUNT_NOT_FOUND",
            details={"session_id": session_id},
        )


# Persistence Exceptions
class PersistenceError(StockLedgerError):
    """Base exception for record store failures."""

    pass


class DatabaseError(PersistenceError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class WorkflowStepError(PersistenceError):
    """A step of a multi-step store workflow failed.

    Steps listed in ``completed_steps`` were applied and are not rolled
    back; callers must refetch to see the resulting state.
    """

    def __init__(
        self,
        workflow: str,
        failed_step: str,
        completed_steps: list[str],
        error: str,
    ):
        super().__init__(
            f"{workflow} failed at step '{failed_step}': {error}",
            code="WORKFLOW_STEP_FAILED",
            details={
                "workflow": workflow,
                "failed_step": failed_step,
                "completed_steps": completed_steps,
                "error": error,
            },
        )
        self.workflow = workflow
        self.failed_step = failed_step
        self.completed_steps = completed_steps


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
