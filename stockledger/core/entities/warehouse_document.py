"""Warehouse entry and transfer documents."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class DocumentStatus(str, Enum):
    """Lifecycle of a warehouse document. ``draft -> posted`` is one-way."""

    DRAFT = "draft"
    POSTED = "posted"
    CANCELLED = "cancelled"


class EntrySourceType(str, Enum):
    """What originated a warehouse entry."""

    MANUAL = "manual"
    PURCHASE_INVOICE = "purchase_invoice"
    DELIVERY_NOTE = "delivery_note"
    RETURN = "return"
    OPENING_BALANCE = "opening_balance"


class WarehouseEntryLine(BaseModel):
    """One received item on a warehouse entry."""

    id: str | None = None
    line_no: int = 0
    item_id: str
    quantity: float = Field(..., gt=0)
    unit_cost: float = Field(default=0.0, ge=0)
    notes: str | None = None

    @property
    def line_value(self) -> float:
        return self.quantity * self.unit_cost


class WarehouseEntryDocument(BaseModel):
    """Receipt of goods into a warehouse."""

    id: str | None = None
    warehouse_id: str
    source_type: EntrySourceType = EntrySourceType.MANUAL
    source_document_id: str | None = None  # linked invoice or delivery note
    document_date: date
    description: str | None = None
    status: DocumentStatus = DocumentStatus.DRAFT
    lines: list[WarehouseEntryLine] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    posted_at: datetime | None = None

    @property
    def total_quantity(self) -> float:
        return sum(line.quantity for line in self.lines)

    @property
    def total_value(self) -> float:
        return sum(line.line_value for line in self.lines)


class WarehouseTransferLine(BaseModel):
    """One item moved by a warehouse transfer."""

    id: str | None = None
    line_no: int = 0
    item_id: str
    quantity: float = Field(..., gt=0)
    notes: str | None = None


class WarehouseTransferDocument(BaseModel):
    """Movement of goods between two warehouses."""

    id: str | None = None
    from_warehouse_id: str
    to_warehouse_id: str
    transfer_date: date
    description: str | None = None
    status: DocumentStatus = DocumentStatus.DRAFT
    lines: list[WarehouseTransferLine] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    posted_at: datetime | None = None

    @model_validator(mode="after")
    def _check_endpoints(self) -> "WarehouseTransferDocument":
        if self.from_warehouse_id == self.to_warehouse_id:
            raise ValueError("source and destination warehouses must differ")
        return self

    def requested_by_item(self) -> dict[str, float]:
        """Aggregate requested quantity per item across all lines."""
        totals: dict[str, float] = {}
        for line in self.lines:
            totals[line.item_id] = totals.get(line.item_id, 0.0) + line.quantity
        return totals
