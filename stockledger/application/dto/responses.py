"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class WarehouseBalanceResponse(BaseModel):
    """Projected quantity of one item at one warehouse."""

    warehouse_id: str
    warehouse_name: str
    item_id: str
    sku: str = ""
    name: str = ""
    quantity: float
    unit_cost: float = 0.0
    total_value: float = 0.0


class WarehouseBalancesResponse(BaseModel):
    """Full balance projection as of a cutoff date."""

    cutoff_date: date | None = None
    balances: list[WarehouseBalanceResponse] = Field(default_factory=list)
    total_value: float = 0.0


class TransferAvailabilityLineResponse(BaseModel):
    """Requested vs. available stock of one item."""

    item_id: str
    name: str
    sku: str = ""
    requested: float
    available: float
    unit_cost: float = 0.0
    requested_value: float = 0.0
    sufficient: bool


class TransferAvailabilityResponse(BaseModel):
    """Availability preview for a prospective transfer."""

    from_warehouse_id: str
    as_of: date
    lines: list[TransferAvailabilityLineResponse] = Field(default_factory=list)
    all_sufficient: bool = True


class EntryLineResponse(BaseModel):
    id: str | None = None
    line_no: int
    item_id: str
    quantity: float
    unit_cost: float
    line_value: float
    notes: str | None = None


class WarehouseEntryResponse(BaseModel):
    """Warehouse entry header with its lines."""

    id: str
    warehouse_id: str
    source_type: str
    source_document_id: str | None = None
    document_date: date
    description: str | None = None
    status: str
    total_quantity: float = 0.0
    total_value: float = 0.0
    lines: list[EntryLineResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    posted_at: datetime | None = None


class WarehouseEntryListResponse(BaseModel):
    entries: list[WarehouseEntryResponse] = Field(default_factory=list)
    total: int = 0


class TransferLineResponse(BaseModel):
    id: str | None = None
    line_no: int
    item_id: str
    quantity: float
    notes: str | None = None


class WarehouseTransferResponse(BaseModel):
    """Warehouse transfer header with its lines."""

    id: str
    from_warehouse_id: str
    to_warehouse_id: str
    transfer_date: date
    description: str | None = None
    status: str
    lines: list[TransferLineResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    posted_at: datetime | None = None


class WarehouseTransferListResponse(BaseModel):
    transfers: list[WarehouseTransferResponse] = Field(default_factory=list)
    total: int = 0


class CountTotalsResponse(BaseModel):
    """Column totals of a stock-take sheet or session."""

    theoretical_qty: float = 0.0
    counted_qty: float = 0.0
    difference_qty: float = 0.0
    theoretical_cost: float = 0.0
    counted_cost: float = 0.0
    cost_difference: float = 0.0


class PhysicalCountRowResponse(BaseModel):
    """One position on a stock-take sheet."""

    key: str = Field(..., description="'<warehouse_id>-<item_id>' key for counts")
    warehouse_id: str
    warehouse_name: str
    item_id: str
    sku: str = ""
    name: str = ""
    category: str | None = None
    theoretical_qty: float
    unit_cost: float
    counted_qty: float = 0.0
    difference_qty: float = 0.0
    theoretical_cost: float = 0.0
    counted_cost: float = 0.0
    cost_difference: float = 0.0


class PhysicalCountSheetResponse(BaseModel):
    """Stock-take sheet with counts applied."""

    cutoff_date: date
    warehouse_id: str | None = None
    rows: list[PhysicalCountRowResponse] = Field(default_factory=list)
    totals: CountTotalsResponse = Field(default_factory=CountTotalsResponse)


class PhysicalCountLineResponse(BaseModel):
    id: str | None = None
    item_id: str
    warehouse_id: str
    theoretical_qty: float
    counted_qty: float
    difference_qty: float
    unit_cost: float
    total_theoretical_cost: float
    total_counted_cost: float
    cost_difference: float
    notes: str | None = None


class PhysicalCountSessionResponse(BaseModel):
    """Saved stock-take session."""

    id: str
    warehouse_id: str | None = None
    count_date: date
    description: str | None = None
    status: str
    created_at: datetime | None = None
    lines: list[PhysicalCountLineResponse] = Field(default_factory=list)
    totals: CountTotalsResponse | None = None


class PhysicalCountSessionListResponse(BaseModel):
    sessions: list[PhysicalCountSessionResponse] = Field(default_factory=list)
    total: int = 0


class ExistenceRowResponse(BaseModel):
    warehouse_id: str
    warehouse_name: str
    item_id: str
    sku: str = ""
    name: str = ""
    category: str | None = None
    quantity: float
    unit_cost: float
    total_value: float


class ExistenceReportResponse(BaseModel):
    """On-hand stock per warehouse and item."""

    cutoff_date: date | None = None
    rows: list[ExistenceRowResponse] = Field(default_factory=list)
    total_value: float = 0.0


class LowStockItemResponse(BaseModel):
    item_id: str
    sku: str = ""
    name: str = ""
    warehouse_id: str | None = None
    current_stock: float
    minimum_stock: float


class LowStockReportResponse(BaseModel):
    items: list[LowStockItemResponse] = Field(default_factory=list)
    total: int = 0


class ValuationReportResponse(BaseModel):
    """Catalog-wide stock valuation."""

    item_count: int
    total_units: float
    cost_value: float
    sale_value: float
    potential_margin: float


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    schema_version: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured details (e.g. per-item shortages)",
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
