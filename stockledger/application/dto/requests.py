"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Line payloads are deliberately permissive: lines without an item or with a
non-positive quantity are dropped by the use cases, as a document screen
would drop its blank rows.
"""

from datetime import date

from pydantic import BaseModel, Field

from stockledger.core.entities.warehouse_document import EntrySourceType


class EntryLineRequest(BaseModel):
    """Line of a warehouse entry as entered by the user."""

    item_id: str | None = Field(default=None, description="Selected item, if any")
    quantity: float = Field(default=0.0, description="Received quantity")
    unit_cost: float | None = Field(
        default=None,
        ge=0,
        description="Override of the item's unit cost (average cost, else cost price)",
    )
    notes: str | None = Field(default=None, description="Line notes")


class CreateWarehouseEntryRequest(BaseModel):
    """Request to create a draft warehouse entry."""

    warehouse_id: str = Field(..., description="Receiving warehouse")
    source_type: EntrySourceType = Field(default=EntrySourceType.MANUAL)
    source_document_id: str | None = Field(
        default=None,
        description="Linked purchase invoice or delivery note",
    )
    document_date: date | None = Field(default=None, description="Defaults to today")
    description: str | None = Field(default=None, max_length=500)
    lines: list[EntryLineRequest] = Field(default_factory=list)


class TransferLineRequest(BaseModel):
    """Line of a warehouse transfer as entered by the user."""

    item_id: str | None = Field(default=None, description="Selected item, if any")
    quantity: float = Field(default=0.0, description="Quantity to move")
    notes: str | None = Field(default=None, description="Line notes")


class CreateWarehouseTransferRequest(BaseModel):
    """Request to create a draft warehouse transfer."""

    from_warehouse_id: str = Field(..., description="Source warehouse")
    to_warehouse_id: str = Field(..., description="Destination warehouse")
    transfer_date: date | None = Field(default=None, description="Defaults to today")
    description: str | None = Field(default=None, max_length=500)
    lines: list[TransferLineRequest] = Field(default_factory=list)


class TransferAvailabilityRequest(BaseModel):
    """Preview of source-warehouse availability for a prospective transfer."""

    from_warehouse_id: str = Field(..., description="Source warehouse")
    lines: list[TransferLineRequest] = Field(default_factory=list)
    as_of: date | None = Field(default=None, description="Balance date, defaults to today")


class PhysicalCountSheetRequest(BaseModel):
    """Parameters of a stock-take sheet, optionally with counts entered so far."""

    cutoff_date: date | None = Field(default=None, description="Defaults to today")
    warehouse_id: str | None = Field(default=None, description="None for all warehouses")
    search: str = Field(default="", description="Matches SKU, name or category")
    include_zero_stock: bool = Field(default=False)
    counts: dict[str, float | str | None] = Field(
        default_factory=dict,
        description="Counted quantity by '<warehouse_id>-<item_id>' key; unset counts as 0",
    )


class SavePhysicalCountRequest(PhysicalCountSheetRequest):
    """Request to save a stock-take session."""

    description: str | None = Field(default=None, max_length=500)
    notes: dict[str, str] = Field(
        default_factory=dict,
        description="Line notes by '<warehouse_id>-<item_id>' key",
    )
