"""Inventory domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MovementKind(str, Enum):
    """Types of stock movements."""

    ENTRY = "entry"
    EXIT = "exit"
    TRANSFER = "transfer"
    ADJUSTMENT = "adjustment"


class Warehouse(BaseModel):
    """A physical stock location."""

    id: str
    name: str
    code: str | None = None
    location: str | None = None
    is_active: bool = True

    @model_validator(mode="after")
    def _derive_code(self) -> "Warehouse":
        if not self.code:
            self.code = derive_warehouse_code(self.name)
        return self


def derive_warehouse_code(name: str | None) -> str:
    """Short code used when none is given: first 8 chars of the name, upper-cased."""
    return (name or "WH").strip()[:8].upper()


class Item(BaseModel):
    """A catalog item with its stock level, costs and home warehouse."""

    id: str
    sku: str = ""
    name: str = ""
    category: str | None = None
    warehouse_id: str | None = None  # home warehouse
    unit_of_measure: str | None = None
    current_stock: int = Field(default=0, ge=0)
    minimum_stock: float = 0.0
    maximum_stock: float | None = None
    cost_price: float | None = None
    selling_price: float = 0.0
    average_cost: float | None = None
    is_active: bool = True
    track_stock: bool = True

    @model_validator(mode="after")
    def _check_stock_ceiling(self) -> "Item":
        if (
            self.track_stock
            and self.maximum_stock is not None
            and self.maximum_stock < self.current_stock
        ):
            raise ValueError(
                f"maximum_stock ({self.maximum_stock}) is below "
                f"current_stock ({self.current_stock})"
            )
        return self

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.minimum_stock


class Movement(BaseModel):
    """Immutable stock ledger entry.

    Only ``transfer`` movements carry warehouse endpoints; both must be set
    and must differ.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    item_id: str
    movement_type: MovementKind
    quantity: float = Field(..., gt=0)
    unit_cost: float = 0.0
    movement_date: date
    from_warehouse_id: str | None = None
    to_warehouse_id: str | None = None
    reference: str | None = None  # originating document id
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def _check_endpoints(self) -> "Movement":
        if self.movement_type == MovementKind.TRANSFER:
            if not self.from_warehouse_id or not self.to_warehouse_id:
                raise ValueError("transfer movements need both warehouse endpoints")
            if self.from_warehouse_id == self.to_warehouse_id:
                raise ValueError("transfer endpoints must differ")
        elif self.from_warehouse_id or self.to_warehouse_id:
            raise ValueError(
                f"{self.movement_type.value} movements do not carry warehouse endpoints"
            )
        return self

    @property
    def is_transfer(self) -> bool:
        return self.movement_type == MovementKind.TRANSFER
