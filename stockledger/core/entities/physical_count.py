"""Physical count (stock-take) entities.

A saved session is a point-in-time audit record: its lines are frozen and
never follow later changes to items or movements.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from stockledger.core.entities.warehouse_document import DocumentStatus


class CountTotals(BaseModel):
    """Column totals over a set of counted rows."""

    model_config = ConfigDict(frozen=True)

    theoretical_qty: float = 0.0
    counted_qty: float = 0.0
    difference_qty: float = 0.0
    theoretical_cost: float = 0.0
    counted_cost: float = 0.0
    cost_difference: float = 0.0


class PhysicalCountLine(BaseModel):
    """Frozen result of counting one item at one warehouse."""

    model_config = ConfigDict(frozen=True)

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

    @classmethod
    def from_counts(
        cls,
        item_id: str,
        warehouse_id: str,
        theoretical_qty: float,
        counted_qty: float,
        unit_cost: float,
        notes: str | None = None,
    ) -> "PhysicalCountLine":
        difference = counted_qty - theoretical_qty
        return cls(
            item_id=item_id,
            warehouse_id=warehouse_id,
            theoretical_qty=theoretical_qty,
            counted_qty=counted_qty,
            difference_qty=difference,
            unit_cost=unit_cost,
            total_theoretical_cost=theoretical_qty * unit_cost,
            total_counted_cost=counted_qty * unit_cost,
            cost_difference=difference * unit_cost,
            notes=notes,
        )


class PhysicalCountSession(BaseModel):
    """Saved stock-take: header plus its frozen lines."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    warehouse_id: str | None = None  # None means all warehouses
    count_date: date
    description: str | None = None
    status: DocumentStatus = DocumentStatus.DRAFT
    lines: tuple[PhysicalCountLine, ...] = ()
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def covers_all_warehouses(self) -> bool:
        return self.warehouse_id is None

    @property
    def totals(self) -> CountTotals:
        return CountTotals(
            theoretical_qty=sum(line.theoretical_qty for line in self.lines),
            counted_qty=sum(line.counted_qty for line in self.lines),
            difference_qty=sum(line.difference_qty for line in self.lines),
            theoretical_cost=sum(line.total_theoretical_cost for line in self.lines),
            counted_cost=sum(line.total_counted_cost for line in self.lines),
            cost_difference=sum(line.cost_difference for line in self.lines),
        )
