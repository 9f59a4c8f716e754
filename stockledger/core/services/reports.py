"""
Inventory reports built on the balance projection.

Row types expose ``to_record()`` so the same data feeds tables and
spreadsheet/PDF exporters.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from stockledger.core.entities.inventory import Item, Movement, Warehouse
from stockledger.core.services.balance_projector import compute_balances
from stockledger.core.services.physical_count import matches_search
from stockledger.core.services.valuation import ValuationEngine


@dataclass(frozen=True)
class ExistenceRow:
    """On-hand stock of one item at one warehouse, valued at unit cost."""

    warehouse_id: str
    warehouse_name: str
    item_id: str
    sku: str
    name: str
    category: str | None
    quantity: float
    unit_cost: float
    total_value: float

    def to_record(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValuationSummary:
    """Catalog-wide stock totals based on each item's current stock."""

    item_count: int
    total_units: float
    cost_value: float
    sale_value: float

    @property
    def potential_margin(self) -> float:
        return self.sale_value - self.cost_value

    def to_record(self) -> dict[str, Any]:
        return {**asdict(self), "potential_margin": self.potential_margin}


def build_existence_report(
    items: Iterable[Item],
    movements: Iterable[Movement],
    warehouses: Iterable[Warehouse] = (),
    cutoff_date: date | None = None,
    warehouse_id: str | None = None,
    search: str = "",
    unknown_warehouse_label: str = "Warehouse",
) -> list[ExistenceRow]:
    """List positions with positive projected stock as of ``cutoff_date``."""
    items = list(items)
    items_by_id = {item.id: item for item in items}
    names = {w.id: w.name for w in warehouses}
    balances = compute_balances(items, movements, cutoff_date)

    rows: list[ExistenceRow] = []
    for (wid, item_id), qty in balances.items():
        if qty <= 0:
            continue
        if warehouse_id is not None and wid != warehouse_id:
            continue
        item = items_by_id.get(item_id)
        if item is None or not matches_search(search, item.sku, item.name, item.category):
            continue
        rows.append(
            ExistenceRow(
                warehouse_id=wid,
                warehouse_name=names.get(wid, unknown_warehouse_label),
                item_id=item_id,
                sku=item.sku,
                name=item.name,
                category=item.category,
                quantity=qty,
                unit_cost=ValuationEngine.unit_cost(item),
                total_value=ValuationEngine.position_value(item, qty),
            )
        )

    rows.sort(key=lambda r: (r.warehouse_name.lower(), r.name.lower(), r.sku))
    return rows


def low_stock_items(items: Iterable[Item]) -> list[Item]:
    """Active, stock-tracked items at or below their minimum stock."""
    return [
        item
        for item in items
        if item.is_active and item.track_stock and item.is_low_stock
    ]


def summarize_valuation(items: Iterable[Item]) -> ValuationSummary:
    items = [item for item in items if item.track_stock]
    return ValuationSummary(
        item_count=len(items),
        total_units=float(sum(item.current_stock for item in items)),
        cost_value=sum(
            ValuationEngine.position_value(item, item.current_stock) for item in items
        ),
        sale_value=sum(
            ValuationEngine.position_sale_value(item, item.current_stock) for item in items
        ),
    )
