"""
Physical count reconciliation.

Builds the stock-take sheet from projected balances ("theoretical"
quantities), applies what was counted on the floor and turns the result
into frozen session lines.
"""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from stockledger.core.entities.inventory import Item, Movement, Warehouse
from stockledger.core.entities.physical_count import CountTotals, PhysicalCountLine
from stockledger.core.exceptions import ValidationError
from stockledger.core.services.balance_projector import compute_balances
from stockledger.core.services.valuation import ValuationEngine


@dataclass(frozen=True)
class CountFilters:
    """Restrictions applied when building the count sheet."""

    warehouse_id: str | None = None  # None means all warehouses
    search: str = ""
    include_zero_stock: bool = False


@dataclass(frozen=True)
class CountCandidateRow:
    """One (warehouse, item) position to be counted."""

    warehouse_id: str
    warehouse_name: str
    item_id: str
    sku: str
    name: str
    category: str | None
    theoretical_qty: float
    unit_cost: float

    @property
    def key(self) -> str:
        return count_key(self.warehouse_id, self.item_id)

    def to_record(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CountedRow(CountCandidateRow):
    """A candidate row with its counted quantity and variances."""

    counted_qty: float = 0.0
    difference_qty: float = 0.0
    theoretical_cost: float = 0.0
    counted_cost: float = 0.0
    cost_difference: float = 0.0

    def to_line(self, notes: str | None = None) -> PhysicalCountLine:
        return PhysicalCountLine(
            item_id=self.item_id,
            warehouse_id=self.warehouse_id,
            theoretical_qty=self.theoretical_qty,
            counted_qty=self.counted_qty,
            difference_qty=self.difference_qty,
            unit_cost=self.unit_cost,
            total_theoretical_cost=self.theoretical_cost,
            total_counted_cost=self.counted_cost,
            cost_difference=self.cost_difference,
            notes=notes,
        )


def count_key(warehouse_id: str, item_id: str) -> str:
    """Key used to address a position in a counts mapping."""
    return f"{warehouse_id}-{item_id}"


PositionKey = str | tuple[str, str]


def shared_keys(rows: Iterable[CountCandidateRow]) -> set[str]:
    """Joined keys that more than one (warehouse, item) position produces."""
    owners: dict[str, tuple[str, str]] = {}
    shared: set[str] = set()
    for row in rows:
        position = (row.warehouse_id, row.item_id)
        if owners.setdefault(row.key, position) != position:
            shared.add(row.key)
    return shared


def lookup_position(
    mapping: Mapping[PositionKey, Any],
    row: CountCandidateRow,
    ambiguous: set[str],
    field: str,
) -> Any:
    """
    Value a mapping holds for the row's position.

    A ``(warehouse_id, item_id)`` tuple key always wins. The joined string key
    is refused when ids containing ``-`` make it name more than one position.
    """
    position = (row.warehouse_id, row.item_id)
    if position in mapping:
        return mapping[position]
    if row.key not in mapping:
        return None
    if row.key in ambiguous:
        raise ValidationError(
            field=f"{field}[{row.key}]",
            message="key matches more than one position; address it by (warehouse_id, item_id)",
        )
    return mapping[row.key]


def matches_search(term: str, sku: str, name: str, category: str | None) -> bool:
    """Case-insensitive substring match over SKU, name and category."""
    needle = term.strip().lower()
    if not needle:
        return True
    return (
        needle in sku.lower()
        or needle in name.lower()
        or needle in (category or "").lower()
    )


def build_candidate_rows(
    items: Iterable[Item],
    movements: Iterable[Movement],
    cutoff_date: date | None,
    filters: CountFilters | None = None,
    warehouses: Iterable[Warehouse] = (),
    unknown_warehouse_label: str = "Warehouse",
) -> list[CountCandidateRow]:
    """
    Build the count sheet for a cutoff date.

    Args:
        items: Catalog snapshot.
        movements: Ledger snapshot.
        cutoff_date: Balances are projected as of this date (inclusive).
        filters: Warehouse restriction, search text and zero-stock toggle.
        warehouses: Used to resolve warehouse names.
        unknown_warehouse_label: Name shown for warehouses not in ``warehouses``.

    Returns:
        Rows ordered by warehouse name, item name and SKU.
    """
    filters = filters or CountFilters()
    items = list(items)
    items_by_id = {item.id: item for item in items}
    names = {w.id: w.name for w in warehouses}

    balances = dict(compute_balances(items, movements, cutoff_date))
    if filters.include_zero_stock:
        # Items never touched by stock or transfers still get a line at home
        for item in items:
            if item.warehouse_id:
                balances.setdefault((item.warehouse_id, item.id), 0.0)

    rows: list[CountCandidateRow] = []
    for (warehouse_id, item_id), qty in balances.items():
        if filters.warehouse_id is not None and warehouse_id != filters.warehouse_id:
            continue
        if qty == 0 and not filters.include_zero_stock:
            continue
        item = items_by_id.get(item_id)
        if item is None:
            continue
        if not matches_search(filters.search, item.sku, item.name, item.category):
            continue
        rows.append(
            CountCandidateRow(
                warehouse_id=warehouse_id,
                warehouse_name=names.get(warehouse_id, unknown_warehouse_label),
                item_id=item_id,
                sku=item.sku,
                name=item.name,
                category=item.category,
                theoretical_qty=qty,
                unit_cost=ValuationEngine.unit_cost(item),
            )
        )

    rows.sort(key=lambda r: (r.warehouse_name.lower(), r.name.lower(), r.sku))
    return rows


def parse_counted_qty(key: str, value: float | str | None) -> float:
    """Interpret a user-entered count. Unset or blank counts as 0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
        try:
            value = float(value)
        except ValueError:
            raise ValidationError(field=f"counts[{key}]", message="not a number", value=value)
    qty = float(value)
    if qty < 0:
        raise ValidationError(field=f"counts[{key}]", message="must not be negative", value=qty)
    return qty


def apply_counts(
    rows: Iterable[CountCandidateRow],
    counts_by_key: Mapping[PositionKey, float | str | None],
) -> list[CountedRow]:
    """Attach counted quantities and compute quantity and cost variances."""
    rows = list(rows)
    ambiguous = shared_keys(rows)
    counted_rows: list[CountedRow] = []
    for row in rows:
        counted = parse_counted_qty(
            row.key, lookup_position(counts_by_key, row, ambiguous, "counts")
        )
        difference = counted - row.theoretical_qty
        counted_rows.append(
            CountedRow(
                warehouse_id=row.warehouse_id,
                warehouse_name=row.warehouse_name,
                item_id=row.item_id,
                sku=row.sku,
                name=row.name,
                category=row.category,
                theoretical_qty=row.theoretical_qty,
                unit_cost=row.unit_cost,
                counted_qty=counted,
                difference_qty=difference,
                theoretical_cost=row.theoretical_qty * row.unit_cost,
                counted_cost=counted * row.unit_cost,
                cost_difference=difference * row.unit_cost,
            )
        )
    return counted_rows


def select_lines_to_save(
    rows: Iterable[CountedRow],
    notes_by_key: Mapping[PositionKey, str] | None = None,
) -> list[PhysicalCountLine]:
    """
    Keep rows that carry any quantity and freeze them into session lines.

    Raises:
        ValidationError: when no row has a theoretical or counted quantity.
    """
    notes_by_key = notes_by_key or {}
    rows = list(rows)
    ambiguous = shared_keys(rows)
    lines = [
        row.to_line(notes=lookup_position(notes_by_key, row, ambiguous, "notes"))
        for row in rows
        if row.theoretical_qty != 0 or row.counted_qty != 0
    ]
    if not lines:
        raise ValidationError(field="lines", message="no lines with quantities to save")
    return lines


def summarize(rows: Iterable[CountedRow]) -> CountTotals:
    rows = list(rows)
    return CountTotals(
        theoretical_qty=sum(r.theoretical_qty for r in rows),
        counted_qty=sum(r.counted_qty for r in rows),
        difference_qty=sum(r.difference_qty for r in rows),
        theoretical_cost=sum(r.theoretical_cost for r in rows),
        counted_cost=sum(r.counted_cost for r in rows),
        cost_difference=sum(r.cost_difference for r in rows),
    )
