"""
Warehouse balance projection.

Balances are never stored. Every read folds the item catalog's base stock
and the movement log into a fresh per-warehouse, per-item quantity map.
The projection is a pure function of its inputs: same snapshot, same map.
"""

from collections.abc import Iterable, Iterator, Mapping
from datetime import date

from stockledger.core.entities.inventory import Item, Movement, MovementKind

BalanceKey = tuple[str, str]  # (warehouse_id, item_id)

# Movement kinds folded into warehouse balances. Entries, exits and
# adjustments reach Item.current_stock through the external posting step
# instead; adding a kind here makes the projector fold it too.
#
# Whether adjustments should ever be folded is undecided. They carry no
# direction in this model, so they are skipped even if listed.
FOLDED_MOVEMENT_KINDS: frozenset[MovementKind] = frozenset({MovementKind.TRANSFER})

# Sign applied at the item's home warehouse for non-transfer kinds that are
# listed in FOLDED_MOVEMENT_KINDS.
_HOME_WAREHOUSE_SIGNS: dict[MovementKind, int] = {
    MovementKind.ENTRY: 1,
    MovementKind.EXIT: -1,
}


class WarehouseBalances(Mapping[BalanceKey, float]):
    """Read-only map of ``(warehouse_id, item_id) -> quantity``."""

    def __init__(self, quantities: Mapping[BalanceKey, float] | None = None):
        self._quantities: dict[BalanceKey, float] = dict(quantities or {})

    def __getitem__(self, key: BalanceKey) -> float:
        return self._quantities[key]

    def __iter__(self) -> Iterator[BalanceKey]:
        return iter(self._quantities)

    def __len__(self) -> int:
        return len(self._quantities)

    def __repr__(self) -> str:
        return f"WarehouseBalances({self._quantities!r})"

    def quantity(self, warehouse_id: str, item_id: str) -> float:
        """Projected quantity, 0 when the position has never been touched."""
        return self._quantities.get((warehouse_id, item_id), 0.0)

    def for_warehouse(self, warehouse_id: str) -> dict[str, float]:
        return {i: q for (w, i), q in self._quantities.items() if w == warehouse_id}

    def for_item(self, item_id: str) -> dict[str, float]:
        return {w: q for (w, i), q in self._quantities.items() if i == item_id}

    def total_for_item(self, item_id: str) -> float:
        return sum(q for (_, i), q in self._quantities.items() if i == item_id)

    def warehouse_ids(self) -> list[str]:
        return list(dict.fromkeys(w for w, _ in self._quantities))

    def as_nested_dict(self) -> dict[str, dict[str, float]]:
        nested: dict[str, dict[str, float]] = {}
        for (warehouse_id, item_id), qty in self._quantities.items():
            nested.setdefault(warehouse_id, {})[item_id] = qty
        return nested


def compute_balances(
    items: Iterable[Item],
    movements: Iterable[Movement],
    cutoff_date: date | None = None,
    folded_kinds: frozenset[MovementKind] = FOLDED_MOVEMENT_KINDS,
) -> WarehouseBalances:
    """
    Project per-warehouse item balances.

    Args:
        items: Catalog snapshot. Items with a home warehouse and non-zero
            ``current_stock`` seed their home position.
        movements: Ledger snapshot. Only kinds in ``folded_kinds`` dated on or
            before ``cutoff_date`` are applied.
        cutoff_date: Inclusive upper bound on ``movement_date``; None applies
            every movement.
        folded_kinds: Movement kinds to fold.

    Returns:
        The projected balances. Movements for items missing from the catalog
        are skipped.
    """
    quantities: dict[BalanceKey, float] = {}
    home_warehouses: dict[str, str | None] = {}

    for item in items:
        home_warehouses[item.id] = item.warehouse_id
        if not item.warehouse_id or item.current_stock == 0:
            continue
        key = (item.warehouse_id, item.id)
        quantities[key] = quantities.get(key, 0.0) + item.current_stock

    for movement in movements:
        if movement.movement_type not in folded_kinds:
            continue
        if cutoff_date is not None and movement.movement_date > cutoff_date:
            continue
        if movement.item_id not in home_warehouses:
            continue

        if movement.is_transfer:
            _add(quantities, movement.from_warehouse_id, movement.item_id, -movement.quantity)
            _add(quantities, movement.to_warehouse_id, movement.item_id, movement.quantity)
            continue

        sign = _HOME_WAREHOUSE_SIGNS.get(movement.movement_type)
        home = home_warehouses[movement.item_id]
        if sign is None or home is None:
            continue
        _add(quantities, home, movement.item_id, sign * movement.quantity)

    return WarehouseBalances(quantities)


def _add(
    quantities: dict[BalanceKey, float],
    warehouse_id: str | None,
    item_id: str,
    delta: float,
) -> None:
    if not warehouse_id:
        return
    key = (warehouse_id, item_id)
    quantities[key] = quantities.get(key, 0.0) + delta
