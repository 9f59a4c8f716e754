"""
Stock availability checks for warehouse transfers.

The check reads a balance snapshot taken before posting. Two transfers
posted concurrently against the same item can both pass it, so the result
is advisory: nothing here serializes writers.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Item
from stockledger.core.exceptions import InsufficientStockError
from stockledger.core.services.balance_projector import WarehouseBalances
from stockledger.core.services.valuation import ValuationEngine

logger = get_logger(__name__)

# Tolerance for float noise when comparing requested and available stock
QUANTITY_EPSILON = 1e-9


@dataclass(frozen=True)
class ItemAvailability:
    """Requested vs. available stock of one item at the source warehouse."""

    item_id: str
    name: str
    sku: str
    requested: float
    available: float
    unit_cost: float

    @property
    def sufficient(self) -> bool:
        return self.requested <= self.available + QUANTITY_EPSILON

    @property
    def shortfall(self) -> float:
        return max(self.requested - self.available, 0.0)

    @property
    def requested_value(self) -> float:
        return self.requested * self.unit_cost

    def to_shortage(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "requested": self.requested,
            "available": self.available,
        }

    def to_record(self) -> dict[str, Any]:
        return {
            **self.to_shortage(),
            "sku": self.sku,
            "unit_cost": self.unit_cost,
            "requested_value": self.requested_value,
            "sufficient": self.sufficient,
        }


def assess_availability(
    from_warehouse_id: str,
    requested_by_item: Mapping[str, float],
    balances: WarehouseBalances,
    items_by_id: Mapping[str, Item],
) -> list[ItemAvailability]:
    """Compare aggregated requests against the source warehouse balances."""
    results: list[ItemAvailability] = []
    for item_id, requested in requested_by_item.items():
        item = items_by_id.get(item_id)
        results.append(
            ItemAvailability(
                item_id=item_id,
                name=(item.name if item and item.name else item_id),
                sku=item.sku if item else "",
                requested=requested,
                available=balances.quantity(from_warehouse_id, item_id),
                unit_cost=ValuationEngine.unit_cost(item) if item else 0.0,
            )
        )
    return results


def ensure_available(
    from_warehouse_id: str,
    requested_by_item: Mapping[str, float],
    balances: WarehouseBalances,
    items_by_id: Mapping[str, Item],
) -> list[ItemAvailability]:
    """
    Reject a transfer whose requests exceed the source balances.

    Raises:
        InsufficientStockError: listing every offending item with its name,
            requested and available quantities.
    """
    assessed = assess_availability(
        from_warehouse_id, requested_by_item, balances, items_by_id
    )
    shortages = [a for a in assessed if not a.sufficient]
    if shortages:
        logger.info(
            "transfer_availability_rejected",
            warehouse_id=from_warehouse_id,
            items=[s.item_id for s in shortages],
        )
        raise InsufficientStockError(
            warehouse_id=from_warehouse_id,
            shortages=[s.to_shortage() for s in shortages],
        )
    return assessed
