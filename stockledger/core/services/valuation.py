"""
Valuation rule shared by balances, transfer checks, reports and stock-takes.

Unit cost is the item's average cost, falling back to its list cost price,
falling back to zero. Every caller goes through ValuationEngine so the rule
cannot drift between call sites.
"""

from stockledger.core.entities.inventory import Item


class ValuationEngine:
    """Stateless cost and sale-value calculations for stock positions."""

    @staticmethod
    def unit_cost(item: Item) -> float:
        if item.average_cost is not None:
            return item.average_cost
        if item.cost_price is not None:
            return item.cost_price
        return 0.0

    @classmethod
    def position_value(cls, item: Item, quantity: float) -> float:
        return quantity * cls.unit_cost(item)

    @staticmethod
    def position_sale_value(item: Item, quantity: float) -> float:
        return quantity * item.selling_price

    @classmethod
    def position_margin(cls, item: Item, quantity: float) -> float:
        """Potential margin of a position: sale value minus cost value."""
        return cls.position_sale_value(item, quantity) - cls.position_value(item, quantity)
