"""Inventory Reports Use Case - balances, existence, low stock and valuation."""

from datetime import date

from stockledger.application.dto.responses import (
    ExistenceReportResponse,
    ExistenceRowResponse,
    LowStockItemResponse,
    LowStockReportResponse,
    ValuationReportResponse,
    WarehouseBalanceResponse,
    WarehouseBalancesResponse,
)
from stockledger.application.snapshot import SnapshotLoader
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.inventory import Item
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.balance_projector import compute_balances
from stockledger.core.services.reports import (
    ExistenceRow,
    ValuationSummary,
    build_existence_report,
    low_stock_items,
    summarize_valuation,
)
from stockledger.core.services.valuation import ValuationEngine

logger = get_logger(__name__)


class InventoryReportsUseCase:
    """Read-side reports. Every call projects from a freshly loaded snapshot."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._loader = SnapshotLoader(inventory_store)

    async def balances(
        self,
        tenant_id: str,
        cutoff_date: date | None = None,
        warehouse_id: str | None = None,
    ) -> WarehouseBalancesResponse:
        """Projected balance of every (warehouse, item) position."""
        snapshot = await self._loader.load(tenant_id)
        balances = compute_balances(snapshot.items, snapshot.movements, cutoff_date)
        items_by_id = snapshot.items_by_id
        warehouses = snapshot.warehouses_by_id
        fallback = get_settings().inventory.unknown_warehouse_label

        rows: list[WarehouseBalanceResponse] = []
        for (wid, item_id), qty in balances.items():
            if warehouse_id is not None and wid != warehouse_id:
                continue
            item = items_by_id.get(item_id)
            if item is None:
                continue
            warehouse = warehouses.get(wid)
            rows.append(
                WarehouseBalanceResponse(
                    warehouse_id=wid,
                    warehouse_name=warehouse.name if warehouse else fallback,
                    item_id=item_id,
                    sku=item.sku,
                    name=item.name,
                    quantity=qty,
                    unit_cost=ValuationEngine.unit_cost(item),
                    total_value=ValuationEngine.position_value(item, qty),
                )
            )
        rows.sort(key=lambda r: (r.warehouse_name.lower(), r.name.lower(), r.sku))

        logger.debug("balances_projected", tenant_id=tenant_id, positions=len(rows))
        return WarehouseBalancesResponse(
            cutoff_date=cutoff_date,
            balances=rows,
            total_value=sum(r.total_value for r in rows),
        )

    async def existence(
        self,
        tenant_id: str,
        cutoff_date: date | None = None,
        warehouse_id: str | None = None,
        search: str = "",
    ) -> list[ExistenceRow]:
        snapshot = await self._loader.load(tenant_id)
        return build_existence_report(
            snapshot.items,
            snapshot.movements,
            snapshot.warehouses,
            cutoff_date=cutoff_date,
            warehouse_id=warehouse_id,
            search=search,
            unknown_warehouse_label=get_settings().inventory.unknown_warehouse_label,
        )

    async def low_stock(self, tenant_id: str) -> list[Item]:
        snapshot = await self._loader.load(tenant_id)
        return low_stock_items(snapshot.items)

    async def valuation(self, tenant_id: str) -> ValuationSummary:
        snapshot = await self._loader.load(tenant_id)
        return summarize_valuation(snapshot.items)

    @staticmethod
    def existence_response(
        rows: list[ExistenceRow], cutoff_date: date | None = None
    ) -> ExistenceReportResponse:
        return ExistenceReportResponse(
            cutoff_date=cutoff_date,
            rows=[ExistenceRowResponse(**row.to_record()) for row in rows],
            total_value=sum(row.total_value for row in rows),
        )

    @staticmethod
    def low_stock_response(items: list[Item]) -> LowStockReportResponse:
        return LowStockReportResponse(
            items=[
                LowStockItemResponse(
                    item_id=item.id,
                    sku=item.sku,
                    name=item.name,
                    warehouse_id=item.warehouse_id,
                    current_stock=item.current_stock,
                    minimum_stock=item.minimum_stock,
                )
                for item in items
            ],
            total=len(items),
        )

    @staticmethod
    def valuation_response(summary: ValuationSummary) -> ValuationReportResponse:
        return ValuationReportResponse(**summary.to_record())
