"""Inventory balance and report endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from stockledger.api.dependencies import (
    get_delete_warehouse_use_case,
    get_inventory_reports_use_case,
    get_tenant_id,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    ExistenceReportResponse,
    LowStockReportResponse,
    ValuationReportResponse,
    WarehouseBalancesResponse,
)
from stockledger.application.use_cases import DeleteWarehouseUseCase, InventoryReportsUseCase

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get(
    "/balances",
    response_model=WarehouseBalancesResponse,
)
async def get_balances(
    cutoff_date: date | None = None,
    warehouse_id: str | None = None,
    tenant_id: str = Depends(get_tenant_id),
    use_case: InventoryReportsUseCase = Depends(get_inventory_reports_use_case),
) -> WarehouseBalancesResponse:
    """Projected per-warehouse balances, optionally as of a cutoff date."""
    return await use_case.balances(tenant_id, cutoff_date, warehouse_id)


@router.get(
    "/reports/existence",
    response_model=ExistenceReportResponse,
)
async def get_existence_report(
    cutoff_date: date | None = None,
    warehouse_id: str | None = None,
    search: str = Query(default="", max_length=100),
    tenant_id: str = Depends(get_tenant_id),
    use_case: InventoryReportsUseCase = Depends(get_inventory_reports_use_case),
) -> ExistenceReportResponse:
    """Positions with stock on hand, valued at unit cost."""
    rows = await use_case.existence(tenant_id, cutoff_date, warehouse_id, search)
    return use_case.existence_response(rows, cutoff_date)


@router.get(
    "/reports/low-stock",
    response_model=LowStockReportResponse,
)
async def get_low_stock_report(
    tenant_id: str = Depends(get_tenant_id),
    use_case: InventoryReportsUseCase = Depends(get_inventory_reports_use_case),
) -> LowStockReportResponse:
    """Active items at or below their minimum stock."""
    items = await use_case.low_stock(tenant_id)
    return use_case.low_stock_response(items)


@router.get(
    "/reports/valuation",
    response_model=ValuationReportResponse,
)
async def get_valuation_report(
    tenant_id: str = Depends(get_tenant_id),
    use_case: InventoryReportsUseCase = Depends(get_inventory_reports_use_case),
) -> ValuationReportResponse:
    """Cost and sale value of all stock on hand."""
    summary = await use_case.valuation(tenant_id)
    return use_case.valuation_response(summary)


@router.delete(
    "/warehouses/{warehouse_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Warehouse not found"},
        409: {"model": ErrorResponse, "description": "Warehouse still in use"},
    },
)
async def delete_warehouse(
    warehouse_id: str,
    tenant_id: str = Depends(get_tenant_id),
    use_case: DeleteWarehouseUseCase = Depends(get_delete_warehouse_use_case),
) -> None:
    """Delete a warehouse no item uses as its home warehouse."""
    await use_case.execute(tenant_id, warehouse_id)
