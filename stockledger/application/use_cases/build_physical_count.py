"""Build Physical Count Use Case - stock-take sheet with counts applied."""

from dataclasses import dataclass, field
from datetime import date

from stockledger.application.dto.requests import PhysicalCountSheetRequest
from stockledger.application.dto.responses import (
    CountTotalsResponse,
    PhysicalCountRowResponse,
    PhysicalCountSheetResponse,
)
from stockledger.application.snapshot import InventorySnapshot, SnapshotLoader
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.physical_count import CountTotals
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.physical_count import (
    CountedRow,
    CountFilters,
    apply_counts,
    build_candidate_rows,
    summarize,
)

logger = get_logger(__name__)


@dataclass
class PhysicalCountSheet:
    """Counted rows of one stock-take sheet."""

    cutoff_date: date
    warehouse_id: str | None
    rows: list[CountedRow] = field(default_factory=list)
    totals: CountTotals = field(default_factory=CountTotals)


def build_sheet(
    snapshot: InventorySnapshot, request: PhysicalCountSheetRequest
) -> PhysicalCountSheet:
    """Project theoretical quantities for the request and apply its counts."""
    cutoff = request.cutoff_date or date.today()
    candidates = build_candidate_rows(
        snapshot.items,
        snapshot.movements,
        cutoff,
        CountFilters(
            warehouse_id=request.warehouse_id,
            search=request.search,
            include_zero_stock=request.include_zero_stock,
        ),
        warehouses=snapshot.warehouses,
        unknown_warehouse_label=get_settings().inventory.unknown_warehouse_label,
    )
    rows = apply_counts(candidates, request.counts)
    return PhysicalCountSheet(
        cutoff_date=cutoff,
        warehouse_id=request.warehouse_id,
        rows=rows,
        totals=summarize(rows),
    )


class BuildPhysicalCountUseCase:
    """Build the stock-take sheet: theoretical stock, counted stock, variances."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._loader = SnapshotLoader(inventory_store)

    async def execute(
        self, tenant_id: str, request: PhysicalCountSheetRequest
    ) -> PhysicalCountSheet:
        snapshot = await self._loader.load(tenant_id)
        sheet = build_sheet(snapshot, request)
        logger.info(
            "physical_count_sheet_built",
            tenant_id=tenant_id,
            cutoff_date=sheet.cutoff_date.isoformat(),
            warehouse_id=sheet.warehouse_id,
            rows=len(sheet.rows),
        )
        return sheet

    @staticmethod
    def to_response(sheet: PhysicalCountSheet) -> PhysicalCountSheetResponse:
        return PhysicalCountSheetResponse(
            cutoff_date=sheet.cutoff_date,
            warehouse_id=sheet.warehouse_id,
            rows=[
                PhysicalCountRowResponse(key=row.key, **row.to_record())
                for row in sheet.rows
            ],
            totals=CountTotalsResponse(**sheet.totals.model_dump()),
        )
