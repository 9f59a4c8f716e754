"""Create Warehouse Entry Use Case - draft receipt of goods into a warehouse."""

from collections import defaultdict
from datetime import date, datetime

from stockledger.application.dto.requests import CreateWarehouseEntryRequest
from stockledger.application.dto.responses import (
    EntryLineResponse,
    WarehouseEntryResponse,
)
from stockledger.application.workflow import StepRunner, WorkflowStep
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.inventory import Item
from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    WarehouseEntryDocument,
    WarehouseEntryLine,
)
from stockledger.core.exceptions import (
    ItemNotFoundError,
    ValidationError,
    WarehouseNotFoundError,
)
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore
from stockledger.core.services.valuation import ValuationEngine

logger = get_logger(__name__)


class CreateWarehouseEntryUseCase:
    """Validate entry lines and persist a draft warehouse entry."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        document_store: IWarehouseDocumentStore | None = None,
    ):
        self._inventory_store = inventory_store
        self._document_store = document_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_document_store(self) -> IWarehouseDocumentStore:
        if self._document_store is None:
            from stockledger.infrastructure.storage.sqlite import (
                get_warehouse_document_store,
            )

            self._document_store = await get_warehouse_document_store()
        return self._document_store

    async def execute(
        self, tenant_id: str, request: CreateWarehouseEntryRequest
    ) -> WarehouseEntryDocument:
        """Execute create warehouse entry use case."""
        # 1. Drop blank rows before touching the store
        valid_lines = [
            line for line in request.lines if line.item_id and line.quantity > 0
        ]
        if not valid_lines:
            raise ValidationError(field="lines", message="no valid lines")

        max_lines = get_settings().inventory.max_document_lines
        if len(valid_lines) > max_lines:
            raise ValidationError(
                field="lines",
                message=f"at most {max_lines} lines per document",
                value=len(valid_lines),
            )

        logger.info(
            "create_warehouse_entry_started",
            tenant_id=tenant_id,
            warehouse_id=request.warehouse_id,
            lines=len(valid_lines),
        )

        # 2. Resolve warehouse and items
        inv_store = await self._get_inventory_store()
        warehouse = await inv_store.get_warehouse(tenant_id, request.warehouse_id)
        if warehouse is None:
            raise WarehouseNotFoundError(request.warehouse_id)

        lines: list[WarehouseEntryLine] = []
        items: dict[str, Item] = {}
        for line_no, line in enumerate(valid_lines, start=1):
            item = await inv_store.get_item(tenant_id, line.item_id)  # type: ignore[arg-type]
            if item is None:
                raise ItemNotFoundError(line.item_id)  # type: ignore[arg-type]
            items[item.id] = item
            # current_stock is whole units
            if item.track_stock and not float(line.quantity).is_integer():
                raise ValidationError(
                    field=f"lines[{line_no - 1}].quantity",
                    message="stock-tracked items are received in whole units",
                    value=line.quantity,
                )
            unit_cost = (
                line.unit_cost
                if line.unit_cost is not None
                else ValuationEngine.unit_cost(item)
            )
            lines.append(
                WarehouseEntryLine(
                    line_no=line_no,
                    item_id=item.id,
                    quantity=line.quantity,
                    unit_cost=unit_cost,
                    notes=line.notes,
                )
            )

        self._check_stock_ceilings(items, lines)

        header = WarehouseEntryDocument(
            warehouse_id=warehouse.id,
            source_type=request.source_type,
            source_document_id=request.source_document_id,
            document_date=request.document_date or date.today(),
            description=request.description,
            status=DocumentStatus.DRAFT,
            created_at=datetime.utcnow(),
        )

        # 3. Persist header, then lines as a separate payload
        doc_store = await self._get_document_store()
        runner = StepRunner("create_warehouse_entry", tenant_id=tenant_id)
        document_id = await runner.run(
            WorkflowStep.CREATE_DOCUMENT,
            doc_store.create_entry(tenant_id, header, lines),
        )

        logger.info(
            "create_warehouse_entry_complete",
            tenant_id=tenant_id,
            document_id=document_id,
            lines=len(lines),
        )
        return header.model_copy(update={"id": document_id, "lines": lines})

    @staticmethod
    def _check_stock_ceilings(
        items: dict[str, Item], lines: list[WarehouseEntryLine]
    ) -> None:
        """Reject lines that would lift a tracked item above its maximum stock."""
        received: dict[str, float] = defaultdict(float)
        for line in lines:
            received[line.item_id] += line.quantity

        for item_id, quantity in received.items():
            item = items[item_id]
            if not item.track_stock or item.maximum_stock is None:
                continue
            if item.current_stock + quantity > item.maximum_stock:
                raise ValidationError(
                    field=f"lines[{item_id}].quantity",
                    message=(
                        f"receiving {quantity:g} would raise stock to "
                        f"{item.current_stock + quantity:g}, above maximum_stock "
                        f"{item.maximum_stock:g}"
                    ),
                    value=quantity,
                )

    @staticmethod
    def to_response(document: WarehouseEntryDocument) -> WarehouseEntryResponse:
        """Convert an entry document to API response."""
        return WarehouseEntryResponse(
            id=document.id,  # type: ignore[arg-type]
            warehouse_id=document.warehouse_id,
            source_type=document.source_type.value,
            source_document_id=document.source_document_id,
            document_date=document.document_date,
            description=document.description,
            status=document.status.value,
            total_quantity=document.total_quantity,
            total_value=document.total_value,
            lines=[
                EntryLineResponse(
                    id=line.id,
                    line_no=line.line_no,
                    item_id=line.item_id,
                    quantity=line.quantity,
                    unit_cost=line.unit_cost,
                    line_value=line.line_value,
                    notes=line.notes,
                )
                for line in document.lines
            ],
            created_at=document.created_at,
            posted_at=document.posted_at,
        )
