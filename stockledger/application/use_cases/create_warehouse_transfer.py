"""Create Warehouse Transfer Use Case - draft movement between two warehouses."""

from datetime import date, datetime

from stockledger.application.dto.requests import CreateWarehouseTransferRequest
from stockledger.application.dto.responses import (
    TransferLineResponse,
    WarehouseTransferResponse,
)
from stockledger.application.workflow import StepRunner, WorkflowStep
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    WarehouseTransferDocument,
    WarehouseTransferLine,
)
from stockledger.core.exceptions import (
    ItemNotFoundError,
    ValidationError,
    WarehouseNotFoundError,
)
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore

logger = get_logger(__name__)


class CreateWarehouseTransferUseCase:
    """Validate transfer lines and persist a draft transfer.

    Availability is not checked here; it is enforced when the transfer is
    posted.
    """

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
        self, tenant_id: str, request: CreateWarehouseTransferRequest
    ) -> WarehouseTransferDocument:
        """Execute create warehouse transfer use case."""
        if request.from_warehouse_id == request.to_warehouse_id:
            raise ValidationError(
                field="to_warehouse_id",
                message="source and destination warehouses must differ",
                value=request.to_warehouse_id,
            )

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
            "create_warehouse_transfer_started",
            tenant_id=tenant_id,
            from_warehouse_id=request.from_warehouse_id,
            to_warehouse_id=request.to_warehouse_id,
            lines=len(valid_lines),
        )

        inv_store = await self._get_inventory_store()
        for warehouse_id in (request.from_warehouse_id, request.to_warehouse_id):
            if await inv_store.get_warehouse(tenant_id, warehouse_id) is None:
                raise WarehouseNotFoundError(warehouse_id)

        lines: list[WarehouseTransferLine] = []
        for line_no, line in enumerate(valid_lines, start=1):
            item = await inv_store.get_item(tenant_id, line.item_id)  # type: ignore[arg-type]
            if item is None:
                raise ItemNotFoundError(line.item_id)  # type: ignore[arg-type]
            lines.append(
                WarehouseTransferLine(
                    line_no=line_no,
                    item_id=item.id,
                    quantity=line.quantity,
                    notes=line.notes,
                )
            )

        header = WarehouseTransferDocument(
            from_warehouse_id=request.from_warehouse_id,
            to_warehouse_id=request.to_warehouse_id,
            transfer_date=request.transfer_date or date.today(),
            description=request.description,
            status=DocumentStatus.DRAFT,
            created_at=datetime.utcnow(),
        )

        doc_store = await self._get_document_store()
        runner = StepRunner("create_warehouse_transfer", tenant_id=tenant_id)
        document_id = await runner.run(
            WorkflowStep.CREATE_DOCUMENT,
            doc_store.create_transfer(tenant_id, header, lines),
        )

        logger.info(
            "create_warehouse_transfer_complete",
            tenant_id=tenant_id,
            document_id=document_id,
            lines=len(lines),
        )
        return header.model_copy(update={"id": document_id, "lines": lines})

    @staticmethod
    def to_response(document: WarehouseTransferDocument) -> WarehouseTransferResponse:
        """Convert a transfer document to API response."""
        return WarehouseTransferResponse(
            id=document.id,  # type: ignore[arg-type]
            from_warehouse_id=document.from_warehouse_id,
            to_warehouse_id=document.to_warehouse_id,
            transfer_date=document.transfer_date,
            description=document.description,
            status=document.status.value,
            lines=[
                TransferLineResponse(
                    id=line.id,
                    line_no=line.line_no,
                    item_id=line.item_id,
                    quantity=line.quantity,
                    notes=line.notes,
                )
                for line in document.lines
            ],
            created_at=document.created_at,
            posted_at=document.posted_at,
        )
