"""Post Warehouse Transfer Use Case - availability check, then transfer movements."""

from dataclasses import dataclass
from datetime import datetime

from stockledger.application.snapshot import SnapshotLoader
from stockledger.application.workflow import StepRunner, WorkflowStep
from stockledger.config import get_logger
from stockledger.core.entities.inventory import Movement, MovementKind
from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    WarehouseTransferDocument,
)
from stockledger.core.exceptions import (
    DocumentStateError,
    TransferDocumentNotFoundError,
)
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore
from stockledger.core.services.balance_projector import compute_balances
from stockledger.core.services.transfer_availability import (
    ItemAvailability,
    ensure_available,
)
from stockledger.core.services.valuation import ValuationEngine

logger = get_logger(__name__)


@dataclass
class PostTransferResult:
    """Result of posting a transfer."""

    document: WarehouseTransferDocument
    movements: list[Movement]
    availability: list[ItemAvailability]


class PostWarehouseTransferUseCase:
    """
    Post a draft warehouse transfer.

    Balances are projected from a fresh snapshot of the whole ledger and
    the aggregated request per item is checked against the source
    warehouse. The check is advisory: another writer can move the same
    stock between the snapshot read and the movement append, and nothing
    in this engine serializes the two.
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

    async def execute(self, tenant_id: str, document_id: str) -> PostTransferResult:
        """Execute post warehouse transfer use case."""
        logger.info(
            "post_warehouse_transfer_started", tenant_id=tenant_id, document_id=document_id
        )

        inv_store = await self._get_inventory_store()
        doc_store = await self._get_document_store()
        runner = StepRunner(
            "post_warehouse_transfer", tenant_id=tenant_id, document_id=document_id
        )

        # 1. Load and check state
        document = await runner.run(
            WorkflowStep.LOAD_DOCUMENT, doc_store.get_transfer(tenant_id, document_id)
        )
        if document is None:
            raise TransferDocumentNotFoundError(document_id)
        if document.status != DocumentStatus.DRAFT:
            raise DocumentStateError(document_id, document.status.value, "post")

        # 2. Availability against the current ledger
        snapshot = await runner.run(
            WorkflowStep.LOAD_SNAPSHOT, SnapshotLoader(inv_store).load(tenant_id)
        )
        balances = compute_balances(snapshot.items, snapshot.movements)
        items_by_id = snapshot.items_by_id
        availability = ensure_available(
            document.from_warehouse_id,
            document.requested_by_item(),
            balances,
            items_by_id,
        )

        # 3. One transfer movement per line
        movements = []
        for line in document.lines:
            item = items_by_id.get(line.item_id)
            movements.append(
                Movement(
                    item_id=line.item_id,
                    movement_type=MovementKind.TRANSFER,
                    quantity=line.quantity,
                    unit_cost=ValuationEngine.unit_cost(item) if item else 0.0,
                    movement_date=document.transfer_date,
                    from_warehouse_id=document.from_warehouse_id,
                    to_warehouse_id=document.to_warehouse_id,
                    reference=document_id,
                    notes=line.notes,
                )
            )
        movements = await runner.run(
            WorkflowStep.APPEND_MOVEMENTS, inv_store.add_movements(tenant_id, movements)
        )

        # 4. Mark posted
        posted_at = datetime.utcnow()
        await runner.run(
            WorkflowStep.MARK_POSTED,
            doc_store.mark_transfer_posted(tenant_id, document_id, posted_at),
        )

        logger.info(
            "post_warehouse_transfer_complete",
            tenant_id=tenant_id,
            document_id=document_id,
            movements=len(movements),
        )
        return PostTransferResult(
            document=document.model_copy(
                update={"status": DocumentStatus.POSTED, "posted_at": posted_at}
            ),
            movements=list(movements),
            availability=availability,
        )
