"""Save Physical Count Use Case - freeze a stock-take into an audit record."""

from datetime import datetime

from stockledger.application.dto.requests import SavePhysicalCountRequest
from stockledger.application.snapshot import SnapshotLoader
from stockledger.application.use_cases.build_physical_count import build_sheet
from stockledger.application.workflow import StepRunner, WorkflowStep
from stockledger.config import get_logger
from stockledger.core.entities.physical_count import PhysicalCountSession
from stockledger.core.entities.warehouse_document import DocumentStatus
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.physical_count_store import IPhysicalCountStore
from stockledger.core.services.physical_count import select_lines_to_save

logger = get_logger(__name__)


class SavePhysicalCountUseCase:
    """
    Save a physical count session.

    Only rows with a theoretical or counted quantity are kept. The saved
    lines are copies of the values at save time; later movements never
    change them.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        count_store: IPhysicalCountStore | None = None,
    ):
        self._loader = SnapshotLoader(inventory_store)
        self._count_store = count_store

    async def _get_count_store(self) -> IPhysicalCountStore:
        if self._count_store is None:
            from stockledger.infrastructure.storage.sqlite import get_physical_count_store

            self._count_store = await get_physical_count_store()
        return self._count_store

    async def execute(
        self, tenant_id: str, request: SavePhysicalCountRequest
    ) -> PhysicalCountSession:
        """Execute save physical count use case."""
        runner = StepRunner("save_physical_count", tenant_id=tenant_id)

        snapshot = await runner.run(
            WorkflowStep.LOAD_SNAPSHOT, self._loader.load(tenant_id)
        )
        sheet = build_sheet(snapshot, request)
        lines = select_lines_to_save(sheet.rows, request.notes)

        header = PhysicalCountSession(
            warehouse_id=request.warehouse_id,
            count_date=sheet.cutoff_date,
            description=request.description,
            status=DocumentStatus.DRAFT,
            created_at=datetime.utcnow(),
        )

        store = await self._get_count_store()
        session_id = await runner.run(
            WorkflowStep.SAVE_SESSION, store.create_session(tenant_id, header, lines)
        )

        logger.info(
            "physical_count_saved",
            tenant_id=tenant_id,
            session_id=session_id,
            lines=len(lines),
            cost_difference=round(sheet.totals.cost_difference, 2),
        )
        return header.model_copy(update={"id": session_id, "lines": tuple(lines)})
