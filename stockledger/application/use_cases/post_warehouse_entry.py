"""Post Warehouse Entry Use Case - one-way draft to posted transition."""

from datetime import datetime

from stockledger.application.workflow import StepRunner, WorkflowStep
from stockledger.config import get_logger
from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    WarehouseEntryDocument,
)
from stockledger.core.exceptions import DocumentStateError, EntryDocumentNotFoundError
from stockledger.core.interfaces.ledger_poster import ILedgerPoster
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore

logger = get_logger(__name__)


class PostWarehouseEntryUseCase:
    """
    Post a draft warehouse entry.

    The ledger poster runs first. If it fails the document is left in
    draft. If marking the document posted fails afterwards, the error names
    ``post_ledger`` as completed: the stock was applied and nothing is
    rolled back or retried.
    """

    def __init__(
        self,
        document_store: IWarehouseDocumentStore | None = None,
        ledger_poster: ILedgerPoster | None = None,
    ):
        self._document_store = document_store
        self._ledger_poster = ledger_poster

    async def _get_document_store(self) -> IWarehouseDocumentStore:
        if self._document_store is None:
            from stockledger.infrastructure.storage.sqlite import (
                get_warehouse_document_store,
            )

            self._document_store = await get_warehouse_document_store()
        return self._document_store

    async def _get_ledger_poster(self) -> ILedgerPoster:
        if self._ledger_poster is None:
            from stockledger.infrastructure.storage.sqlite import get_ledger_poster

            self._ledger_poster = await get_ledger_poster()
        return self._ledger_poster

    async def execute(self, tenant_id: str, document_id: str) -> WarehouseEntryDocument:
        """Execute post warehouse entry use case."""
        logger.info("post_warehouse_entry_started", tenant_id=tenant_id, document_id=document_id)

        doc_store = await self._get_document_store()
        poster = await self._get_ledger_poster()
        runner = StepRunner(
            "post_warehouse_entry", tenant_id=tenant_id, document_id=document_id
        )

        document = await runner.run(
            WorkflowStep.LOAD_DOCUMENT, doc_store.get_entry(tenant_id, document_id)
        )
        if document is None:
            raise EntryDocumentNotFoundError(document_id)
        if document.status != DocumentStatus.DRAFT:
            raise DocumentStateError(document_id, document.status.value, "post")

        await runner.run(WorkflowStep.POST_LEDGER, poster.post_entry(tenant_id, document))

        posted_at = datetime.utcnow()
        await runner.run(
            WorkflowStep.MARK_POSTED,
            doc_store.mark_entry_posted(tenant_id, document_id, posted_at),
        )

        logger.info(
            "post_warehouse_entry_complete",
            tenant_id=tenant_id,
            document_id=document_id,
            lines=len(document.lines),
        )
        return document.model_copy(
            update={"status": DocumentStatus.POSTED, "posted_at": posted_at}
        )
