"""Warehouse document lookups - entries and transfers with their lines."""

from stockledger.application.dto.responses import (
    WarehouseEntryListResponse,
    WarehouseTransferListResponse,
)
from stockledger.application.use_cases.create_warehouse_entry import (
    CreateWarehouseEntryUseCase,
)
from stockledger.application.use_cases.create_warehouse_transfer import (
    CreateWarehouseTransferUseCase,
)
from stockledger.core.entities.warehouse_document import (
    WarehouseEntryDocument,
    WarehouseTransferDocument,
)
from stockledger.core.exceptions import (
    EntryDocumentNotFoundError,
    TransferDocumentNotFoundError,
)
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore


class GetWarehouseDocumentsUseCase:
    def __init__(self, document_store: IWarehouseDocumentStore | None = None):
        self._document_store = document_store

    async def _get_document_store(self) -> IWarehouseDocumentStore:
        if self._document_store is None:
            from stockledger.infrastructure.storage.sqlite import (
                get_warehouse_document_store,
            )

            self._document_store = await get_warehouse_document_store()
        return self._document_store

    async def list_entries(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[WarehouseEntryDocument]:
        store = await self._get_document_store()
        return await store.list_entries(tenant_id, limit=limit, offset=offset)

    async def get_entry(self, tenant_id: str, document_id: str) -> WarehouseEntryDocument:
        store = await self._get_document_store()
        document = await store.get_entry(tenant_id, document_id)
        if document is None:
            raise EntryDocumentNotFoundError(document_id)
        return document

    async def list_transfers(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[WarehouseTransferDocument]:
        store = await self._get_document_store()
        return await store.list_transfers(tenant_id, limit=limit, offset=offset)

    async def get_transfer(
        self, tenant_id: str, document_id: str
    ) -> WarehouseTransferDocument:
        store = await self._get_document_store()
        document = await store.get_transfer(tenant_id, document_id)
        if document is None:
            raise TransferDocumentNotFoundError(document_id)
        return document

    @staticmethod
    def entry_list_response(
        documents: list[WarehouseEntryDocument],
    ) -> WarehouseEntryListResponse:
        return WarehouseEntryListResponse(
            entries=[CreateWarehouseEntryUseCase.to_response(d) for d in documents],
            total=len(documents),
        )

    @staticmethod
    def transfer_list_response(
        documents: list[WarehouseTransferDocument],
    ) -> WarehouseTransferListResponse:
        return WarehouseTransferListResponse(
            transfers=[CreateWarehouseTransferUseCase.to_response(d) for d in documents],
            total=len(documents),
        )
