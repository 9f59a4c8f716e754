"""Abstract interface for warehouse entry and transfer documents."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockledger.core.entities.warehouse_document import (
    WarehouseEntryDocument,
    WarehouseEntryLine,
    WarehouseTransferDocument,
    WarehouseTransferLine,
)


class IWarehouseDocumentStore(ABC):
    """Persistence for warehouse documents.

    Headers and lines travel as separate payloads; ``create_*`` returns the
    id of the new header.
    """

    @abstractmethod
    async def create_entry(
        self,
        tenant_id: str,
        header: WarehouseEntryDocument,
        lines: list[WarehouseEntryLine],
    ) -> str:
        pass

    @abstractmethod
    async def get_entry(
        self, tenant_id: str, document_id: str
    ) -> WarehouseEntryDocument | None:
        """Get an entry document with its lines."""
        pass

    @abstractmethod
    async def list_entries(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[WarehouseEntryDocument]:
        """List entry headers, newest document date first. Lines are not loaded."""
        pass

    @abstractmethod
    async def mark_entry_posted(
        self, tenant_id: str, document_id: str, posted_at: datetime
    ) -> None:
        pass

    @abstractmethod
    async def create_transfer(
        self,
        tenant_id: str,
        header: WarehouseTransferDocument,
        lines: list[WarehouseTransferLine],
    ) -> str:
        pass

    @abstractmethod
    async def get_transfer(
        self, tenant_id: str, document_id: str
    ) -> WarehouseTransferDocument | None:
        """Get a transfer document with its lines."""
        pass

    @abstractmethod
    async def list_transfers(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[WarehouseTransferDocument]:
        """List transfer headers, newest transfer date first. Lines are not loaded."""
        pass

    @abstractmethod
    async def mark_transfer_posted(
        self, tenant_id: str, document_id: str, posted_at: datetime
    ) -> None:
        pass
