"""SQLite implementation of warehouse entry and transfer document storage."""

import uuid
from datetime import date, datetime

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.warehouse_document import (
    DocumentStatus,
    EntrySourceType,
    WarehouseEntryDocument,
    WarehouseEntryLine,
    WarehouseTransferDocument,
    WarehouseTransferLine,
)
from stockledger.core.exceptions import DocumentStateError
from stockledger.core.interfaces.warehouse_document_store import IWarehouseDocumentStore
from stockledger.infrastructure.storage.sqlite.connection import (
    database_errors,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


def _parse_datetime(value: str | None) -> datetime | None:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return None


class SQLiteWarehouseDocumentStore(IWarehouseDocumentStore):
    """
    SQLite storage for warehouse entries and transfers.

    ``mark_*_posted`` only flips documents still in draft; a document
    posted by another writer in the meantime raises DocumentStateError.
    """

    # Entries

    async def create_entry(
        self,
        tenant_id: str,
        header: WarehouseEntryDocument,
        lines: list[WarehouseEntryLine],
    ) -> str:
        document_id = header.id or _generate_id()
        async with database_errors("create_entry"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO warehouse_entries (
                        id, tenant_id, warehouse_id, source_type, source_document_id,
                        document_date, description, status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        document_id,
                        tenant_id,
                        header.warehouse_id,
                        header.source_type.value,
                        header.source_document_id,
                        header.document_date.isoformat(),
                        header.description,
                        header.status.value,
                        header.created_at.isoformat(),
                    ),
                )
                await conn.executemany(
                    """
                    INSERT INTO warehouse_entry_lines (
                        id, entry_id, line_no, item_id, quantity, unit_cost, notes
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            line.id or _generate_id(),
                            document_id,
                            line.line_no or idx,
                            line.item_id,
                            line.quantity,
                            line.unit_cost,
                            line.notes,
                        )
                        for idx, line in enumerate(lines, start=1)
                    ],
                )
        logger.info(
            "warehouse_entry_created",
            tenant_id=tenant_id,
            document_id=document_id,
            lines=len(lines),
        )
        return document_id

    async def get_entry(
        self, tenant_id: str, document_id: str
    ) -> WarehouseEntryDocument | None:
        """Get an entry document with its lines."""
        async with database_errors("get_entry"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM warehouse_entries WHERE tenant_id = ? AND id = ?",
                    (tenant_id, document_id),
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                cursor = await conn.execute(
                    "SELECT * FROM warehouse_entry_lines WHERE entry_id = ? ORDER BY line_no",
                    (document_id,),
                )
                line_rows = await cursor.fetchall()

        document = self._row_to_entry(row)
        document.lines = [self._row_to_entry_line(r) for r in line_rows]
        return document

    async def list_entries(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[WarehouseEntryDocument]:
        """List entry headers, newest document date first. Lines are not loaded."""
        async with database_errors("list_entries"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM warehouse_entries
                    WHERE tenant_id = ?
                    ORDER BY document_date DESC, created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (tenant_id, limit, offset),
                )
                rows = await cursor.fetchall()
        return [self._row_to_entry(row) for row in rows]

    async def mark_entry_posted(
        self, tenant_id: str, document_id: str, posted_at: datetime
    ) -> None:
        await self._mark_posted("warehouse_entries", tenant_id, document_id, posted_at)

    # Transfers

    async def create_transfer(
        self,
        tenant_id: str,
        header: WarehouseTransferDocument,
        lines: list[WarehouseTransferLine],
    ) -> str:
        document_id = header.id or _generate_id()
        async with database_errors("create_transfer"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO warehouse_transfers (
                        id, tenant_id, from_warehouse_id, to_warehouse_id,
                        transfer_date, description, status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        document_id,
                        tenant_id,
                        header.from_warehouse_id,
                        header.to_warehouse_id,
                        header.transfer_date.isoformat(),
                        header.description,
                        header.status.value,
                        header.created_at.isoformat(),
                    ),
                )
                await conn.executemany(
                    """
                    INSERT INTO warehouse_transfer_lines (
                        id, transfer_id, line_no, item_id, quantity, notes
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            line.id or _generate_id(),
                            document_id,
                            line.line_no or idx,
                            line.item_id,
                            line.quantity,
                            line.notes,
                        )
                        for idx, line in enumerate(lines, start=1)
                    ],
                )
        logger.info(
            "warehouse_transfer_created",
            tenant_id=tenant_id,
            document_id=document_id,
            lines=len(lines),
        )
        return document_id

    async def get_transfer(
        self, tenant_id: str, document_id: str
    ) -> WarehouseTransferDocument | None:
        """Get a transfer document with its lines."""
        async with database_errors("get_transfer"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM warehouse_transfers WHERE tenant_id = ? AND id = ?",
                    (tenant_id, document_id),
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                cursor = await conn.execute(
                    "SELECT * FROM warehouse_transfer_lines WHERE transfer_id = ? ORDER BY line_no",
                    (document_id,),
                )
                line_rows = await cursor.fetchall()

        document = self._row_to_transfer(row)
        document.lines = [self._row_to_transfer_line(r) for r in line_rows]
        return document

    async def list_transfers(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[WarehouseTransferDocument]:
        """List transfer headers, newest transfer date first. Lines are not loaded."""
        async with database_errors("list_transfers"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM warehouse_transfers
                    WHERE tenant_id = ?
                    ORDER BY transfer_date DESC, created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (tenant_id, limit, offset),
                )
                rows = await cursor.fetchall()
        return [self._row_to_transfer(row) for row in rows]

    async def mark_transfer_posted(
        self, tenant_id: str, document_id: str, posted_at: datetime
    ) -> None:
        await self._mark_posted("warehouse_transfers", tenant_id, document_id, posted_at)

    async def _mark_posted(
        self, table: str, tenant_id: str, document_id: str, posted_at: datetime
    ) -> None:
        async with database_errors(f"mark_posted:{table}"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"""
                    UPDATE {table} SET status = ?, posted_at = ?
                    WHERE tenant_id = ? AND id = ? AND status = ?
                    """,
                    (
                        DocumentStatus.POSTED.value,
                        posted_at.isoformat(),
                        tenant_id,
                        document_id,
                        DocumentStatus.DRAFT.value,
                    ),
                )
                updated = cursor.rowcount
        if updated == 0:
            raise DocumentStateError(document_id, "not draft", "mark posted")
        logger.info("warehouse_document_posted", table=table, document_id=document_id)

    # Row conversion

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> WarehouseEntryDocument:
        return WarehouseEntryDocument(
            id=row["id"],
            warehouse_id=row["warehouse_id"],
            source_type=EntrySourceType(row["source_type"]),
            source_document_id=row["source_document_id"],
            document_date=date.fromisoformat(row["document_date"]),
            description=row["description"],
            status=DocumentStatus(row["status"]),
            created_at=_parse_datetime(row["created_at"]) or datetime.utcnow(),
            posted_at=_parse_datetime(row["posted_at"]),
        )

    @staticmethod
    def _row_to_entry_line(row: aiosqlite.Row) -> WarehouseEntryLine:
        return WarehouseEntryLine(
            id=row["id"],
            line_no=row["line_no"],
            item_id=row["item_id"],
            quantity=float(row["quantity"]),
            unit_cost=float(row["unit_cost"] or 0.0),
            notes=row["notes"],
        )

    @staticmethod
    def _row_to_transfer(row: aiosqlite.Row) -> WarehouseTransferDocument:
        return WarehouseTransferDocument(
            id=row["id"],
            from_warehouse_id=row["from_warehouse_id"],
            to_warehouse_id=row["to_warehouse_id"],
            transfer_date=date.fromisoformat(row["transfer_date"]),
            description=row["description"],
            status=DocumentStatus(row["status"]),
            created_at=_parse_datetime(row["created_at"]) or datetime.utcnow(),
            posted_at=_parse_datetime(row["posted_at"]),
        )

    @staticmethod
    def _row_to_transfer_line(row: aiosqlite.Row) -> WarehouseTransferLine:
        return WarehouseTransferLine(
            id=row["id"],
            line_no=row["line_no"],
            item_id=row["item_id"],
            quantity=float(row["quantity"]),
            notes=row["notes"],
        )
