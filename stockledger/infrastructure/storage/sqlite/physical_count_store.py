"""SQLite implementation of physical count session storage."""

import uuid
from datetime import date, datetime

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.physical_count import (
    PhysicalCountLine,
    PhysicalCountSession,
)
from stockledger.core.entities.warehouse_document import DocumentStatus
from stockledger.core.interfaces.physical_count_store import IPhysicalCountStore
from stockledger.infrastructure.storage.sqlite.connection import (
    database_errors,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


class SQLitePhysicalCountStore(IPhysicalCountStore):
    """SQLite storage for saved stock-takes. Lines are never updated."""

    async def create_session(
        self,
        tenant_id: str,
        header: PhysicalCountSession,
        lines: list[PhysicalCountLine],
    ) -> str:
        session_id = header.id or str(uuid.uuid4())
        async with database_errors("create_session"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO physical_counts (
                        id, tenant_id, warehouse_id, count_date, description,
                        status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        session_id,
                        tenant_id,
                        header.warehouse_id,
                        header.count_date.isoformat(),
                        header.description,
                        header.status.value,
                        header.created_at.isoformat(),
                    ),
                )
                await conn.executemany(
                    """
                    INSERT INTO physical_count_lines (
                        id, session_id, item_id, warehouse_id, theoretical_qty,
                        counted_qty, difference_qty, unit_cost,
                        total_theoretical_cost, total_counted_cost,
                        cost_difference, notes
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            line.id or str(uuid.uuid4()),
                            session_id,
                            line.item_id,
                            line.warehouse_id,
                            line.theoretical_qty,
                            line.counted_qty,
                            line.difference_qty,
                            line.unit_cost,
                            line.total_theoretical_cost,
                            line.total_counted_cost,
                            line.cost_difference,
                            line.notes,
                        )
                        for line in lines
                    ],
                )
        logger.info(
            "physical_count_saved",
            tenant_id=tenant_id,
            session_id=session_id,
            lines=len(lines),
        )
        return session_id

    async def list_sessions(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[PhysicalCountSession]:
        async with database_errors("list_sessions"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM physical_counts
                    WHERE tenant_id = ?
                    ORDER BY count_date DESC, created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (tenant_id, limit, offset),
                )
                rows = await cursor.fetchall()
        return [self._row_to_session(row) for row in rows]

    async def get_session(
        self, tenant_id: str, session_id: str
    ) -> PhysicalCountSession | None:
        async with database_errors("get_session"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM physical_counts WHERE tenant_id = ? AND id = ?",
                    (tenant_id, session_id),
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                cursor = await conn.execute(
                    "SELECT * FROM physical_count_lines WHERE session_id = ? ORDER BY rowid",
                    (session_id,),
                )
                line_rows = await cursor.fetchall()

        lines = tuple(self._row_to_line(r) for r in line_rows)
        return self._row_to_session(row, lines)

    @staticmethod
    def _row_to_session(
        row: aiosqlite.Row, lines: tuple[PhysicalCountLine, ...] = ()
    ) -> PhysicalCountSession:
        created_at = row["created_at"]
        return PhysicalCountSession(
            id=row["id"],
            warehouse_id=row["warehouse_id"],
            count_date=date.fromisoformat(row["count_date"]),
            description=row["description"],
            status=DocumentStatus(row["status"]),
            lines=lines,
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.utcnow(),
        )

    @staticmethod
    def _row_to_line(row: aiosqlite.Row) -> PhysicalCountLine:
        # Stored figures are returned as saved, never recomputed
        return PhysicalCountLine(
            id=row["id"],
            item_id=row["item_id"],
            warehouse_id=row["warehouse_id"],
            theoretical_qty=row["theoretical_qty"],
            counted_qty=row["counted_qty"],
            difference_qty=row["difference_qty"],
            unit_cost=row["unit_cost"],
            total_theoretical_cost=row["total_theoretical_cost"],
            total_counted_cost=row["total_counted_cost"],
            cost_difference=row["cost_difference"],
            notes=row["notes"],
        )
