"""SQLite ledger posting for warehouse entries."""

import uuid
from datetime import datetime

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Movement, MovementKind
from stockledger.core.entities.warehouse_document import WarehouseEntryDocument
from stockledger.core.exceptions import ItemNotFoundError, ValidationError
from stockledger.core.interfaces.ledger_poster import ILedgerPoster
from stockledger.infrastructure.storage.sqlite.connection import (
    database_errors,
    get_transaction,
)
from stockledger.infrastructure.storage.sqlite.inventory_store import insert_movement

logger = get_logger(__name__)


def weighted_average_cost(
    old_qty: float, old_avg: float, added_qty: float, added_cost: float
) -> float:
    """Average cost after receiving ``added_qty`` units at ``added_cost``."""
    total_qty = old_qty + added_qty
    if total_qty > 0:
        return (old_qty * old_avg + added_qty * added_cost) / total_qty
    return added_cost


class SQLiteLedgerPoster(ILedgerPoster):
    """
    Records one ``entry`` movement per document line and raises item stock.

    Movements and stock updates share a single transaction, so a failed
    line leaves neither the ledger nor any item changed. A line that would
    push a tracked item above its ``maximum_stock`` fails the whole entry.
    """

    async def post_entry(self, tenant_id: str, document: WarehouseEntryDocument) -> None:
        now = datetime.utcnow()
        async with database_errors("post_entry"):
            async with get_transaction() as conn:
                for line in document.lines:
                    cursor = await conn.execute(
                        """
                        SELECT current_stock, maximum_stock, average_cost, cost_price, track_stock
                        FROM items WHERE tenant_id = ? AND id = ?
                        """,
                        (tenant_id, line.item_id),
                    )
                    row = await cursor.fetchone()
                    if row is None:
                        raise ItemNotFoundError(line.item_id)

                    movement = Movement(
                        id=str(uuid.uuid4()),
                        item_id=line.item_id,
                        movement_type=MovementKind.ENTRY,
                        quantity=line.quantity,
                        unit_cost=line.unit_cost,
                        movement_date=document.document_date,
                        reference=document.id,
                        notes=line.notes,
                        created_at=now,
                    )
                    await insert_movement(conn, tenant_id, movement)

                    if not row["track_stock"]:
                        continue

                    old_qty = int(row["current_stock"] or 0)
                    new_qty = old_qty + int(line.quantity)
                    ceiling = row["maximum_stock"]
                    if ceiling is not None and new_qty > ceiling:
                        raise ValidationError(
                            field=f"lines[{line.item_id}].quantity",
                            message=(
                                f"receiving {line.quantity:g} would raise stock to {new_qty}, "
                                f"above maximum_stock {ceiling:g}"
                            ),
                            value=line.quantity,
                        )
                    old_avg = row["average_cost"]
                    if old_avg is None:
                        old_avg = row["cost_price"] or 0.0
                    new_avg = weighted_average_cost(
                        old_qty, float(old_avg), line.quantity, line.unit_cost
                    )
                    await conn.execute(
                        """
                        UPDATE items
                        SET current_stock = ?, average_cost = ?, updated_at = ?
                        WHERE tenant_id = ? AND id = ?
                        """,
                        (
                            new_qty,
                            new_avg,
                            now.isoformat(),
                            tenant_id,
                            line.item_id,
                        ),
                    )

        logger.info(
            "warehouse_entry_ledger_posted",
            tenant_id=tenant_id,
            document_id=document.id,
            lines=len(document.lines),
            total_quantity=document.total_quantity,
        )
