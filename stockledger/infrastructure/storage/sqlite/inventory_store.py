"""SQLite implementation of the item catalog and movement ledger."""

import uuid
from datetime import date, datetime

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Item, Movement, MovementKind, Warehouse
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.infrastructure.storage.sqlite.connection import (
    database_errors,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


def _parse_date(value: str | None, default: date | None = None) -> date | None:
    if value:
        try:
            return date.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return default


def _parse_datetime(value: str | None) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


class SQLiteInventoryStore(IInventoryStore):
    """
    SQLite implementation of item, warehouse and stock movement storage.

    Rows that do not form a valid entity are logged and skipped, so one
    bad record never hides the rest of a tenant's catalog.
    """

    # Items

    async def list_items(self, tenant_id: str) -> list[Item]:
        """List all items of a tenant, ordered by name."""
        async with database_errors("list_items"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM items WHERE tenant_id = ? ORDER BY name, sku",
                    (tenant_id,),
                )
                rows = await cursor.fetchall()
        return self._convert_rows(rows, self._row_to_item, "item")

    async def get_item(self, tenant_id: str, item_id: str) -> Item | None:
        """Get item by ID."""
        async with database_errors("get_item"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM items WHERE tenant_id = ? AND id = ?",
                    (tenant_id, item_id),
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_item(row)

    async def create_item(self, tenant_id: str, item: Item) -> Item:
        """Create a catalog item."""
        item_id = item.id or _generate_id()
        now = datetime.utcnow().isoformat()
        async with database_errors("create_item"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO items (
                        id, tenant_id, sku, name, category, warehouse_id,
                        unit_of_measure, current_stock, minimum_stock, maximum_stock,
                        cost_price, selling_price, average_cost, is_active,
                        track_stock, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item_id,
                        tenant_id,
                        item.sku,
                        item.name,
                        item.category,
                        item.warehouse_id,
                        item.unit_of_measure,
                        item.current_stock,
                        item.minimum_stock,
                        item.maximum_stock,
                        item.cost_price,
                        item.selling_price,
                        item.average_cost,
                        int(item.is_active),
                        int(item.track_stock),
                        now,
                        now,
                    ),
                )
        logger.info("item_created", tenant_id=tenant_id, item_id=item_id, sku=item.sku)
        return item.model_copy(update={"id": item_id})

    # Warehouses

    async def list_warehouses(self, tenant_id: str) -> list[Warehouse]:
        """List all warehouses of a tenant, ordered by name."""
        async with database_errors("list_warehouses"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM warehouses WHERE tenant_id = ? ORDER BY name",
                    (tenant_id,),
                )
                rows = await cursor.fetchall()
        return self._convert_rows(rows, self._row_to_warehouse, "warehouse")

    async def get_warehouse(self, tenant_id: str, warehouse_id: str) -> Warehouse | None:
        """Get warehouse by ID."""
        async with database_errors("get_warehouse"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM warehouses WHERE tenant_id = ? AND id = ?",
                    (tenant_id, warehouse_id),
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_warehouse(row)

    async def create_warehouse(self, tenant_id: str, warehouse: Warehouse) -> Warehouse:
        """Create a warehouse."""
        warehouse_id = warehouse.id or _generate_id()
        async with database_errors("create_warehouse"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO warehouses (id, tenant_id, name, code, location, is_active)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        warehouse_id,
                        tenant_id,
                        warehouse.name,
                        warehouse.code,
                        warehouse.location,
                        int(warehouse.is_active),
                    ),
                )
        logger.info("warehouse_created", tenant_id=tenant_id, warehouse_id=warehouse_id)
        return warehouse.model_copy(update={"id": warehouse_id})

    async def delete_warehouse(self, tenant_id: str, warehouse_id: str) -> bool:
        """Delete a warehouse. Returns False when it did not exist."""
        async with database_errors("delete_warehouse"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM warehouses WHERE tenant_id = ? AND id = ?",
                    (tenant_id, warehouse_id),
                )
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("warehouse_row_deleted", tenant_id=tenant_id, warehouse_id=warehouse_id)
        return deleted

    # Movements

    async def list_movements(self, tenant_id: str) -> list[Movement]:
        """List all movements of a tenant, newest first."""
        async with database_errors("list_movements"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM stock_movements
                    WHERE tenant_id = ?
                    ORDER BY movement_date DESC, created_at DESC
                    """,
                    (tenant_id,),
                )
                rows = await cursor.fetchall()
        return self._convert_rows(rows, self._row_to_movement, "movement")

    async def add_movement(self, tenant_id: str, movement: Movement) -> Movement:
        """Append a movement to the ledger."""
        stored = await self.add_movements(tenant_id, [movement])
        return stored[0]

    async def add_movements(
        self, tenant_id: str, movements: list[Movement]
    ) -> list[Movement]:
        """Append several movements in one transaction."""
        stored: list[Movement] = []
        async with database_errors("add_movements"):
            async with get_transaction() as conn:
                for movement in movements:
                    movement = movement.model_copy(
                        update={"id": movement.id or _generate_id()}
                    )
                    await insert_movement(conn, tenant_id, movement)
                    stored.append(movement)
        logger.info(
            "stock_movements_recorded",
            tenant_id=tenant_id,
            count=len(stored),
            types=sorted({m.movement_type.value for m in stored}),
        )
        return stored

    # Row conversion

    @staticmethod
    def _convert_rows(rows, converter, kind: str) -> list:
        converted = []
        for row in rows:
            try:
                converted.append(converter(row))
            except ValueError as e:  # pydantic.ValidationError included
                logger.warning(f"invalid_{kind}_row_skipped", row_id=row["id"], error=str(e))
        return converted

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> Item:
        """Convert a database row to an Item entity."""
        return Item(
            id=row["id"],
            sku=row["sku"] or "",
            name=row["name"] or "",
            category=row["category"],
            warehouse_id=row["warehouse_id"],
            unit_of_measure=row["unit_of_measure"],
            current_stock=int(row["current_stock"] or 0),
            minimum_stock=float(row["minimum_stock"] or 0.0),
            maximum_stock=row["maximum_stock"],
            cost_price=row["cost_price"],
            selling_price=float(row["selling_price"] or 0.0),
            average_cost=row["average_cost"],
            is_active=bool(row["is_active"]),
            track_stock=bool(row["track_stock"]),
        )

    @staticmethod
    def _row_to_warehouse(row: aiosqlite.Row) -> Warehouse:
        """Convert a database row to a Warehouse entity."""
        return Warehouse(
            id=row["id"],
            name=row["name"],
            code=row["code"],
            location=row["location"],
            is_active=bool(row["is_active"]),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> Movement:
        """Convert a database row to a Movement entity."""
        movement_date = _parse_date(row["movement_date"])
        if movement_date is None:
            raise ValueError(f"unreadable movement_date {row['movement_date']!r}")
        return Movement(
            id=row["id"],
            item_id=row["item_id"],
            movement_type=MovementKind(row["movement_type"]),
            quantity=float(row["quantity"]),
            unit_cost=float(row["unit_cost"] or 0.0),
            movement_date=movement_date,
            from_warehouse_id=row["from_warehouse_id"],
            to_warehouse_id=row["to_warehouse_id"],
            reference=row["reference"],
            notes=row["notes"],
            created_at=_parse_datetime(row["created_at"]),
        )


async def insert_movement(
    conn: aiosqlite.Connection, tenant_id: str, movement: Movement
) -> None:
    """Insert one movement on an open connection. The caller owns the transaction."""
    await conn.execute(
        """
        INSERT INTO stock_movements (
            id, tenant_id, item_id, movement_type, quantity, unit_cost,
            movement_date, from_warehouse_id, to_warehouse_id, reference,
            notes, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            movement.id,
            tenant_id,
            movement.item_id,
            movement.movement_type.value,
            movement.quantity,
            movement.unit_cost,
            movement.movement_date.isoformat(),
            movement.from_warehouse_id,
            movement.to_warehouse_id,
            movement.reference,
            movement.notes,
            movement.created_at.isoformat(),
        ),
    )
