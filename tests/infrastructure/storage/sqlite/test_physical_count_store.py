"""Tests for SQLite physical count store."""

from datetime import date, datetime

import aiosqlite
import pytest

from stockledger.core.entities.physical_count import (
    PhysicalCountLine,
    PhysicalCountSession,
)
from stockledger.infrastructure.storage.sqlite.physical_count_store import (
    SQLitePhysicalCountStore,
)


@pytest.fixture
def count_store(migrated_db) -> SQLitePhysicalCountStore:
    return SQLitePhysicalCountStore()


@pytest.fixture
def lines() -> list[PhysicalCountLine]:
    return [
        PhysicalCountLine.from_counts("I1", "W1", 100, 97, 10.0, notes="shelf B"),
        PhysicalCountLine.from_counts("I2", "W2", 5, 6, 4.0),
    ]


def _header(count_date: date) -> PhysicalCountSession:
    return PhysicalCountSession(
        count_date=count_date,
        description="Quarter end",
        created_at=datetime(2024, 3, 31, 18, 0),
    )


class TestSQLitePhysicalCountStore:
    async def test_save_and_load(self, count_store, lines, tenant_id):
        session_id = await count_store.create_session(tenant_id, _header(date(2024, 3, 31)), lines)

        session = await count_store.get_session(tenant_id, session_id)
        assert session.covers_all_warehouses
        assert [line.item_id for line in session.lines] == ["I1", "I2"]
        first = session.lines[0]
        assert (first.difference_qty, first.cost_difference) == (-3, -30)
        assert first.notes == "shelf B"
        assert session.totals.cost_difference == -30 + 4

    async def test_missing_or_foreign_session(self, count_store, lines, tenant_id):
        session_id = await count_store.create_session(tenant_id, _header(date(2024, 3, 31)), lines)
        assert await count_store.get_session("tenant-b", session_id) is None
        assert await count_store.get_session(tenant_id, "nope") is None

    async def test_list_newest_first(self, count_store, lines, tenant_id):
        older = await count_store.create_session(tenant_id, _header(date(2024, 1, 31)), lines)
        newer = await count_store.create_session(tenant_id, _header(date(2024, 2, 29)), lines)

        sessions = await count_store.list_sessions(tenant_id)
        assert [s.id for s in sessions] == [newer, older]
        assert sessions[0].lines == ()

    async def test_saved_lines_cannot_change(self, count_store, lines, migrated_db, tenant_id):
        session_id = await count_store.create_session(tenant_id, _header(date(2024, 3, 31)), lines)
        async with aiosqlite.connect(migrated_db) as conn:
            with pytest.raises(aiosqlite.IntegrityError, match="immutable"):
                await conn.execute(
                    "UPDATE physical_count_lines SET counted_qty = 100 WHERE session_id = ?",
                    (session_id,),
                )
