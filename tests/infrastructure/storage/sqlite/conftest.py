"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from stockledger.core.entities.inventory import Item, Warehouse
from stockledger.infrastructure.storage.sqlite import connection as conn_module
from stockledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from stockledger.infrastructure.storage.sqlite.migrations.migrator import (
    initialize_database,
)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def migrated_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Apply the schema migrations and point the global pool at the database."""
    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()


@pytest.fixture
async def inventory_store(migrated_db) -> SQLiteInventoryStore:
    return SQLiteInventoryStore()


@pytest.fixture
async def seeded_store(inventory_store, tenant_id, warehouses, items) -> SQLiteInventoryStore:
    """Store holding the shared warehouses and items for ``tenant_id``."""
    for warehouse in warehouses:
        await inventory_store.create_warehouse(tenant_id, warehouse)
    for item in items:
        await inventory_store.create_item(tenant_id, item)
    return inventory_store


@pytest.fixture
def spare_warehouse() -> Warehouse:
    return Warehouse(id="W3", name="Overflow")


@pytest.fixture
def untracked_item() -> Item:
    """Service item: no stock tracking, homed in W1."""
    return Item(id="I3", sku="SVC-1", name="Installation", warehouse_id="W1", track_stock=False)
