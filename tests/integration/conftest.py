"""Fixtures for end-to-end tests against a migrated SQLite database."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from stockledger.infrastructure.storage.sqlite import connection as conn_module
from stockledger.infrastructure.storage.sqlite.migrations.migrator import (
    initialize_database,
)


@pytest.fixture
async def sqlite_db(tmp_path: Path):
    db_path = tmp_path / "ledger.db"
    await initialize_database(db_path, create_backup_before=False)

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.pool_size = 2
    settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        try:
            yield db_path
        finally:
            await conn_module.close_pool()
