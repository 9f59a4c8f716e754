"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite
import pytest

from stockledger.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestDiscovery:
    def test_migrations_found_in_order(self):
        versions = [m.version for m in discover_migrations()]
        assert versions
        assert versions == sorted(versions)

    def test_invalid_filename_rejected(self, tmp_path: Path):
        path = tmp_path / "schema.sql"
        path.write_text("SELECT 1;")
        with pytest.raises(ValueError):
            MigrationInfo.from_file(path)


class TestInitializeDatabase:
    async def test_creates_required_tables(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)
        assert results and all(r.success for r in results)

        checks = await verify_schema_integrity(temp_db_path)
        assert all(c["status"] == "PASS" for c in checks)

        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_second_run_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path, create_backup_before=False) == []

        status = await get_migration_status(temp_db_path)
        assert status["exists"] is True
        assert status["pending_migrations"] == []

    async def test_status_of_missing_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "absent.db")
        assert status["exists"] is False


class TestDatabaseHealth:
    async def test_reports_schema_version(self, migrated_db):
        from stockledger.api.routes.health import db_health

        health = await db_health()
        assert health.status == "healthy"
        assert health.database.available is True
        assert health.schema_version == discover_migrations()[-1].version
