"""
Versioned schema migrations for the stock ledger database.

Migration files live next to this module and are named ``vNNN_name.sql``.
Each applied file is recorded in ``schema_migrations`` with a checksum so an
edited migration is detected instead of silently re-run.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from stockledger.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_PATTERN = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = [
    "schema_migrations",
    "warehouses",
    "items",
    "stock_movements",
    "warehouse_entries",
    "warehouse_entry_lines",
    "warehouse_transfers",
    "warehouse_transfer_lines",
    "physical_counts",
    "physical_count_lines",
]

REQUIRED_TRIGGERS = [
    "trg_stock_movements_no_update",
    "trg_stock_movements_no_delete",
    "trg_physical_count_lines_no_update",
]


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_PATTERN.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations() -> list[MigrationInfo]:
    """Migration files sorted by version; badly named files are skipped."""
    found = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return found


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map of applied version to recorded checksum (empty on a fresh database)."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed_ms()),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=elapsed_ms(),
            error=str(e),
        )

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed_ms())
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed_ms(),
    )


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before migrating."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Stops at the first failure. A migration whose file changed after it was
    applied is reported and not re-run.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing database aside first

    Returns:
        Results for the migrations that were attempted
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            applied = await get_applied_migrations(conn)

            for migration in discover_migrations():
                recorded = applied.get(migration.version)
                if recorded is not None:
                    if recorded != migration.checksum:
                        logger.warning(
                            "migration_checksum_changed",
                            version=migration.version,
                            recorded=recorded,
                            current=migration.checksum,
                        )
                    continue

                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if backup_path and all(r.success for r in results):
        backup_path.unlink()

    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending versions for a database file."""
    db_path = db_path or get_settings().storage.db_path
    discovered = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in discovered],
            "total_migrations": len(discovered),
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": sorted(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Integrity, foreign key, table and immutability-trigger checks."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]
        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = await cursor.fetchall()
        cursor = await conn.execute("SELECT type, name FROM sqlite_master")
        objects = await cursor.fetchall()

    tables = {name for kind, name in objects if kind == "table"}
    triggers = {name for kind, name in objects if kind == "trigger"}
    missing_tables = [t for t in REQUIRED_TABLES if t not in tables]
    missing_triggers = [t for t in REQUIRED_TRIGGERS if t not in triggers]

    return [
        {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
        {
            "check": "foreign_keys",
            "status": "PASS" if not fk_violations else "FAIL",
            "violations": len(fk_violations),
        },
        {
            "check": "required_tables",
            "status": "PASS" if not missing_tables else "FAIL",
            "missing": missing_tables,
        },
        {
            "check": "immutability_triggers",
            "status": "PASS" if not missing_triggers else "FAIL",
            "missing": missing_triggers,
        },
    ]


async def _run_cli(db_path: Path | None, show_status: bool, verify: bool, backup: bool) -> None:
    if show_status:
        status = await get_migration_status(db_path)
        for key in ("exists", "current_version", "applied_migrations", "pending_migrations"):
            print(f"{key}: {status[key]}")
        return

    if verify:
        for check in await verify_schema_integrity(db_path):
            extra = {k: v for k, v in check.items() if k not in ("check", "status")}
            print(f"[{check['status']}] {check['check']} {extra if check['status'] != 'PASS' else ''}")
        return

    results = await initialize_database(db_path, create_backup_before=backup)
    if not results:
        print("Schema is up to date")
    for result in results:
        outcome = "OK" if result.success else "FAILED"
        print(f"[{outcome}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"    {result.error}")


def main() -> None:
    """CLI entry point (``stockledger-migrate``)."""
    import argparse

    parser = argparse.ArgumentParser(description="Stock ledger schema migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show applied and pending migrations")
    parser.add_argument("--verify", action="store_true", help="Check schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    args = parser.parse_args()

    asyncio.run(_run_cli(args.db_path, args.status, args.verify, not args.no_backup))


if __name__ == "__main__":
    main()
