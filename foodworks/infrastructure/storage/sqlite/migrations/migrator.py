"""
Schema migrator for the Foodworks database.

Migrations are ``vNNN_name.sql`` files in this package. Each one runs in
a single transaction together with its ``schema_migrations`` row, so a
failed migration leaves the schema at the previous version.
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from foodworks.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"v(\d+)_(.+)\.sql")

# Tables the stores and the ledger read from; checked by verify_schema_integrity.
REQUIRED_TABLES = [
    "schema_migrations",
    "inventory",
    "inventory_movements",
    "raw_materials",
    "product_recipes",
    "recipe_items",
    "final_products",
    "batch_manufacturing_records",
    "batch_ingredients",
    "stock_receiving",
    "wastage",
    "sales_orders",
    "sales_items",
    "delivery_methods",
    "suppliers",
    "equipment",
    "compliance_documents",
    "document_versions",
]


@dataclass
class MigrationInfo:
    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = FILENAME_PATTERN.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        # Fresh database, v001 creates the table
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    """Highest applied schema version, or None before the first migration."""
    try:
        cursor = await conn.execute(
            "SELECT version FROM schema_migrations ORDER BY version DESC LIMIT 1"
        )
    except aiosqlite.OperationalError:
        return None
    row = await cursor.fetchone()
    return row[0] if row else None


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> None:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.monotonic()
    sql = migration.path.read_text(encoding="utf-8")
    try:
        # executescript commits first; the BEGIN keeps the script and its
        # schema_migrations row in one transaction.
        await conn.executescript(f"BEGIN IMMEDIATE;\n{sql}")
        elapsed_ms = int((time.monotonic() - start) * 1000)
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed_ms),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.rollback()
        logger.error(
            "migration_failed", version=migration.version, name=migration.name, error=str(e)
        )
        raise
    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed_ms)


async def create_backup(conn: aiosqlite.Connection, db_path: Path) -> Path:
    """Write a consistent copy of the database next to it before migrating."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.pre-migration_{timestamp}.db")
    await conn.execute("VACUUM INTO ?", (str(backup_path),))
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationInfo]:
    """
    Bring the database up to the latest schema version.

    An existing database is snapshotted before any pending migration runs.
    Applied migrations are never re-run, even when their file changed.

    Returns:
        The migrations applied by this call, in order.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    existed = db_path.exists()
    logger.info("initializing_database", db_path=str(db_path))

    applied_now: list[MigrationInfo] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        applied = await _applied_checksums(conn)
        pending = []
        for migration in discover_migrations():
            if migration.version not in applied:
                pending.append(migration)
            elif applied[migration.version] != migration.checksum:
                logger.warning("migration_checksum_changed", version=migration.version)

        if not pending:
            logger.info("schema_up_to_date", version=await get_current_version(conn))
            return applied_now

        if create_backup_before and existed and applied:
            await create_backup(conn, db_path)

        for migration in pending:
            await _apply(conn, migration)
            applied_now.append(migration)

    return applied_now


# Alias used by the application lifespan
run_migrations = initialize_database


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Check the schema and the stock ledger.

    Returns one dict per check with ``check`` and ``status`` keys. The
    ``ledger_drift`` check lists inventory items whose stock level no
    longer equals the sum of their movements.
    """
    db_path = db_path or get_settings().storage.db_path
    checks = []

    async with aiosqlite.connect(db_path) as conn:
        current = await get_current_version(conn)
        pending = [
            m.version for m in discover_migrations() if current is None or m.version > current
        ]
        checks.append({
            "check": "schema_version",
            "status": "PASS" if not pending else "FAIL",
            "current": current,
            "pending": pending,
        })

        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = await cursor.fetchall()
        checks.append({
            "check": "foreign_keys",
            "status": "PASS" if not fk_violations else "FAIL",
            "violations": len(fk_violations),
        })

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = await cursor.fetchone()
        checks.append({
            "check": "integrity",
            "status": "PASS" if integrity[0] == "ok" else "FAIL",
            "result": integrity[0],
        })

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        existing_tables = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in existing_tables]
        checks.append({
            "check": "required_tables",
            "status": "PASS" if not missing else "FAIL",
            "missing": missing,
        })

        if not missing:
            cursor = await conn.execute(
                """
                SELECT i.id FROM inventory i
                JOIN inventory_movements m ON m.inventory_id = i.id
                GROUP BY i.id
                HAVING ABS(i.stock_level - SUM(m.quantity)) > 1e-6
                """
            )
            drifted = [row[0] for row in await cursor.fetchall()]
            checks.append({
                "check": "ledger_drift",
                "status": "PASS" if not drifted else "WARN",
                "items": drifted,
            })

    return checks


def main() -> None:
    """``foodworks-migrate``: apply pending migrations or verify the database."""
    import argparse

    parser = argparse.ArgumentParser(description="Foodworks database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--verify", action="store_true", help="Verify schema and ledger")
    parser.add_argument(
        "--no-backup", action="store_true", help="Skip the pre-migration snapshot"
    )
    args = parser.parse_args()
    configure_logging()

    async def run():
        if args.verify:
            for check in await verify_schema_integrity(args.db_path):
                print(f"[{check['status']}] {check['check']}")
                if check["status"] != "PASS":
                    for key, value in check.items():
                        if key not in ("check", "status"):
                            print(f"       {key}: {value}")
            return

        applied = await initialize_database(
            args.db_path, create_backup_before=not args.no_backup
        )
        if not applied:
            print("Schema is up to date")
        for migration in applied:
            print(f"Applied v{migration.version}: {migration.name}")

    asyncio.run(run())


if __name__ == "__main__":
    main()
