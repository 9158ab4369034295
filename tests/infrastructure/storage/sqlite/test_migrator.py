"""Tests for the schema migrator."""

import sqlite3
from pathlib import Path

import aiosqlite
import pytest

from foodworks.infrastructure.storage.sqlite.migrations import migrator
from foodworks.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_current_version,
    initialize_database,
    verify_schema_integrity,
)


def _extra_migration(tmp_path: Path, sql: str) -> MigrationInfo:
    path = tmp_path / "v002_extra.sql"
    path.write_text(sql, encoding="utf-8")
    return MigrationInfo.from_file(path)


class TestMigrator:
    def test_discover(self):
        migrations = discover_migrations()
        assert migrations
        assert migrations[0].version == "001"
        assert migrations[0].name == "initial"

    async def test_initialize_creates_tables(self, temp_db_path: Path):
        applied = await initialize_database(temp_db_path, create_backup_before=False)
        assert [m.version for m in applied] == ["001"]

        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
            assert set(REQUIRED_TABLES) <= tables
            assert await get_current_version(conn) == "001"

    async def test_initialize_is_idempotent(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        second = await initialize_database(temp_db_path, create_backup_before=False)
        assert second == []

    async def test_version_is_none_before_first_migration(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_current_version(conn) is None

    async def test_failed_migration_leaves_previous_version(
        self, temp_db_path: Path, tmp_path: Path, monkeypatch
    ):
        await initialize_database(temp_db_path, create_backup_before=False)
        broken = _extra_migration(
            tmp_path, "CREATE TABLE recall_notices (id INTEGER PRIMARY KEY);\nNOT VALID SQL;"
        )
        monkeypatch.setattr(
            migrator, "discover_migrations", lambda: [*discover_migrations(), broken]
        )

        with pytest.raises(sqlite3.OperationalError):
            await initialize_database(temp_db_path, create_backup_before=False)

        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_current_version(conn) == "001"
            cursor = await conn.execute(
                "SELECT 1 FROM sqlite_master WHERE name = 'recall_notices'"
            )
            assert await cursor.fetchone() is None

    async def test_existing_database_is_snapshotted_before_migrating(
        self, temp_db_path: Path, tmp_path: Path, monkeypatch
    ):
        await initialize_database(temp_db_path, create_backup_before=False)
        extra = _extra_migration(tmp_path, "CREATE TABLE recall_notices (id INTEGER PRIMARY KEY);")
        monkeypatch.setattr(
            migrator, "discover_migrations", lambda: [*discover_migrations(), extra]
        )

        applied = await initialize_database(temp_db_path)
        assert [m.version for m in applied] == ["002"]

        backups = list(temp_db_path.parent.glob(f"{temp_db_path.stem}.pre-migration_*.db"))
        assert len(backups) == 1
        async with aiosqlite.connect(backups[0]) as conn:
            assert await get_current_version(conn) == "001"

    async def test_pending_migration_fails_version_check(
        self, temp_db_path: Path, tmp_path: Path, monkeypatch
    ):
        await initialize_database(temp_db_path, create_backup_before=False)
        extra = _extra_migration(tmp_path, "CREATE TABLE recall_notices (id INTEGER PRIMARY KEY);")
        monkeypatch.setattr(
            migrator, "discover_migrations", lambda: [*discover_migrations(), extra]
        )

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["schema_version"]["status"] == "FAIL"
        assert checks["schema_version"]["pending"] == ["002"]

    async def test_integrity_checks_pass_on_fresh_db(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["schema_version"]["status"] == "PASS"
        assert checks["required_tables"]["status"] == "PASS"
        assert checks["integrity"]["status"] == "PASS"
        assert checks["ledger_drift"]["status"] == "PASS"

    async def test_movements_are_append_only(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute(
                "INSERT INTO inventory_movements (product_name, movement_type, quantity) "
                "VALUES ('Assam', 'adjustment', 5)"
            )
            await conn.commit()
            with pytest.raises(sqlite3.IntegrityError, match="append-only"):
                await conn.execute("UPDATE inventory_movements SET quantity = 6")
            with pytest.raises(sqlite3.IntegrityError, match="append-only"):
                await conn.execute("DELETE FROM inventory_movements")
