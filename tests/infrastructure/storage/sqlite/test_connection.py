"""Tests for the SQLite connection pool."""

from pathlib import Path

import aiosqlite
import pytest

from foodworks.core.exceptions import DatabaseError
from foodworks.infrastructure.storage.sqlite.connection import ConnectionPool


@pytest.fixture
async def pool(temp_db_path: Path):
    pool = ConnectionPool(temp_db_path, pool_size=1, busy_timeout=50)
    async with pool.acquire() as conn:
        await conn.execute("CREATE TABLE lots (id INTEGER PRIMARY KEY, code TEXT NOT NULL)")
        await conn.execute(
            "CREATE TABLE lot_uses (lot_id INTEGER NOT NULL REFERENCES lots(id))"
        )
        await conn.commit()
    yield pool
    await pool.close()


async def _lot_codes(pool: ConnectionPool) -> list[str]:
    async with pool.acquire() as conn:
        cursor = await conn.execute("SELECT code FROM lots ORDER BY id")
        return [row["code"] for row in await cursor.fetchall()]


class TestConnectionPool:
    async def test_transaction_commits(self, pool: ConnectionPool):
        async with pool.transaction() as conn:
            await conn.execute("INSERT INTO lots (code) VALUES ('LOT-A')")
        assert await _lot_codes(pool) == ["LOT-A"]

    async def test_transaction_rolls_back_every_statement(self, pool: ConnectionPool):
        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO lots (code) VALUES ('LOT-A')")
                await conn.execute("INSERT INTO lots (code) VALUES ('LOT-B')")
                raise RuntimeError("scale offline")
        assert await _lot_codes(pool) == []

    async def test_foreign_keys_enforced(self, pool: ConnectionPool):
        with pytest.raises(aiosqlite.IntegrityError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO lot_uses (lot_id) VALUES (99)")

    async def test_exhausted_pool_raises(self, pool: ConnectionPool):
        async with pool.acquire():
            with pytest.raises(DatabaseError) as exc_info:
                async with pool.acquire():
                    pass
        assert exc_info.value.details["operation"] == "acquire"

        # The held connection went back to the pool
        assert await pool.ping() >= 0

    async def test_close_then_reuse(self, pool: ConnectionPool):
        await pool.close()
        assert not pool.initialized
        assert await _lot_codes(pool) == []
        assert pool.initialized
