"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import foodworks.infrastructure.storage.sqlite.connection as conn_module
from foodworks.core.entities import FinalProduct, RawMaterial
from foodworks.infrastructure.storage.sqlite.connection import close_pool
from foodworks.infrastructure.storage.sqlite.migrations.migrator import initialize_database
from foodworks.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from foodworks.infrastructure.storage.sqlite.raw_material_store import SQLiteRawMaterialStore


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 1
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def initialized_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temporary database with the global pool pointed at it."""
    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_pool()


@pytest.fixture
async def tea_material(initialized_db) -> RawMaterial:
    """Loose-leaf tea at 0.002 per gram."""
    store = SQLiteRawMaterialStore()
    return await store.create(
        RawMaterial(name="Assam Leaf", category="tea", unit="g", unit_cost=0.002)
    )


@pytest.fixture
async def pouch_material(initialized_db) -> RawMaterial:
    """Retail pouch at 0.10 each."""
    store = SQLiteRawMaterialStore()
    return await store.create(
        RawMaterial(name="Kraft Pouch", category="packaging", unit="piece", unit_cost=0.10)
    )


@pytest.fixture
async def tea_product(initialized_db) -> FinalProduct:
    store = SQLiteProductStore()
    return await store.create(
        FinalProduct(name="Breakfast Tea", sku="TEA-0000001", unit_selling_price=3.00)
    )
