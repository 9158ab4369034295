"""Fixtures for end-to-end tests against a migrated temporary database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

import foodworks.infrastructure.storage.sqlite.connection as conn_module
from foodworks.api.main import app
from foodworks.infrastructure.storage.sqlite.connection import close_pool
from foodworks.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def live_client(tmp_path: Path) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose stores all share one pool on a fresh database."""
    db_path = tmp_path / "foodworks.db"
    await initialize_database(db_path, create_backup_before=False)

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.pool_size = 1
    settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            await close_pool()
