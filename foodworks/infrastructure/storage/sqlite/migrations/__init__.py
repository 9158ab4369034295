"""Database migrations module."""

from foodworks.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    create_backup,
    discover_migrations,
    get_current_version,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "MigrationInfo",
    "create_backup",
    "discover_migrations",
    "get_current_version",
    "initialize_database",
    "run_migrations",
    "verify_schema_integrity",
]
