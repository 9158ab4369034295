"""SQLite implementation of supplier storage."""

import json
from datetime import datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.supplier import Supplier
from foodworks.core.interfaces.storage import ISupplierStore
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteSupplierStore(ISupplierStore):
    """SQLite implementation of supplier storage."""

    async def create(self, supplier: Supplier) -> Supplier:
        now = datetime.utcnow()
        supplier.created_at = now
        supplier.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO suppliers (
                    name, contact_name, email, phone, address, products_json,
                    is_approved, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    supplier.name,
                    supplier.contact_name,
                    supplier.email,
                    supplier.phone,
                    supplier.address,
                    json.dumps(supplier.products),
                    int(supplier.is_approved),
                    supplier.created_at.isoformat(),
                    supplier.updated_at.isoformat(),
                ),
            )
            supplier.id = cursor.lastrowid
            logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
            return supplier

    async def get(self, supplier_id: int) -> Supplier | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM suppliers WHERE id = ?", (supplier_id,))
            row = await cursor.fetchone()
            return self._row_to_supplier(row) if row else None

    async def list_suppliers(
        self, approved_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[Supplier]:
        where = "WHERE is_approved = 1" if approved_only else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM suppliers
                {where}
                ORDER BY name
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    async def update(self, supplier: Supplier) -> Supplier:
        supplier.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE suppliers SET
                    name = ?,
                    contact_name = ?,
                    email = ?,
                    phone = ?,
                    address = ?,
                    products_json = ?,
                    is_approved = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    supplier.name,
                    supplier.contact_name,
                    supplier.email,
                    supplier.phone,
                    supplier.address,
                    json.dumps(supplier.products),
                    int(supplier.is_approved),
                    supplier.updated_at.isoformat(),
                    supplier.id,
                ),
            )
            logger.info("supplier_updated", supplier_id=supplier.id)
            return supplier

    async def delete(self, supplier_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM suppliers WHERE id = ?", (supplier_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("supplier_deleted", supplier_id=supplier_id)
            return deleted

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        """Convert a database row to a Supplier entity."""
        products: list[str] = []
        if row["products_json"]:
            try:
                products = json.loads(row["products_json"])
            except json.JSONDecodeError:
                pass

        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = datetime.utcnow()
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return Supplier(
            id=row["id"],
            name=row["name"],
            contact_name=row["contact_name"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            products=products,
            is_approved=bool(row["is_approved"]),
            created_at=created_at,
            updated_at=updated_at,
        )
