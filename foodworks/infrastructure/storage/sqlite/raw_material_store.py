"""SQLite implementation of raw material storage."""

from datetime import datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.recipe import RawMaterial
from foodworks.core.exceptions import RecordInUseError
from foodworks.core.interfaces.costing_store import IRawMaterialStore
from foodworks.core.services.costing import weighted_average_cost
from foodworks.infrastructure.storage.sqlite import ledger
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


async def refresh_material_cost(conn: aiosqlite.Connection, material_id: int) -> float | None:
    """
    Recompute a material's unit_cost from its accepted, undamaged receipts.

    Leaves the cost untouched when there are no such receipts.
    """
    cursor = await conn.execute(
        """
        SELECT quantity, price_per_unit FROM stock_receiving
        WHERE raw_material_id = ? AND is_accepted = 1 AND is_damaged = 0
        """,
        (material_id,),
    )
    rows = await cursor.fetchall()
    average = weighted_average_cost((float(r["quantity"]), float(r["price_per_unit"])) for r in rows)
    if average is None:
        return None

    await conn.execute(
        "UPDATE raw_materials SET unit_cost = ?, updated_at = ? WHERE id = ?",
        (average, datetime.utcnow().isoformat(), material_id),
    )
    logger.info("raw_material_cost_refreshed", material_id=material_id, unit_cost=round(average, 6))
    return average


class SQLiteRawMaterialStore(IRawMaterialStore):
    """SQLite implementation of raw material storage."""

    async def create(self, material: RawMaterial) -> RawMaterial:
        now = datetime.utcnow()
        material.created_at = now
        material.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO raw_materials (
                    name, category, unit, unit_cost, supplier_id, is_active,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    material.name,
                    material.category,
                    material.unit,
                    material.unit_cost,
                    material.supplier_id,
                    int(material.is_active),
                    material.created_at.isoformat(),
                    material.updated_at.isoformat(),
                ),
            )
            material.id = cursor.lastrowid
            logger.info("raw_material_created", material_id=material.id, name=material.name)
            return material

    async def get(self, material_id: int) -> RawMaterial | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM raw_materials WHERE id = ?", (material_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def list_materials(
        self, active_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[RawMaterial]:
        where = "WHERE is_active = 1" if active_only else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM raw_materials
                {where}
                ORDER BY name
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_material(row) for row in rows]

    async def update(self, material: RawMaterial) -> RawMaterial:
        material.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT name FROM raw_materials WHERE id = ?", (material.id,)
            )
            previous = await cursor.fetchone()
            await conn.execute(
                """
                UPDATE raw_materials SET
                    name = ?,
                    category = ?,
                    unit = ?,
                    unit_cost = ?,
                    supplier_id = ?,
                    is_active = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    material.name,
                    material.category,
                    material.unit,
                    material.unit_cost,
                    material.supplier_id,
                    int(material.is_active),
                    material.updated_at.isoformat(),
                    material.id,
                ),
            )
            if previous is not None:
                await ledger.rename_inventory_items(
                    conn, previous["name"], material.name, is_final_product=False
                )
            logger.info("raw_material_updated", material_id=material.id)
            return material

    async def delete(self, material_id: int) -> bool:
        """Delete a raw material.

        Materials still named by a recipe or batch ingredient are kept and
        RecordInUseError is raised.
        """
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM raw_materials WHERE id = ?", (material_id,)
                )
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            logger.warning("raw_material_delete_blocked", material_id=material_id, error=str(e))
            raise RecordInUseError("Raw material", material_id) from e

        if deleted:
            logger.info("raw_material_deleted", material_id=material_id)
        return deleted

    async def refresh_average_cost(self, material_id: int) -> RawMaterial | None:
        async with get_transaction() as conn:
            await refresh_material_cost(conn, material_id)
        return await self.get(material_id)

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> RawMaterial:
        """Convert a database row to a RawMaterial entity."""
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

        return RawMaterial(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            unit=row["unit"],
            unit_cost=float(row["unit_cost"]),
            supplier_id=row["supplier_id"],
            is_active=bool(row["is_active"]),
            created_at=created_at,
            updated_at=updated_at,
        )
