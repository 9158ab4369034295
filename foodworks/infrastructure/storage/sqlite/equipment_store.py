"""SQLite implementation of the equipment register."""

from datetime import date, datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.equipment import Equipment, EquipmentStatus
from foodworks.core.interfaces.storage import IEquipmentStore
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except (ValueError, TypeError):
        return None


class SQLiteEquipmentStore(IEquipmentStore):
    """SQLite implementation of the equipment register."""

    async def create(self, equipment: Equipment) -> Equipment:
        now = datetime.utcnow()
        equipment.created_at = now
        equipment.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO equipment (
                    serial_number, description, model, manufacturer, value,
                    purchase_date, last_service_date, next_service_date,
                    service_interval_months, location, status, condition, notes,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    *self._values(equipment),
                    equipment.created_at.isoformat(),
                    equipment.updated_at.isoformat(),
                ),
            )
            equipment.id = cursor.lastrowid
            logger.info(
                "equipment_created",
                equipment_id=equipment.id,
                serial_number=equipment.serial_number,
            )
            return equipment

    async def get(self, equipment_id: int) -> Equipment | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM equipment WHERE id = ?", (equipment_id,))
            row = await cursor.fetchone()
            return self._row_to_equipment(row) if row else None

    async def list_equipment(
        self, service_due: bool = False, limit: int = 100, offset: int = 0
    ) -> list[Equipment]:
        """List equipment; ``service_due`` keeps non-retired items due for service today."""
        where = ""
        params: list = []
        if service_due:
            where = "WHERE status != ? AND next_service_date IS NOT NULL AND next_service_date <= ?"
            params = [EquipmentStatus.RETIRED.value, date.today().isoformat()]

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM equipment
                {where}
                ORDER BY next_service_date IS NULL, next_service_date, description
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_equipment(row) for row in rows]

    async def update(self, equipment: Equipment) -> Equipment:
        equipment.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE equipment SET
                    serial_number = ?,
                    description = ?,
                    model = ?,
                    manufacturer = ?,
                    value = ?,
                    purchase_date = ?,
                    last_service_date = ?,
                    next_service_date = ?,
                    service_interval_months = ?,
                    location = ?,
                    status = ?,
                    condition = ?,
                    notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (*self._values(equipment), equipment.updated_at.isoformat(), equipment.id),
            )
            logger.info("equipment_updated", equipment_id=equipment.id)
            return equipment

    async def delete(self, equipment_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM equipment WHERE id = ?", (equipment_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("equipment_deleted", equipment_id=equipment_id)
            return deleted

    @staticmethod
    def _values(equipment: Equipment) -> tuple:
        def _iso(value: date | None) -> str | None:
            return value.isoformat() if value else None

        return (
            equipment.serial_number,
            equipment.description,
            equipment.model,
            equipment.manufacturer,
            equipment.value,
            _iso(equipment.purchase_date),
            _iso(equipment.last_service_date),
            _iso(equipment.next_service_date),
            equipment.service_interval_months,
            equipment.location,
            equipment.status.value,
            equipment.condition,
            equipment.notes,
        )

    @staticmethod
    def _row_to_equipment(row: aiosqlite.Row) -> Equipment:
        """Convert a database row to an Equipment entity."""
        status = EquipmentStatus.ACTIVE
        try:
            status = EquipmentStatus(row["status"])
        except ValueError:
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

        return Equipment(
            id=row["id"],
            serial_number=row["serial_number"],
            description=row["description"],
            model=row["model"],
            manufacturer=row["manufacturer"],
            value=row["value"],
            purchase_date=_parse_date(row["purchase_date"]),
            last_service_date=_parse_date(row["last_service_date"]),
            next_service_date=_parse_date(row["next_service_date"]),
            service_interval_months=row["service_interval_months"],
            location=row["location"],
            status=status,
            condition=row["condition"],
            notes=row["notes"],
            created_at=created_at,
            updated_at=updated_at,
        )
