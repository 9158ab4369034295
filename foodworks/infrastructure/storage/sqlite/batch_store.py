"""SQLite implementation of batch manufacturing record storage."""

from datetime import date, datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.batch import (
    BatchChecklist,
    BatchIngredient,
    BatchManufacturingRecord,
    BatchStatus,
)
from foodworks.core.entities.inventory import InventoryMovement, MovementType, ReferenceType
from foodworks.core.exceptions import (
    BatchNotFoundError,
    ConcurrencyConflictError,
    ProductNotFoundError,
    RawMaterialNotFoundError,
)
from foodworks.core.interfaces.batch_store import IBatchStore
from foodworks.core.services.batch_workflow import check_transition, plan_batch_adjustments
from foodworks.core.services.ledger import AdjustmentPlan
from foodworks.infrastructure.storage.sqlite import ledger
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

_SELECT_BATCH = """
    SELECT b.*, p.name AS product_name
    FROM batch_manufacturing_records b
    LEFT JOIN final_products p ON p.id = b.product_id
"""


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class SQLiteBatchStore(IBatchStore):
    """
    SQLite implementation of batch records.

    Every save diffs the stored state against the new one and applies only
    the difference to the ledger, inside the same transaction as the record.
    """

    async def create(
        self, record: BatchManufacturingRecord, created_by: str | None = None
    ) -> tuple[BatchManufacturingRecord, list[InventoryMovement]]:
        now = datetime.utcnow()
        record.created_at = now
        record.updated_at = now
        record.version = 1

        async with get_transaction() as conn:
            record.product_name = await self._product_name(conn, record.product_id)
            cursor = await conn.execute(
                """
                INSERT INTO batch_manufacturing_records (
                    batch_date, product_id, product_batch_number, product_best_before_date,
                    bags_count, bag_size, batch_size, batch_started, batch_finished,
                    scale_id, scale_target_weight, scale_actual_reading, checklist_json,
                    manager_comments, remedial_actions, work_undertaken, version,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    *self._header_values(record),
                    record.version,
                    record.created_at.isoformat(),
                    record.updated_at.isoformat(),
                ),
            )
            record.id = cursor.lastrowid
            await self._write_ingredients(conn, record)

            plan = plan_batch_adjustments(None, record)
            movements = await self._apply_plan(conn, record, plan, created_by)

            logger.info(
                "batch_created",
                batch_id=record.id,
                batch_number=record.product_batch_number,
                status=record.status.value,
                movements=len(movements),
            )
            return record, movements

    async def update(
        self,
        record: BatchManufacturingRecord,
        expected_version: int,
        created_by: str | None = None,
    ) -> tuple[BatchManufacturingRecord, list[InventoryMovement]]:
        async with get_transaction() as conn:
            previous = await self._load(conn, record.id)  # type: ignore[arg-type]
            if previous is None:
                raise BatchNotFoundError(record.id or 0)
            if previous.version != expected_version:
                raise ConcurrencyConflictError("Batch", record.id or 0, expected_version)
            check_transition(previous, record)

            record.product_name = await self._product_name(conn, record.product_id)
            record.created_at = previous.created_at
            record.updated_at = datetime.utcnow()
            cursor = await conn.execute(
                """
                UPDATE batch_manufacturing_records SET
                    batch_date = ?,
                    product_id = ?,
                    product_batch_number = ?,
                    product_best_before_date = ?,
                    bags_count = ?,
                    bag_size = ?,
                    batch_size = ?,
                    batch_started = ?,
                    batch_finished = ?,
                    scale_id = ?,
                    scale_target_weight = ?,
                    scale_actual_reading = ?,
                    checklist_json = ?,
                    manager_comments = ?,
                    remedial_actions = ?,
                    work_undertaken = ?,
                    version = version + 1,
                    updated_at = ?
                WHERE id = ? AND version = ?
                """,
                (
                    *self._header_values(record),
                    record.updated_at.isoformat(),
                    record.id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                raise ConcurrencyConflictError("Batch", record.id or 0, expected_version)
            record.version = expected_version + 1

            await conn.execute("DELETE FROM batch_ingredients WHERE batch_id = ?", (record.id,))
            await self._write_ingredients(conn, record)

            plan = plan_batch_adjustments(previous, record)
            movements = await self._apply_plan(conn, record, plan, created_by)

            logger.info(
                "batch_updated",
                batch_id=record.id,
                version=record.version,
                status=record.status.value,
                movements=len(movements),
            )
            return record, movements

    async def get(self, batch_id: int) -> BatchManufacturingRecord | None:
        async with get_connection() as conn:
            return await self._load(conn, batch_id)

    async def list_batches(
        self,
        search: str | None = None,
        product_names: list[str] | None = None,
        status: BatchStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[BatchManufacturingRecord]:
        clauses: list[str] = []
        params: list = []
        if search:
            pattern = f"%{search}%"
            clauses.append(
                """(
                    p.name LIKE ?
                    OR b.product_batch_number LIKE ?
                    OR EXISTS (
                        SELECT 1 FROM batch_ingredients bi
                        JOIN raw_materials rm ON rm.id = bi.raw_material_id
                        WHERE bi.batch_id = b.id
                        AND (rm.name LIKE ? OR bi.batch_number LIKE ?)
                    )
                )"""
            )
            params.extend([pattern] * 4)
        if product_names:
            placeholders = ", ".join("?" for _ in product_names)
            clauses.append(f"p.name IN ({placeholders})")
            params.extend(product_names)
        if status == BatchStatus.IN_PROGRESS:
            clauses.append("b.batch_finished IS NULL")
        elif status == BatchStatus.COMPLETED:
            clauses.append("b.batch_finished IS NOT NULL")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                {_SELECT_BATCH}
                {where}
                ORDER BY b.batch_date DESC, b.id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            records = []
            for row in rows:
                ingredients = await self._load_ingredients(conn, row["id"])
                records.append(self._row_to_record(row, ingredients))
            return records

    async def get_movements(self, batch_id: int) -> list[InventoryMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_movements
                WHERE reference_type = ? AND reference_id = ?
                ORDER BY id
                """,
                (ReferenceType.BATCH.value, batch_id),
            )
            rows = await cursor.fetchall()
            return [ledger.row_to_movement(row) for row in rows]

    async def _apply_plan(
        self,
        conn: aiosqlite.Connection,
        record: BatchManufacturingRecord,
        plan: AdjustmentPlan,
        created_by: str | None,
    ) -> list[InventoryMovement]:
        movements: list[InventoryMovement] = []
        notes = f"Batch {record.product_batch_number}" if record.product_batch_number else None

        for material_id, delta in plan.material_deltas.items():
            adjustment = await ledger.raw_material_adjustment(
                conn,
                material_id,
                delta,
                MovementType.MANUFACTURING_CONSUME,
                ReferenceType.BATCH,
                record.id,
                created_by=created_by,
            )
            adjustment.notes = notes
            _, movement = await ledger.apply_adjustment(conn, adjustment)
            movements.append(movement)

        for product_id, delta in plan.product_deltas.items():
            adjustment = await ledger.final_product_adjustment(
                conn,
                product_id,
                delta,
                ReferenceType.BATCH,
                record.id,
                created_by=created_by,
            )
            adjustment.notes = notes
            _, movement = await ledger.apply_adjustment(conn, adjustment)
            movements.append(movement)

        return movements

    @staticmethod
    async def _product_name(conn: aiosqlite.Connection, product_id: int | None) -> str:
        cursor = await conn.execute(
            "SELECT name FROM final_products WHERE id = ?", (product_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            raise ProductNotFoundError(product_id or 0)
        return row["name"]

    @staticmethod
    def _header_values(record: BatchManufacturingRecord) -> tuple:
        return (
            _iso(record.batch_date),
            record.product_id,
            record.product_batch_number,
            _iso(record.product_best_before_date),
            record.bags_count,
            record.bag_size,
            record.batch_size,
            _iso(record.batch_started),
            _iso(record.batch_finished),
            record.scale_id,
            record.scale_target_weight,
            record.scale_actual_reading,
            record.checklist.model_dump_json(),
            record.manager_comments,
            record.remedial_actions,
            record.work_undertaken,
        )

    @staticmethod
    async def _write_ingredients(
        conn: aiosqlite.Connection, record: BatchManufacturingRecord
    ) -> None:
        # Rows without a material or quantity are dropped
        record.ingredients = record.valid_ingredients()
        for ingredient in record.ingredients:
            cursor = await conn.execute(
                "SELECT name FROM raw_materials WHERE id = ?", (ingredient.raw_material_id,)
            )
            material = await cursor.fetchone()
            if material is None:
                raise RawMaterialNotFoundError(ingredient.raw_material_id)  # type: ignore[arg-type]

            ingredient.batch_id = record.id
            ingredient.raw_material_name = material["name"]
            cursor = await conn.execute(
                """
                INSERT INTO batch_ingredients (
                    batch_id, raw_material_id, batch_number, best_before_date, quantity
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    ingredient.batch_id,
                    ingredient.raw_material_id,
                    ingredient.batch_number,
                    _iso(ingredient.best_before_date),
                    ingredient.quantity,
                ),
            )
            ingredient.id = cursor.lastrowid

    async def _load(
        self, conn: aiosqlite.Connection, batch_id: int
    ) -> BatchManufacturingRecord | None:
        cursor = await conn.execute(f"{_SELECT_BATCH} WHERE b.id = ?", (batch_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        ingredients = await self._load_ingredients(conn, batch_id)
        return self._row_to_record(row, ingredients)

    @staticmethod
    async def _load_ingredients(
        conn: aiosqlite.Connection, batch_id: int
    ) -> list[BatchIngredient]:
        cursor = await conn.execute(
            """
            SELECT bi.*, rm.name AS raw_material_name
            FROM batch_ingredients bi
            LEFT JOIN raw_materials rm ON rm.id = bi.raw_material_id
            WHERE bi.batch_id = ?
            ORDER BY bi.id
            """,
            (batch_id,),
        )
        rows = await cursor.fetchall()
        return [
            BatchIngredient(
                id=row["id"],
                batch_id=row["batch_id"],
                raw_material_id=row["raw_material_id"],
                raw_material_name=row["raw_material_name"],
                batch_number=row["batch_number"],
                best_before_date=(
                    date.fromisoformat(row["best_before_date"]) if row["best_before_date"] else None
                ),
                quantity=float(row["quantity"]),
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_record(
        row: aiosqlite.Row, ingredients: list[BatchIngredient]
    ) -> BatchManufacturingRecord:
        """Convert a database row to a BatchManufacturingRecord entity."""
        checklist = BatchChecklist()
        if row["checklist_json"]:
            try:
                checklist = BatchChecklist.model_validate_json(row["checklist_json"])
            except ValueError:
                logger.warning("batch_checklist_unreadable", batch_id=row["id"])

        def _dt(value: str | None) -> datetime | None:
            if not value:
                return None
            try:
                return datetime.fromisoformat(value)
            except (ValueError, TypeError):
                return None

        def _d(value: str | None) -> date | None:
            if not value:
                return None
            try:
                return date.fromisoformat(value[:10])
            except (ValueError, TypeError):
                return None

        return BatchManufacturingRecord(
            id=row["id"],
            batch_date=_d(row["batch_date"]) or date.today(),
            product_id=row["product_id"],
            product_name=row["product_name"],
            product_batch_number=row["product_batch_number"],
            product_best_before_date=_d(row["product_best_before_date"]),
            bags_count=row["bags_count"],
            bag_size=row["bag_size"],
            batch_size=row["batch_size"],
            batch_started=_dt(row["batch_started"]),
            batch_finished=_dt(row["batch_finished"]),
            scale_id=row["scale_id"],
            scale_target_weight=row["scale_target_weight"],
            scale_actual_reading=row["scale_actual_reading"],
            checklist=checklist,
            manager_comments=row["manager_comments"],
            remedial_actions=row["remedial_actions"],
            work_undertaken=row["work_undertaken"],
            ingredients=ingredients,
            version=row["version"],
            created_at=_dt(row["created_at"]) or datetime.utcnow(),
            updated_at=_dt(row["updated_at"]) or datetime.utcnow(),
        )
