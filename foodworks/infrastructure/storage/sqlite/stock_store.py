"""SQLite implementation of goods-in receipts and wastage."""

from datetime import date, datetime

import aiosqlite

from foodworks.config import get_logger, get_settings
from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.entities.stock import StockReceipt, Wastage
from foodworks.core.exceptions import InventoryItemNotFoundError, StockReceiptNotFoundError
from foodworks.core.interfaces.stock_store import IStockStore
from foodworks.core.services.ledger import StockAdjustment
from foodworks.infrastructure.storage.sqlite import ledger
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from foodworks.infrastructure.storage.sqlite.raw_material_store import refresh_material_cost

logger = get_logger(__name__)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except (ValueError, TypeError):
        return None


class SQLiteStockStore(IStockStore):
    """SQLite implementation of receipts and wastage."""

    # ------------------------------------------------------------------
    # Receipts
    # ------------------------------------------------------------------

    async def create_receipt(
        self, receipt: StockReceipt
    ) -> tuple[StockReceipt, InventoryItem | None, InventoryMovement | None]:
        receipt.created_at = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_receiving (
                    received_date, stock_type, product_name, raw_material_id, supplier_id,
                    invoice_number, quantity, price_per_unit, package_size, batch_number,
                    best_before_date, is_damaged, is_accepted,
                    labelling_matches_specifications, checked_by, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (*self._receipt_values(receipt), receipt.created_at.isoformat()),
            )
            receipt.id = cursor.lastrowid

            item, movement = None, None
            if receipt.stocked_quantity:
                item, movement = await ledger.apply_adjustment(
                    conn,
                    await self._receipt_adjustment(conn, receipt, receipt.stocked_quantity),
                )
            if receipt.raw_material_id is not None:
                await refresh_material_cost(conn, receipt.raw_material_id)

            logger.info(
                "stock_receipt_recorded",
                receipt_id=receipt.id,
                product_name=receipt.product_name,
                quantity=receipt.quantity,
                stocked=receipt.stocked_quantity,
            )
            return receipt, item, movement

    async def update_receipt(
        self, receipt: StockReceipt
    ) -> tuple[StockReceipt, InventoryItem | None, InventoryMovement | None]:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_receiving WHERE id = ?", (receipt.id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise StockReceiptNotFoundError(receipt.id or 0)
            previous = self._row_to_receipt(row)
            receipt.created_at = previous.created_at

            await conn.execute(
                """
                UPDATE stock_receiving SET
                    received_date = ?,
                    stock_type = ?,
                    product_name = ?,
                    raw_material_id = ?,
                    supplier_id = ?,
                    invoice_number = ?,
                    quantity = ?,
                    price_per_unit = ?,
                    package_size = ?,
                    batch_number = ?,
                    best_before_date = ?,
                    is_damaged = ?,
                    is_accepted = ?,
                    labelling_matches_specifications = ?,
                    checked_by = ?
                WHERE id = ?
                """,
                (*self._receipt_values(receipt), receipt.id),
            )

            item, movement = None, None
            same_target = (
                previous.product_name == receipt.product_name
                and previous.raw_material_id == receipt.raw_material_id
            )
            if same_target:
                delta = receipt.stocked_quantity - previous.stocked_quantity
                if abs(delta) > 1e-9:
                    item, movement = await ledger.apply_adjustment(
                        conn, await self._receipt_adjustment(conn, receipt, delta)
                    )
            else:
                if previous.stocked_quantity:
                    await ledger.apply_adjustment(
                        conn,
                        await self._receipt_adjustment(
                            conn, previous, -previous.stocked_quantity
                        ),
                    )
                if receipt.stocked_quantity:
                    item, movement = await ledger.apply_adjustment(
                        conn,
                        await self._receipt_adjustment(conn, receipt, receipt.stocked_quantity),
                    )

            for material_id in {previous.raw_material_id, receipt.raw_material_id}:
                if material_id is not None:
                    await refresh_material_cost(conn, material_id)

            logger.info(
                "stock_receipt_updated",
                receipt_id=receipt.id,
                previous_stocked=previous.stocked_quantity,
                stocked=receipt.stocked_quantity,
            )
            return receipt, item, movement

    async def get_receipt(self, receipt_id: int) -> StockReceipt | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_receiving WHERE id = ?", (receipt_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_receipt(row) if row else None

    async def list_receipts(
        self,
        stock_type: str | None = None,
        raw_material_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StockReceipt]:
        clauses: list[str] = []
        params: list = []
        if stock_type:
            clauses.append("stock_type = ?")
            params.append(stock_type)
        if raw_material_id is not None:
            clauses.append("raw_material_id = ?")
            params.append(raw_material_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM stock_receiving
                {where}
                ORDER BY received_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_receipt(row) for row in rows]

    # ------------------------------------------------------------------
    # Wastage
    # ------------------------------------------------------------------

    async def record_wastage(
        self, wastage: Wastage
    ) -> tuple[Wastage, InventoryItem, InventoryMovement]:
        wastage.created_at = datetime.utcnow()
        async with get_transaction() as conn:
            target = await ledger.fetch_inventory_item(conn, wastage.inventory_id)  # type: ignore[arg-type]
            if target is None:
                raise InventoryItemNotFoundError(wastage.inventory_id or 0)
            wastage.product_name = target.product_name

            cursor = await conn.execute(
                """
                INSERT INTO wastage (
                    wastage_date, inventory_id, product_name, quantity, reason,
                    recorded_by, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    wastage.wastage_date.isoformat(),
                    wastage.inventory_id,
                    wastage.product_name,
                    wastage.quantity,
                    wastage.reason,
                    wastage.recorded_by,
                    wastage.notes,
                    wastage.created_at.isoformat(),
                ),
            )
            wastage.id = cursor.lastrowid

            item, movement = await ledger.apply_adjustment(
                conn,
                StockAdjustment(
                    movement_type=MovementType.WASTAGE,
                    quantity=-wastage.quantity,
                    inventory_id=wastage.inventory_id,
                    reference_type=ReferenceType.WASTAGE,
                    reference_id=wastage.id,
                    notes=wastage.reason,
                    created_by=wastage.recorded_by,
                ),
            )

            logger.info(
                "wastage_recorded",
                wastage_id=wastage.id,
                item_id=item.id,
                quantity=wastage.quantity,
                stock_level=item.stock_level,
            )
            return wastage, item, movement

    async def get_wastage(self, wastage_id: int) -> Wastage | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM wastage WHERE id = ?", (wastage_id,))
            row = await cursor.fetchone()
            return self._row_to_wastage(row) if row else None

    async def list_wastage(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Wastage]:
        clauses: list[str] = []
        params: list = []
        if start_date:
            clauses.append("wastage_date >= ?")
            params.append(start_date.isoformat())
        if end_date:
            clauses.append("wastage_date <= ?")
            params.append(end_date.isoformat())

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM wastage
                {where}
                ORDER BY wastage_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_wastage(row) for row in rows]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _receipt_adjustment(
        conn: aiosqlite.Connection, receipt: StockReceipt, quantity: float
    ) -> StockAdjustment:
        """RECEIVE adjustment against the item stocking this receipt's goods."""
        if receipt.raw_material_id is not None:
            adjustment = await ledger.raw_material_adjustment(
                conn,
                receipt.raw_material_id,
                quantity,
                MovementType.RECEIVE,
                ReferenceType.STOCK_RECEIPT,
                receipt.id,
                created_by=receipt.checked_by,
            )
        else:
            adjustment = StockAdjustment(
                movement_type=MovementType.RECEIVE,
                quantity=quantity,
                product_name=receipt.product_name,
                template=InventoryItem(
                    product_name=receipt.product_name,
                    category=receipt.stock_type,
                    supplier_id=receipt.supplier_id,
                    unit_price=receipt.price_per_unit,
                    reorder_point=get_settings().inventory.default_reorder_point,
                ),
                reference_type=ReferenceType.STOCK_RECEIPT,
                reference_id=receipt.id,
                created_by=receipt.checked_by,
            )
        if quantity > 0:
            adjustment.set_unit_price = receipt.price_per_unit
        adjustment.notes = (
            f"Invoice {receipt.invoice_number}" if receipt.invoice_number else None
        )
        return adjustment

    @staticmethod
    def _receipt_values(receipt: StockReceipt) -> tuple:
        return (
            receipt.received_date.isoformat(),
            receipt.stock_type,
            receipt.product_name,
            receipt.raw_material_id,
            receipt.supplier_id,
            receipt.invoice_number,
            receipt.quantity,
            receipt.price_per_unit,
            receipt.package_size,
            receipt.batch_number,
            receipt.best_before_date.isoformat() if receipt.best_before_date else None,
            int(receipt.is_damaged),
            int(receipt.is_accepted),
            int(receipt.labelling_matches_specifications),
            receipt.checked_by,
        )

    @staticmethod
    def _row_to_receipt(row: aiosqlite.Row) -> StockReceipt:
        """Convert a database row to a StockReceipt entity."""
        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        return StockReceipt(
            id=row["id"],
            received_date=_parse_date(row["received_date"]) or date.today(),
            stock_type=row["stock_type"],
            product_name=row["product_name"],
            raw_material_id=row["raw_material_id"],
            supplier_id=row["supplier_id"],
            invoice_number=row["invoice_number"],
            quantity=float(row["quantity"]),
            price_per_unit=float(row["price_per_unit"]),
            package_size=row["package_size"],
            batch_number=row["batch_number"],
            best_before_date=_parse_date(row["best_before_date"]),
            is_damaged=bool(row["is_damaged"]),
            is_accepted=bool(row["is_accepted"]),
            labelling_matches_specifications=bool(row["labelling_matches_specifications"]),
            checked_by=row["checked_by"],
            created_at=created_at,
        )

    @staticmethod
    def _row_to_wastage(row: aiosqlite.Row) -> Wastage:
        """Convert a database row to a Wastage entity."""
        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        return Wastage(
            id=row["id"],
            wastage_date=_parse_date(row["wastage_date"]) or date.today(),
            inventory_id=row["inventory_id"],
            product_name=row["product_name"],
            quantity=float(row["quantity"]),
            reason=row["reason"],
            recorded_by=row["recorded_by"],
            notes=row["notes"],
            created_at=created_at,
        )
