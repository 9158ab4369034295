"""SQLite implementation of sales order storage."""

from datetime import date, datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.inventory import InventoryMovement, MovementType, ReferenceType
from foodworks.core.entities.sales import (
    DeliveryMethod,
    SalesItem,
    SalesOrder,
    SalesOrderStatus,
)
from foodworks.core.exceptions import (
    DuplicateSalesOrderError,
    ProductNotFoundError,
    SalesOrderNotFoundError,
)
from foodworks.core.interfaces.sales_store import ISalesStore
from foodworks.core.services.identifiers import generate_order_number
from foodworks.core.services.ledger import quantity_changes
from foodworks.infrastructure.storage.sqlite import ledger
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except (ValueError, TypeError):
        return None


class SQLiteSalesStore(ISalesStore):
    """SQLite implementation of sales orders and delivery methods."""

    async def create_order(
        self, order: SalesOrder, created_by: str | None = None
    ) -> tuple[SalesOrder, list[InventoryMovement]]:
        now = datetime.utcnow()
        order.created_at = now
        order.updated_at = now

        async with get_transaction() as conn:
            if order.order_number:
                await self._check_unique(conn, order.order_number)
            else:
                order.order_number = await self._next_order_number(conn, order.order_date)

            cursor = await conn.execute(
                """
                INSERT INTO sales_orders (
                    order_date, order_number, customer_name, delivery_method,
                    delivery_cost, is_free_shipping, status, items_total, total_amount,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    *self._header_values(order),
                    order.created_at.isoformat(),
                    order.updated_at.isoformat(),
                ),
            )
            order.id = cursor.lastrowid
            await self._write_items(conn, order)

            movements = await self._consume_packaging(
                conn, order, quantity_changes({}, order.packaging_usage()), created_by
            )
            logger.info(
                "sales_order_created",
                order_id=order.id,
                order_number=order.order_number,
                total_amount=order.total_amount,
                movements=len(movements),
            )
            return order, movements

    async def update_order(
        self, order: SalesOrder, created_by: str | None = None
    ) -> tuple[SalesOrder, list[InventoryMovement]]:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT order_number, created_at FROM sales_orders WHERE id = ?", (order.id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise SalesOrderNotFoundError(order.id or 0)

            if not order.order_number:
                order.order_number = row["order_number"]
            elif order.order_number != row["order_number"]:
                await self._check_unique(conn, order.order_number)

            previous_items = await self._load_items(conn, order.id)  # type: ignore[arg-type]
            previous_usage = SalesOrder(
                customer_name="", items=previous_items
            ).packaging_usage()

            order.updated_at = datetime.utcnow()
            await conn.execute(
                """
                UPDATE sales_orders SET
                    order_date = ?,
                    order_number = ?,
                    customer_name = ?,
                    delivery_method = ?,
                    delivery_cost = ?,
                    is_free_shipping = ?,
                    status = ?,
                    items_total = ?,
                    total_amount = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (*self._header_values(order), order.updated_at.isoformat(), order.id),
            )
            await conn.execute("DELETE FROM sales_items WHERE order_id = ?", (order.id,))
            await self._write_items(conn, order)

            movements = await self._consume_packaging(
                conn,
                order,
                quantity_changes(previous_usage, order.packaging_usage()),
                created_by,
            )
            logger.info(
                "sales_order_updated",
                order_id=order.id,
                total_amount=order.total_amount,
                movements=len(movements),
            )
            return order, movements

    async def get_order(self, order_id: int) -> SalesOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM sales_orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, order_id)
            return self._row_to_order(row, items)

    async def list_orders(
        self,
        status: SalesOrderStatus | None = None,
        customer: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[SalesOrder]:
        clauses: list[str] = []
        params: list = []
        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        if customer:
            clauses.append("customer_name LIKE ?")
            params.append(f"%{customer}%")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM sales_orders
                {where}
                ORDER BY order_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            orders = []
            for row in rows:
                items = await self._load_items(conn, row["id"])
                orders.append(self._row_to_order(row, items))
            return orders

    async def list_delivery_methods(self) -> list[DeliveryMethod]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM delivery_methods ORDER BY name")
            rows = await cursor.fetchall()
            return [
                DeliveryMethod(
                    id=row["id"],
                    name=row["name"],
                    created_at=datetime.fromisoformat(row["created_at"])
                    if row["created_at"]
                    else datetime.utcnow(),
                )
                for row in rows
            ]

    async def create_delivery_method(self, method: DeliveryMethod) -> DeliveryMethod:
        method.created_at = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "INSERT INTO delivery_methods (name, created_at) VALUES (?, ?)",
                (method.name, method.created_at.isoformat()),
            )
            method.id = cursor.lastrowid
            logger.info("delivery_method_created", method_id=method.id, name=method.name)
            return method

    async def _consume_packaging(
        self,
        conn: aiosqlite.Connection,
        order: SalesOrder,
        usage_changes: dict[int, float],
        created_by: str | None,
    ) -> list[InventoryMovement]:
        """Apply packaging usage changes as SALE movements (more usage consumes)."""
        movements = []
        for material_id, qty in usage_changes.items():
            adjustment = await ledger.raw_material_adjustment(
                conn,
                material_id,
                -qty,
                MovementType.SALE,
                ReferenceType.SALES_ORDER,
                order.id,
                created_by=created_by,
            )
            adjustment.notes = f"Order {order.order_number}"
            _, movement = await ledger.apply_adjustment(conn, adjustment)
            movements.append(movement)
        return movements

    @staticmethod
    async def _check_unique(conn: aiosqlite.Connection, order_number: str) -> None:
        cursor = await conn.execute(
            "SELECT 1 FROM sales_orders WHERE order_number = ?", (order_number,)
        )
        if await cursor.fetchone() is not None:
            raise DuplicateSalesOrderError(order_number)

    @staticmethod
    async def _next_order_number(conn: aiosqlite.Connection, order_date: date) -> str:
        cursor = await conn.execute(
            "SELECT COUNT(*) AS n FROM sales_orders WHERE order_date = ?",
            (order_date.isoformat(),),
        )
        sequence = (await cursor.fetchone())["n"] + 1
        while True:
            candidate = generate_order_number(order_date, sequence)
            cursor = await conn.execute(
                "SELECT 1 FROM sales_orders WHERE order_number = ?", (candidate,)
            )
            if await cursor.fetchone() is None:
                return candidate
            sequence += 1

    @staticmethod
    async def _write_items(conn: aiosqlite.Connection, order: SalesOrder) -> None:
        for item in order.items:
            cursor = await conn.execute(
                "SELECT 1 FROM final_products WHERE id = ?", (item.product_id,)
            )
            if await cursor.fetchone() is None:
                raise ProductNotFoundError(item.product_id)

            item.order_id = order.id
            cursor = await conn.execute(
                """
                INSERT INTO sales_items (
                    order_id, product_id, quantity, price_per_unit, total_price,
                    batch_number, best_before_date, production_date, checked_by,
                    labelling_matches_specs, packaging_material_id, packaging_quantity
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.order_id,
                    item.product_id,
                    item.quantity,
                    item.price_per_unit,
                    item.total_price,
                    item.batch_number,
                    item.best_before_date.isoformat() if item.best_before_date else None,
                    item.production_date.isoformat() if item.production_date else None,
                    item.checked_by,
                    int(item.labelling_matches_specs),
                    item.packaging_material_id,
                    item.packaging_quantity,
                ),
            )
            item.id = cursor.lastrowid

    @staticmethod
    async def _load_items(conn: aiosqlite.Connection, order_id: int) -> list[SalesItem]:
        cursor = await conn.execute(
            "SELECT * FROM sales_items WHERE order_id = ? ORDER BY id", (order_id,)
        )
        rows = await cursor.fetchall()
        return [
            SalesItem(
                id=row["id"],
                order_id=row["order_id"],
                product_id=row["product_id"],
                quantity=float(row["quantity"]),
                price_per_unit=float(row["price_per_unit"]),
                batch_number=row["batch_number"],
                best_before_date=_parse_date(row["best_before_date"]),
                production_date=_parse_date(row["production_date"]),
                checked_by=row["checked_by"],
                labelling_matches_specs=bool(row["labelling_matches_specs"]),
                packaging_material_id=row["packaging_material_id"],
                packaging_quantity=float(row["packaging_quantity"]),
            )
            for row in rows
        ]

    @staticmethod
    def _header_values(order: SalesOrder) -> tuple:
        return (
            order.order_date.isoformat(),
            order.order_number,
            order.customer_name,
            order.delivery_method,
            order.delivery_cost,
            int(order.is_free_shipping),
            order.status.value,
            order.items_total,
            order.total_amount,
        )

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, items: list[SalesItem]) -> SalesOrder:
        """Convert a database row to a SalesOrder entity."""
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

        status = SalesOrderStatus.PENDING
        try:
            status = SalesOrderStatus(row["status"])
        except ValueError:
            pass

        return SalesOrder(
            id=row["id"],
            order_date=_parse_date(row["order_date"]) or date.today(),
            order_number=row["order_number"],
            customer_name=row["customer_name"],
            delivery_method=row["delivery_method"],
            delivery_cost=float(row["delivery_cost"]),
            is_free_shipping=bool(row["is_free_shipping"]),
            status=status,
            items_total=float(row["items_total"]),
            items=items,
            created_at=created_at,
            updated_at=updated_at,
        )
