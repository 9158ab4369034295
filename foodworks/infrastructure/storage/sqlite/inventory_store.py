"""SQLite implementation of the inventory ledger."""

from datetime import datetime

from foodworks.config import get_logger
from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.exceptions import ConcurrencyConflictError
from foodworks.core.interfaces.inventory_store import IInventoryStore
from foodworks.core.services.ledger import StockAdjustment
from foodworks.infrastructure.storage.sqlite import ledger
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory items and stock movements."""

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        async with get_transaction() as conn:
            return await ledger.insert_inventory_item(conn, item)

    async def get_item(self, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        async with get_connection() as conn:
            return await ledger.fetch_inventory_item(conn, item_id)

    async def find_item(
        self, product_name: str, is_final_product: bool = False
    ) -> InventoryItem | None:
        async with get_connection() as conn:
            return await ledger.find_inventory_item(conn, product_name, is_final_product)

    async def update_item(self, item: InventoryItem, expected_version: int) -> InventoryItem:
        """Update item details; stock level only moves through adjustments."""
        now = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory SET
                    product_name = ?,
                    sku = ?,
                    category = ?,
                    unit = ?,
                    unit_price = ?,
                    reorder_point = ?,
                    supplier_id = ?,
                    is_recipe_based = ?,
                    is_final_product = ?,
                    version = version + 1,
                    last_updated = ?
                WHERE id = ? AND version = ?
                """,
                (
                    item.product_name,
                    item.sku,
                    item.category,
                    item.unit,
                    item.unit_price,
                    item.reorder_point,
                    item.supplier_id,
                    int(item.is_recipe_based),
                    int(item.is_final_product),
                    now.isoformat(),
                    item.id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                raise ConcurrencyConflictError("Inventory item", item.id or 0, expected_version)

            updated = await ledger.fetch_inventory_item(conn, item.id)  # type: ignore[arg-type]
            logger.info("inventory_item_updated", item_id=item.id, version=updated.version)
            return updated  # type: ignore[return-value]

    async def delete_item(self, item_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM inventory WHERE id = ?", (item_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("inventory_item_deleted", item_id=item_id)
            return deleted

    async def list_items(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
        needs_reorder: bool = False,
        is_final_product: bool | None = None,
    ) -> list[InventoryItem]:
        """List inventory items ordered by product name."""
        clauses: list[str] = []
        params: list = []
        if category:
            clauses.append("category = ?")
            params.append(category)
        if needs_reorder:
            clauses.append("stock_level <= reorder_point")
        if is_final_product is not None:
            clauses.append("is_final_product = ?")
            params.append(int(is_final_product))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory
                {where}
                ORDER BY product_name, id
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [ledger.row_to_inventory_item(row) for row in rows]

    async def apply_adjustment(
        self, adjustment: StockAdjustment
    ) -> tuple[InventoryItem, InventoryMovement]:
        async with get_transaction() as conn:
            return await ledger.apply_adjustment(conn, adjustment)

    async def list_movements(
        self,
        inventory_id: int | None = None,
        movement_type: MovementType | None = None,
        reference_type: ReferenceType | None = None,
        reference_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryMovement]:
        """List movements, newest first."""
        clauses: list[str] = []
        params: list = []
        if inventory_id is not None:
            clauses.append("inventory_id = ?")
            params.append(inventory_id)
        if movement_type is not None:
            clauses.append("movement_type = ?")
            params.append(movement_type.value)
        if reference_type is not None:
            clauses.append("reference_type = ?")
            params.append(reference_type.value)
        if reference_id is not None:
            clauses.append("reference_id = ?")
            params.append(reference_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory_movements
                {where}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [ledger.row_to_movement(row) for row in rows]
