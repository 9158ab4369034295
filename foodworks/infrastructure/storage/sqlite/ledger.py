"""
Connection-level inventory ledger operations.

These helpers take an open connection so that stores can apply stock
adjustments inside their own transaction (batch saves, receipts, wastage,
sales orders). They never commit.
"""

from datetime import datetime

import aiosqlite

from foodworks.config import get_logger, get_settings
from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.exceptions import (
    ConcurrencyConflictError,
    InventoryItemNotFoundError,
    ProductNotFoundError,
    RawMaterialNotFoundError,
)
from foodworks.core.services.identifiers import generate_sku
from foodworks.core.services.ledger import StockAdjustment, next_stock_level

logger = get_logger(__name__)


def _parse_datetime(value: str | None) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


def row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
    """Convert a database row to an InventoryItem entity."""
    return InventoryItem(
        id=row["id"],
        product_name=row["product_name"],
        sku=row["sku"],
        category=row["category"],
        unit=row["unit"],
        stock_level=float(row["stock_level"]),
        unit_price=float(row["unit_price"]),
        reorder_point=float(row["reorder_point"]),
        supplier_id=row["supplier_id"],
        is_recipe_based=bool(row["is_recipe_based"]),
        is_final_product=bool(row["is_final_product"]),
        version=row["version"],
        last_updated=_parse_datetime(row["last_updated"]),
        created_at=_parse_datetime(row["created_at"]),
    )


def row_to_movement(row: aiosqlite.Row) -> InventoryMovement:
    """Convert a database row to an InventoryMovement entity."""
    reference_type = None
    if row["reference_type"]:
        try:
            reference_type = ReferenceType(row["reference_type"])
        except ValueError:
            pass

    return InventoryMovement(
        id=row["id"],
        inventory_id=row["inventory_id"],
        product_name=row["product_name"],
        movement_type=MovementType(row["movement_type"]),
        quantity=float(row["quantity"]),
        reference_type=reference_type,
        reference_id=row["reference_id"],
        notes=row["notes"],
        created_by=row["created_by"],
        created_at=_parse_datetime(row["created_at"]),
    )


async def fetch_inventory_item(
    conn: aiosqlite.Connection, item_id: int
) -> InventoryItem | None:
    cursor = await conn.execute("SELECT * FROM inventory WHERE id = ?", (item_id,))
    row = await cursor.fetchone()
    return row_to_inventory_item(row) if row else None


async def find_inventory_item(
    conn: aiosqlite.Connection, product_name: str, is_final_product: bool
) -> InventoryItem | None:
    """Oldest inventory item with this product name and finished-good flag."""
    cursor = await conn.execute(
        """
        SELECT * FROM inventory
        WHERE product_name = ? AND is_final_product = ?
        ORDER BY id
        LIMIT 1
        """,
        (product_name, int(is_final_product)),
    )
    row = await cursor.fetchone()
    return row_to_inventory_item(row) if row else None


async def insert_inventory_item(
    conn: aiosqlite.Connection, item: InventoryItem
) -> InventoryItem:
    """Insert an inventory item, generating a SKU when it has none."""
    if not item.sku:
        item.sku = generate_sku(
            item.category, default_category=get_settings().inventory.default_sku_category
        )
    now = datetime.utcnow()
    item.created_at = now
    item.last_updated = now
    item.version = 1
    cursor = await conn.execute(
        """
        INSERT INTO inventory (
            product_name, sku, category, unit, stock_level, unit_price,
            reorder_point, supplier_id, is_recipe_based, is_final_product,
            version, last_updated, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            item.product_name,
            item.sku,
            item.category,
            item.unit,
            item.stock_level,
            item.unit_price,
            item.reorder_point,
            item.supplier_id,
            int(item.is_recipe_based),
            int(item.is_final_product),
            item.version,
            item.last_updated.isoformat(),
            item.created_at.isoformat(),
        ),
    )
    item.id = cursor.lastrowid
    logger.info(
        "inventory_item_created",
        item_id=item.id,
        product_name=item.product_name,
        sku=item.sku,
    )
    return item


async def insert_movement(
    conn: aiosqlite.Connection, movement: InventoryMovement
) -> InventoryMovement:
    cursor = await conn.execute(
        """
        INSERT INTO inventory_movements (
            inventory_id, product_name, movement_type, quantity,
            reference_type, reference_id, notes, created_by, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            movement.inventory_id,
            movement.product_name,
            movement.movement_type.value,
            movement.quantity,
            movement.reference_type.value if movement.reference_type else None,
            movement.reference_id,
            movement.notes,
            movement.created_by,
            movement.created_at.isoformat(),
        ),
    )
    movement.id = cursor.lastrowid
    return movement


async def _resolve_item(
    conn: aiosqlite.Connection, adjustment: StockAdjustment
) -> InventoryItem:
    if adjustment.inventory_id is not None:
        item = await fetch_inventory_item(conn, adjustment.inventory_id)
        if item is None:
            raise InventoryItemNotFoundError(adjustment.inventory_id)
        return item

    item = await find_inventory_item(
        conn, adjustment.product_name, adjustment.is_final_product  # type: ignore[arg-type]
    )
    if item is not None:
        return item

    template = adjustment.template or InventoryItem(product_name=adjustment.product_name)
    template = template.model_copy(
        update={
            "product_name": adjustment.product_name,
            "is_final_product": adjustment.is_final_product,
            "stock_level": 0.0,
        }
    )
    return await insert_inventory_item(conn, template)


async def rename_inventory_items(
    conn: aiosqlite.Connection, old_name: str, new_name: str, is_final_product: bool
) -> int:
    """Carry a material or product rename over to its inventory counterpart."""
    if old_name == new_name:
        return 0
    cursor = await conn.execute(
        """
        UPDATE inventory SET
            product_name = ?,
            version = version + 1,
            last_updated = ?
        WHERE product_name = ? AND is_final_product = ?
        """,
        (new_name, datetime.utcnow().isoformat(), old_name, int(is_final_product)),
    )
    if cursor.rowcount:
        logger.info(
            "inventory_items_renamed",
            old_name=old_name,
            new_name=new_name,
            items=cursor.rowcount,
        )
    return cursor.rowcount


async def write_stock_level(
    conn: aiosqlite.Connection,
    item: InventoryItem,
    stock_level: float,
    unit_price: float | None = None,
) -> InventoryItem:
    """
    Version-guarded stock level write.

    Raises ConcurrencyConflictError when the row changed since ``item`` was read.
    """
    now = datetime.utcnow()
    new_price = item.unit_price if unit_price is None else unit_price
    cursor = await conn.execute(
        """
        UPDATE inventory SET
            stock_level = ?,
            unit_price = ?,
            version = version + 1,
            last_updated = ?
        WHERE id = ? AND version = ?
        """,
        (stock_level, new_price, now.isoformat(), item.id, item.version),
    )
    if cursor.rowcount == 0:
        raise ConcurrencyConflictError("Inventory item", item.id or 0, item.version)
    return item.model_copy(
        update={
            "stock_level": stock_level,
            "unit_price": new_price,
            "version": item.version + 1,
            "last_updated": now,
        }
    )


async def apply_adjustment(
    conn: aiosqlite.Connection, adjustment: StockAdjustment
) -> tuple[InventoryItem, InventoryMovement]:
    """
    Apply one signed stock delta and append its movement.

    Must run inside the caller's transaction: the stock write and the
    movement insert commit or roll back together.
    """
    item = await _resolve_item(conn, adjustment)
    new_level = next_stock_level(item.stock_level, adjustment.quantity, adjustment.movement_type)
    updated = await write_stock_level(conn, item, new_level, adjustment.set_unit_price)

    movement = await insert_movement(
        conn,
        InventoryMovement(
            inventory_id=updated.id,
            product_name=updated.product_name,
            movement_type=adjustment.movement_type,
            quantity=adjustment.quantity,
            reference_type=adjustment.reference_type,
            reference_id=adjustment.reference_id,
            notes=adjustment.notes,
            created_by=adjustment.created_by,
        ),
    )

    logger.info(
        "stock_adjusted",
        item_id=updated.id,
        movement_id=movement.id,
        type=adjustment.movement_type.value,
        delta=adjustment.quantity,
        old_level=item.stock_level,
        new_level=new_level,
    )
    return updated, movement


async def raw_material_adjustment(
    conn: aiosqlite.Connection,
    raw_material_id: int,
    quantity: float,
    movement_type: MovementType,
    reference_type: ReferenceType,
    reference_id: int | None,
    created_by: str | None = None,
) -> StockAdjustment:
    """Adjustment against the inventory item that stocks a raw material."""
    cursor = await conn.execute(
        "SELECT name, category, unit, unit_cost, supplier_id FROM raw_materials WHERE id = ?",
        (raw_material_id,),
    )
    row = await cursor.fetchone()
    if row is None:
        raise RawMaterialNotFoundError(raw_material_id)

    return StockAdjustment(
        movement_type=movement_type,
        quantity=quantity,
        product_name=row["name"],
        is_final_product=False,
        template=InventoryItem(
            product_name=row["name"],
            category=row["category"],
            unit=row["unit"],
            unit_price=float(row["unit_cost"]),
            supplier_id=row["supplier_id"],
            reorder_point=get_settings().inventory.default_reorder_point,
        ),
        reference_type=reference_type,
        reference_id=reference_id,
        created_by=created_by,
    )


async def final_product_adjustment(
    conn: aiosqlite.Connection,
    product_id: int,
    quantity: float,
    reference_type: ReferenceType,
    reference_id: int | None,
    created_by: str | None = None,
) -> StockAdjustment:
    """Production adjustment against a finished product's inventory item."""
    cursor = await conn.execute(
        "SELECT name, sku, category, unit_selling_price FROM final_products WHERE id = ?",
        (product_id,),
    )
    row = await cursor.fetchone()
    if row is None:
        raise ProductNotFoundError(product_id)

    settings = get_settings().inventory
    return StockAdjustment(
        movement_type=MovementType.MANUFACTURING_PRODUCE,
        quantity=quantity,
        product_name=row["name"],
        is_final_product=True,
        template=InventoryItem(
            product_name=row["name"],
            sku=row["sku"],
            category=row["category"],
            unit=settings.final_product_unit,
            unit_price=float(row["unit_selling_price"]),
            reorder_point=settings.default_reorder_point,
            is_recipe_based=True,
            is_final_product=True,
        ),
        reference_type=reference_type,
        reference_id=reference_id,
        created_by=created_by,
    )
