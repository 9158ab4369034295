"""SQLite implementation of finished product storage."""

from datetime import datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.product import FinalProduct
from foodworks.core.exceptions import RecipeNotFoundError, RecordInUseError
from foodworks.core.interfaces.costing_store import IProductStore
from foodworks.core.services.costing import recipe_cost
from foodworks.infrastructure.storage.sqlite import ledger
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


async def current_recipe_cost(conn: aiosqlite.Connection, recipe_id: int | None) -> float:
    """Cost of one unit of a recipe at today's raw material costs."""
    if recipe_id is None:
        return 0.0
    cursor = await conn.execute(
        """
        SELECT ri.quantity, rm.unit_cost
        FROM recipe_items ri
        JOIN raw_materials rm ON rm.id = ri.raw_material_id
        WHERE ri.recipe_id = ?
        """,
        (recipe_id,),
    )
    rows = await cursor.fetchall()
    return recipe_cost((float(r["quantity"]), float(r["unit_cost"])) for r in rows)


class SQLiteProductStore(IProductStore):
    """SQLite implementation of finished products.

    Margins are never persisted; ``recipe_cost`` is priced on every read.
    """

    async def create(self, product: FinalProduct) -> FinalProduct:
        now = datetime.utcnow()
        product.created_at = now
        product.updated_at = now
        async with get_transaction() as conn:
            await self._check_recipe(conn, product.recipe_id)
            cursor = await conn.execute(
                """
                INSERT INTO final_products (
                    name, sku, category, recipe_id, unit_selling_price, is_active,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.name,
                    product.sku,
                    product.category,
                    product.recipe_id,
                    product.unit_selling_price,
                    int(product.is_active),
                    product.created_at.isoformat(),
                    product.updated_at.isoformat(),
                ),
            )
            product.id = cursor.lastrowid
            product.recipe_cost = await current_recipe_cost(conn, product.recipe_id)
            logger.info("product_created", product_id=product.id, name=product.name)
            return product

    async def get(self, product_id: int) -> FinalProduct | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM final_products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            product = self._row_to_product(row)
            product.recipe_cost = await current_recipe_cost(conn, product.recipe_id)
            return product

    async def list_products(
        self, active_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[FinalProduct]:
        where = "WHERE is_active = 1" if active_only else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM final_products
                {where}
                ORDER BY name
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            products = []
            for row in rows:
                product = self._row_to_product(row)
                product.recipe_cost = await current_recipe_cost(conn, product.recipe_id)
                products.append(product)
            return products

    async def update(self, product: FinalProduct) -> FinalProduct:
        product.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await self._check_recipe(conn, product.recipe_id)
            cursor = await conn.execute(
                "SELECT name FROM final_products WHERE id = ?", (product.id,)
            )
            previous = await cursor.fetchone()
            await conn.execute(
                """
                UPDATE final_products SET
                    name = ?,
                    sku = ?,
                    category = ?,
                    recipe_id = ?,
                    unit_selling_price = ?,
                    is_active = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    product.name,
                    product.sku,
                    product.category,
                    product.recipe_id,
                    product.unit_selling_price,
                    int(product.is_active),
                    product.updated_at.isoformat(),
                    product.id,
                ),
            )
            if previous is not None:
                await ledger.rename_inventory_items(
                    conn, previous["name"], product.name, is_final_product=True
                )
            product.recipe_cost = await current_recipe_cost(conn, product.recipe_id)
            logger.info("product_updated", product_id=product.id)
            return product

    async def delete(self, product_id: int) -> bool:
        """Delete a product unless batches or sales orders still reference it."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM final_products WHERE id = ?", (product_id,))
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            logger.warning("product_delete_blocked", product_id=product_id, error=str(e))
            raise RecordInUseError("Product", product_id) from e

        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted

    @staticmethod
    async def _check_recipe(conn: aiosqlite.Connection, recipe_id: int | None) -> None:
        if recipe_id is None:
            return
        cursor = await conn.execute("SELECT 1 FROM product_recipes WHERE id = ?", (recipe_id,))
        if await cursor.fetchone() is None:
            raise RecipeNotFoundError(recipe_id)

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> FinalProduct:
        """Convert a database row to a FinalProduct entity."""
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

        return FinalProduct(
            id=row["id"],
            name=row["name"],
            sku=row["sku"],
            category=row["category"],
            recipe_id=row["recipe_id"],
            unit_selling_price=float(row["unit_selling_price"]),
            is_active=bool(row["is_active"]),
            created_at=created_at,
            updated_at=updated_at,
        )
