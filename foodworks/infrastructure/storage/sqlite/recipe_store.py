"""SQLite implementation of recipe (bill of materials) storage."""

from datetime import datetime

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.recipe import Recipe, RecipeItem
from foodworks.core.exceptions import RawMaterialNotFoundError
from foodworks.core.interfaces.costing_store import IRecipeStore
from foodworks.core.services.costing import recipe_cost
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteRecipeStore(IRecipeStore):
    """SQLite implementation of recipe storage.

    Item ``unit_cost``/``total_cost`` and the recipe ``total_price`` are a
    snapshot of raw material costs at save time. Reads also carry each
    material's current cost so callers can price against live figures.
    """

    async def create(self, recipe: Recipe) -> Recipe:
        now = datetime.utcnow()
        recipe.created_at = now
        recipe.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO product_recipes (
                    name, description, is_active, total_price, created_at, updated_at
                ) VALUES (?, ?, ?, 0, ?, ?)
                """,
                (
                    recipe.name,
                    recipe.description,
                    int(recipe.is_active),
                    recipe.created_at.isoformat(),
                    recipe.updated_at.isoformat(),
                ),
            )
            recipe.id = cursor.lastrowid
            await self._write_items(conn, recipe)
            logger.info(
                "recipe_created",
                recipe_id=recipe.id,
                items=len(recipe.items),
                total_price=round(recipe.total_price, 4),
            )
            return recipe

    async def get(self, recipe_id: int) -> Recipe | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM product_recipes WHERE id = ?", (recipe_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, recipe_id)
            return self._row_to_recipe(row, items)

    async def list_recipes(
        self, active_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[Recipe]:
        where = "WHERE is_active = 1" if active_only else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM product_recipes
                {where}
                ORDER BY name
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            recipes = []
            for row in rows:
                items = await self._load_items(conn, row["id"])
                recipes.append(self._row_to_recipe(row, items))
            return recipes

    async def update(self, recipe: Recipe) -> Recipe:
        recipe.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE product_recipes SET
                    name = ?,
                    description = ?,
                    is_active = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    recipe.name,
                    recipe.description,
                    int(recipe.is_active),
                    recipe.updated_at.isoformat(),
                    recipe.id,
                ),
            )
            await conn.execute("DELETE FROM recipe_items WHERE recipe_id = ?", (recipe.id,))
            await self._write_items(conn, recipe)
            logger.info("recipe_updated", recipe_id=recipe.id, items=len(recipe.items))
            return recipe

    async def delete(self, recipe_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM product_recipes WHERE id = ?", (recipe_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("recipe_deleted", recipe_id=recipe_id)
            return deleted

    async def recalculate_costs(self, raw_material_id: int | None = None) -> list[Recipe]:
        """Re-snapshot item costs and totals against current raw material costs."""
        async with get_transaction() as conn:
            if raw_material_id is None:
                cursor = await conn.execute("SELECT id FROM product_recipes ORDER BY id")
            else:
                cursor = await conn.execute(
                    """
                    SELECT DISTINCT recipe_id AS id FROM recipe_items
                    WHERE raw_material_id = ?
                    ORDER BY recipe_id
                    """,
                    (raw_material_id,),
                )
            recipe_ids = [row["id"] for row in await cursor.fetchall()]

            for recipe_id in recipe_ids:
                items = await self._load_items(conn, recipe_id)
                for item in items:
                    item.unit_cost = item.effective_unit_cost
                    item.total_cost = item.quantity * item.unit_cost
                    await conn.execute(
                        "UPDATE recipe_items SET unit_cost = ?, total_cost = ? WHERE id = ?",
                        (item.unit_cost, item.total_cost, item.id),
                    )
                total = recipe_cost((i.quantity, i.unit_cost) for i in items)
                await conn.execute(
                    "UPDATE product_recipes SET total_price = ?, updated_at = ? WHERE id = ?",
                    (total, datetime.utcnow().isoformat(), recipe_id),
                )

            logger.info(
                "recipe_costs_recalculated",
                raw_material_id=raw_material_id,
                recipes=len(recipe_ids),
            )

        recipes = []
        for recipe_id in recipe_ids:
            recipe = await self.get(recipe_id)
            if recipe is not None:
                recipes.append(recipe)
        return recipes

    async def _write_items(self, conn: aiosqlite.Connection, recipe: Recipe) -> None:
        """Insert recipe items with a snapshot of current material costs."""
        for position, item in enumerate(recipe.items):
            cursor = await conn.execute(
                "SELECT name, unit_cost FROM raw_materials WHERE id = ?",
                (item.raw_material_id,),
            )
            material = await cursor.fetchone()
            if material is None:
                raise RawMaterialNotFoundError(item.raw_material_id)

            item.recipe_id = recipe.id
            item.position = position
            item.raw_material_name = material["name"]
            item.unit_cost = float(material["unit_cost"])
            item.current_unit_cost = item.unit_cost
            item.total_cost = item.quantity * item.unit_cost
            cursor = await conn.execute(
                """
                INSERT INTO recipe_items (
                    recipe_id, raw_material_id, quantity, unit_cost, total_cost, position
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    item.recipe_id,
                    item.raw_material_id,
                    item.quantity,
                    item.unit_cost,
                    item.total_cost,
                    item.position,
                ),
            )
            item.id = cursor.lastrowid

        recipe.total_price = recipe_cost((i.quantity, i.unit_cost) for i in recipe.items)
        await conn.execute(
            "UPDATE product_recipes SET total_price = ? WHERE id = ?",
            (recipe.total_price, recipe.id),
        )

    @staticmethod
    async def _load_items(conn: aiosqlite.Connection, recipe_id: int) -> list[RecipeItem]:
        cursor = await conn.execute(
            """
            SELECT ri.*, rm.name AS raw_material_name, rm.unit_cost AS current_unit_cost
            FROM recipe_items ri
            JOIN raw_materials rm ON rm.id = ri.raw_material_id
            WHERE ri.recipe_id = ?
            ORDER BY ri.position, ri.id
            """,
            (recipe_id,),
        )
        rows = await cursor.fetchall()
        return [
            RecipeItem(
                id=row["id"],
                recipe_id=row["recipe_id"],
                raw_material_id=row["raw_material_id"],
                raw_material_name=row["raw_material_name"],
                quantity=float(row["quantity"]),
                unit_cost=float(row["unit_cost"]),
                total_cost=float(row["total_cost"]),
                current_unit_cost=float(row["current_unit_cost"]),
                position=row["position"],
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_recipe(row: aiosqlite.Row, items: list[RecipeItem]) -> Recipe:
        """Convert a database row to a Recipe entity."""
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

        return Recipe(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            is_active=bool(row["is_active"]),
            total_price=float(row["total_price"]),
            items=items,
            created_at=created_at,
            updated_at=updated_at,
        )
