"""Tests for RecalculateCostsUseCase."""

from unittest.mock import AsyncMock

import pytest

from foodworks.application.dto.requests import RecalculateCostsRequest
from foodworks.application.use_cases.recalculate_costs import RecalculateCostsUseCase
from foodworks.core.entities.recipe import RawMaterial, Recipe, RecipeItem
from foodworks.core.exceptions import RawMaterialNotFoundError


@pytest.fixture
def recipe() -> Recipe:
    return Recipe(
        id=1,
        name="Breakfast Blend",
        total_price=1.70,
        items=[
            RecipeItem(raw_material_id=1, quantity=500, unit_cost=0.003, total_cost=1.5),
            RecipeItem(raw_material_id=2, quantity=2, unit_cost=0.10, total_cost=0.2),
        ],
    )


@pytest.fixture
def stores(recipe):
    recipe_store = AsyncMock()
    recipe_store.recalculate_costs.return_value = [recipe]
    raw_material_store = AsyncMock()
    raw_material_store.refresh_average_cost.return_value = RawMaterial(id=1, name="Assam Leaf")
    return recipe_store, raw_material_store


class TestRecalculateCostsUseCase:
    async def test_all_recipes(self, stores):
        recipe_store, raw_material_store = stores
        use_case = RecalculateCostsUseCase(
            recipe_store=recipe_store, raw_material_store=raw_material_store
        )
        recipes = await use_case.execute(RecalculateCostsRequest())

        raw_material_store.refresh_average_cost.assert_not_called()
        recipe_store.recalculate_costs.assert_called_once_with(raw_material_id=None)
        response = use_case.to_response(recipes)
        assert response.recipes_updated == 1
        assert response.recipes[0].total_price == pytest.approx(1.70)

    async def test_single_material_refreshes_cost_first(self, stores):
        recipe_store, raw_material_store = stores
        use_case = RecalculateCostsUseCase(
            recipe_store=recipe_store, raw_material_store=raw_material_store
        )
        await use_case.execute(RecalculateCostsRequest(raw_material_id=1))

        raw_material_store.refresh_average_cost.assert_called_once_with(1)
        recipe_store.recalculate_costs.assert_called_once_with(raw_material_id=1)

    async def test_unknown_material(self, stores):
        recipe_store, raw_material_store = stores
        raw_material_store.refresh_average_cost.return_value = None
        use_case = RecalculateCostsUseCase(
            recipe_store=recipe_store, raw_material_store=raw_material_store
        )
        with pytest.raises(RawMaterialNotFoundError):
            await use_case.execute(RecalculateCostsRequest(raw_material_id=99))
        recipe_store.recalculate_costs.assert_not_called()
