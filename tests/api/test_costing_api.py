"""API tests for raw materials, recipes and products."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from foodworks.api.dependencies import (
    get_prod_store,
    get_raw_mat_store,
    get_rcp_store,
    get_recalculate_costs_use_case,
)
from foodworks.api.main import app
from foodworks.application.use_cases import RecalculateCostsUseCase
from foodworks.core.entities.product import FinalProduct
from foodworks.core.entities.recipe import RawMaterial, Recipe, RecipeItem
from foodworks.core.exceptions import RawMaterialNotFoundError, RecordInUseError

MATERIAL = RawMaterial(id=1, name="Assam Leaf", unit="g", unit_cost=0.002)
PRODUCT = FinalProduct(
    id=1, name="Breakfast Tea", recipe_id=1, unit_selling_price=3.0, recipe_cost=1.2
)


def _recipe(current_unit_cost: float | None = None) -> Recipe:
    return Recipe(
        id=1,
        name="Breakfast Tea",
        total_price=1.2,
        items=[
            RecipeItem(
                id=1,
                raw_material_id=1,
                raw_material_name="Assam Leaf",
                quantity=100,
                unit_cost=0.002,
                total_cost=0.2,
                current_unit_cost=current_unit_cost,
            ),
            RecipeItem(
                id=2,
                raw_material_id=2,
                raw_material_name="Kraft Pouch",
                quantity=1,
                unit_cost=1.0,
                total_cost=1.0,
                position=1,
            ),
        ],
    )


@pytest.fixture
def stores():
    materials = AsyncMock()
    materials.create.return_value = MATERIAL
    materials.get.return_value = MATERIAL
    materials.list_materials.return_value = [MATERIAL]

    recipes = AsyncMock()
    recipes.create.return_value = _recipe()
    recipes.get.return_value = _recipe()
    recipes.list_recipes.return_value = [_recipe()]
    recipes.delete.return_value = False

    products = AsyncMock()
    products.create.return_value = PRODUCT
    products.get.return_value = PRODUCT
    products.list_products.return_value = [PRODUCT]
    return {"materials": materials, "recipes": recipes, "products": products}


@pytest.fixture
def mock_recalculate():
    uc = AsyncMock(spec=RecalculateCostsUseCase)
    uc.execute.return_value = [_recipe()]
    uc.to_response.return_value = RecalculateCostsUseCase().to_response([_recipe()])
    return uc


@pytest.fixture
async def costing_client(stores, mock_recalculate):
    overrides = {
        get_raw_mat_store: lambda: stores["materials"],
        get_rcp_store: lambda: stores["recipes"],
        get_prod_store: lambda: stores["products"],
        get_recalculate_costs_use_case: lambda: mock_recalculate,
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


class TestRawMaterialsAPI:
    async def test_create(self, costing_client: AsyncClient):
        response = await costing_client.post(
            "/api/raw-materials", json={"name": "Assam Leaf", "unit": "g", "unit_cost": 0.002}
        )
        assert response.status_code == 201
        assert response.json()["unit_cost"] == 0.002

    async def test_negative_cost_rejected(self, costing_client: AsyncClient):
        response = await costing_client.post(
            "/api/raw-materials", json={"name": "Assam Leaf", "unit_cost": -1}
        )
        assert response.status_code == 422

    async def test_get_missing(self, costing_client: AsyncClient, stores):
        stores["materials"].get.return_value = None
        response = await costing_client.get("/api/raw-materials/5")
        assert response.status_code == 404
        assert response.json()["error_code"] == "RAW_MATERIAL_NOT_FOUND"

    async def test_delete_material_in_use_is_409(self, costing_client: AsyncClient, stores):
        stores["materials"].delete.side_effect = RecordInUseError("Raw material", 1)
        response = await costing_client.delete("/api/raw-materials/1")
        assert response.status_code == 409
        assert response.json()["error_code"] == "RECORD_IN_USE"


class TestRecipesAPI:
    async def test_create_returns_snapshot(self, costing_client: AsyncClient, stores):
        response = await costing_client.post(
            "/api/recipes",
            json={
                "name": "Breakfast Tea",
                "items": [
                    {"raw_material_id": 1, "quantity": 100},
                    {"raw_material_id": 2, "quantity": 1},
                ],
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["total_price"] == 1.2
        assert data["is_stale"] is False

        created = stores["recipes"].create.call_args.args[0]
        assert [i.position for i in created.items] == [0, 1]

    async def test_stale_recipe(self, costing_client: AsyncClient, stores):
        stores["recipes"].get.return_value = _recipe(current_unit_cost=0.007)
        response = await costing_client.get("/api/recipes/1")
        data = response.json()
        assert data["is_stale"] is True
        assert data["current_cost"] == pytest.approx(1.7)

    async def test_recalculate_not_shadowed(self, costing_client: AsyncClient, mock_recalculate):
        response = await costing_client.post("/api/recipes/recalculate", json={"raw_material_id": 1})
        assert response.status_code == 200
        assert response.json()["recipes_updated"] == 1
        assert mock_recalculate.execute.call_args.args[0].raw_material_id == 1

    async def test_recalculate_unknown_material(
        self, costing_client: AsyncClient, mock_recalculate
    ):
        mock_recalculate.execute.side_effect = RawMaterialNotFoundError(99)
        response = await costing_client.post("/api/recipes/recalculate", json={"raw_material_id": 99})
        assert response.status_code == 404
        assert response.json()["error_code"] == "RAW_MATERIAL_NOT_FOUND"

    async def test_delete_missing(self, costing_client: AsyncClient):
        response = await costing_client.delete("/api/recipes/1")
        assert response.status_code == 404
        assert response.json()["error_code"] == "RECIPE_NOT_FOUND"


class TestProductsAPI:
    async def test_margins_in_response(self, costing_client: AsyncClient):
        response = await costing_client.get("/api/products/1")
        data = response.json()
        assert data["recipe_cost"] == 1.2
        assert data["markup"] == 150.0
        assert data["profit_margin"] == 60.0
        assert data["profit_per_item"] == 1.8

    async def test_update_missing(self, costing_client: AsyncClient, stores):
        stores["products"].get.return_value = None
        response = await costing_client.put("/api/products/3", json={"name": "Green Tea"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_delete_product_in_use_is_409(self, costing_client: AsyncClient, stores):
        stores["products"].delete.side_effect = RecordInUseError("Product", 1)
        response = await costing_client.delete("/api/products/1")
        assert response.status_code == 409
        assert response.json()["error_code"] == "RECORD_IN_USE"
