"""Recipe (bill of materials) endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import get_rcp_store, get_recalculate_costs_use_case
from foodworks.application.dto.converters import recipe_to_response
from foodworks.application.dto.requests import RecalculateCostsRequest, RecipeRequest
from foodworks.application.dto.responses import (
    ErrorResponse,
    RecalculateCostsResponse,
    RecipeResponse,
)
from foodworks.application.use_cases import RecalculateCostsUseCase
from foodworks.core.entities.recipe import Recipe, RecipeItem
from foodworks.infrastructure.storage.sqlite import SQLiteRecipeStore

router = APIRouter(prefix="/api/recipes", tags=["costing"])


def _request_to_recipe(request: RecipeRequest, recipe_id: int | None = None) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=request.name,
        description=request.description,
        is_active=request.is_active,
        items=[
            RecipeItem(raw_material_id=i.raw_material_id, quantity=i.quantity, position=n)
            for n, i in enumerate(request.items)
        ],
    )


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_recipe(
    request: RecipeRequest,
    store: SQLiteRecipeStore = Depends(get_rcp_store),
) -> RecipeResponse:
    """Create a recipe; item costs are snapshotted from current raw material costs."""
    recipe = await store.create(_request_to_recipe(request))
    saved = await store.get(recipe.id)  # type: ignore[arg-type]
    return recipe_to_response(saved or recipe)


@router.get("", response_model=list[RecipeResponse])
async def list_recipes(
    active_only: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteRecipeStore = Depends(get_rcp_store),
) -> list[RecipeResponse]:
    recipes = await store.list_recipes(active_only=active_only, limit=limit, offset=offset)
    return [recipe_to_response(r) for r in recipes]


@router.post("/recalculate", response_model=RecalculateCostsResponse)
async def recalculate_costs(
    request: RecalculateCostsRequest,
    use_case: RecalculateCostsUseCase = Depends(get_recalculate_costs_use_case),
) -> RecalculateCostsResponse:
    """Re-snapshot item costs from current raw material costs."""
    recipes = await use_case.execute(request)
    return use_case.to_response(recipes)


@router.get(
    "/{recipe_id}",
    response_model=RecipeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_recipe(
    recipe_id: int,
    store: SQLiteRecipeStore = Depends(get_rcp_store),
) -> RecipeResponse:
    """Get a recipe with snapshot and current costs side by side."""
    recipe = await store.get(recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail=f"Recipe not found: {recipe_id}")
    return recipe_to_response(recipe)


@router.put(
    "/{recipe_id}",
    response_model=RecipeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_recipe(
    recipe_id: int,
    request: RecipeRequest,
    store: SQLiteRecipeStore = Depends(get_rcp_store),
) -> RecipeResponse:
    """Replace a recipe and its items."""
    if not await store.get(recipe_id):
        raise HTTPException(status_code=404, detail=f"Recipe not found: {recipe_id}")
    recipe = await store.update(_request_to_recipe(request, recipe_id))
    saved = await store.get(recipe_id)
    return recipe_to_response(saved or recipe)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_recipe(
    recipe_id: int,
    store: SQLiteRecipeStore = Depends(get_rcp_store),
) -> None:
    if not await store.delete(recipe_id):
        raise HTTPException(status_code=404, detail=f"Recipe not found: {recipe_id}")
