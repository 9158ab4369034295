"""Recalculate Costs Use Case.

Refresh recipe cost snapshots.
"""

from foodworks.application.dto.converters import recipe_to_response
from foodworks.application.dto.requests import RecalculateCostsRequest
from foodworks.application.dto.responses import RecalculateCostsResponse
from foodworks.config import get_logger
from foodworks.core.entities.recipe import Recipe
from foodworks.core.exceptions import RawMaterialNotFoundError
from foodworks.core.interfaces.costing_store import IRawMaterialStore, IRecipeStore

logger = get_logger(__name__)


class RecalculateCostsUseCase:
    """
    Re-snapshot recipe item costs and cached totals.

    With a raw material id only the recipes that use it are touched, after
    refreshing that material's average cost from its receipts.
    """

    def __init__(
        self,
        recipe_store: IRecipeStore | None = None,
        raw_material_store: IRawMaterialStore | None = None,
    ):
        self._recipe_store = recipe_store
        self._raw_material_store = raw_material_store

    async def _get_recipe_store(self) -> IRecipeStore:
        if self._recipe_store is None:
            from foodworks.infrastructure.storage.sqlite import get_recipe_store

            self._recipe_store = await get_recipe_store()
        return self._recipe_store

    async def _get_raw_material_store(self) -> IRawMaterialStore:
        if self._raw_material_store is None:
            from foodworks.infrastructure.storage.sqlite import get_raw_material_store

            self._raw_material_store = await get_raw_material_store()
        return self._raw_material_store

    async def execute(self, request: RecalculateCostsRequest) -> list[Recipe]:
        logger.info("recalculate_costs_started", raw_material_id=request.raw_material_id)

        if request.raw_material_id is not None:
            materials = await self._get_raw_material_store()
            material = await materials.refresh_average_cost(request.raw_material_id)
            if material is None:
                raise RawMaterialNotFoundError(request.raw_material_id)

        recipes = await (await self._get_recipe_store()).recalculate_costs(
            raw_material_id=request.raw_material_id
        )

        logger.info("recalculate_costs_complete", recipes_updated=len(recipes))
        return recipes

    def to_response(self, recipes: list[Recipe]) -> RecalculateCostsResponse:
        return RecalculateCostsResponse(
            recipes_updated=len(recipes),
            recipes=[recipe_to_response(r) for r in recipes],
        )
