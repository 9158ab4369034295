"""Abstract interfaces for raw materials, recipes and finished products."""

from abc import ABC, abstractmethod

from foodworks.core.entities.product import FinalProduct
from foodworks.core.entities.recipe import RawMaterial, Recipe


class IRawMaterialStore(ABC):
    """Interface for raw material persistence."""

    @abstractmethod
    async def create(self, material: RawMaterial) -> RawMaterial:
        pass

    @abstractmethod
    async def get(self, material_id: int) -> RawMaterial | None:
        pass

    @abstractmethod
    async def list_materials(
        self, active_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[RawMaterial]:
        pass

    @abstractmethod
    async def update(self, material: RawMaterial) -> RawMaterial:
        pass

    @abstractmethod
    async def delete(self, material_id: int) -> bool:
        pass

    @abstractmethod
    async def refresh_average_cost(self, material_id: int) -> RawMaterial | None:
        """Set unit_cost to the weighted average of accepted receipts."""
        pass


class IRecipeStore(ABC):
    """Interface for recipe (bill of materials) persistence."""

    @abstractmethod
    async def create(self, recipe: Recipe) -> Recipe:
        """Create a recipe, snapshotting current raw material costs."""
        pass

    @abstractmethod
    async def get(self, recipe_id: int) -> Recipe | None:
        """Get a recipe with items and their current unit costs."""
        pass

    @abstractmethod
    async def list_recipes(
        self, active_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[Recipe]:
        pass

    @abstractmethod
    async def update(self, recipe: Recipe) -> Recipe:
        """Replace the recipe header and all of its items."""
        pass

    @abstractmethod
    async def delete(self, recipe_id: int) -> bool:
        pass

    @abstractmethod
    async def recalculate_costs(self, raw_material_id: int | None = None) -> list[Recipe]:
        """Refresh cost snapshots of all recipes, or those using one material."""
        pass


class IProductStore(ABC):
    """Interface for finished product persistence."""

    @abstractmethod
    async def create(self, product: FinalProduct) -> FinalProduct:
        pass

    @abstractmethod
    async def get(self, product_id: int) -> FinalProduct | None:
        """Get a product with recipe_cost computed from current prices."""
        pass

    @abstractmethod
    async def list_products(
        self, active_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[FinalProduct]:
        pass

    @abstractmethod
    async def update(self, product: FinalProduct) -> FinalProduct:
        pass

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        pass
