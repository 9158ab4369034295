"""Raw material and recipe (bill of materials) entities."""

from datetime import datetime

from pydantic import BaseModel, Field

from foodworks.core.services.costing import recipe_cost


class RawMaterial(BaseModel):
    """Purchasable ingredient or packaging material."""

    id: int | None = None
    name: str
    category: str | None = None
    unit: str | None = None
    unit_cost: float = 0.0  # weighted average of accepted receipts
    supplier_id: int | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class RecipeItem(BaseModel):
    """One line of a recipe.

    ``unit_cost`` and ``total_cost`` are the snapshot taken when the recipe was
    last saved or recalculated. ``current_unit_cost`` is the raw material's
    cost at read time.
    """

    id: int | None = None
    recipe_id: int | None = None
    raw_material_id: int  # FK → raw_materials.id
    raw_material_name: str | None = None
    quantity: float
    unit_cost: float = 0.0
    total_cost: float = 0.0
    current_unit_cost: float | None = None
    position: int = 0

    @property
    def effective_unit_cost(self) -> float:
        if self.current_unit_cost is not None:
            return self.current_unit_cost
        return self.unit_cost


class Recipe(BaseModel):
    """Bill of materials for a product."""

    id: int | None = None
    name: str
    description: str | None = None
    is_active: bool = True
    total_price: float = 0.0  # cached sum of item total_cost
    items: list[RecipeItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def current_cost(self) -> float:
        """Cost of the recipe at current raw material prices."""
        return recipe_cost((i.quantity, i.effective_unit_cost) for i in self.items)

    @property
    def is_stale(self) -> bool:
        """True when the cached total no longer matches current prices."""
        return round(self.total_price, 4) != round(self.current_cost, 4)
