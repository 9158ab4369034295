"""Finished product entity."""

from datetime import datetime

from pydantic import BaseModel, Field

from foodworks.core.services.costing import ProductMargins, compute_margins


class FinalProduct(BaseModel):
    """
    A sellable product made from a recipe.

    Margins are never stored. ``recipe_cost`` is filled in at read time from
    current raw material costs and the derived figures follow from it.
    """

    id: int | None = None
    name: str
    sku: str | None = None
    category: str | None = None
    recipe_id: int | None = None  # FK → product_recipes.id
    unit_selling_price: float = 0.0
    is_active: bool = True
    recipe_cost: float = 0.0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def margins(self) -> ProductMargins:
        return compute_margins(self.recipe_cost, self.unit_selling_price)

    @property
    def markup(self) -> float:
        return self.margins.markup

    @property
    def profit_margin(self) -> float:
        return self.margins.profit_margin

    @property
    def profit_per_item(self) -> float:
        return self.margins.profit_per_item
