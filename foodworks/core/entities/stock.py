"""Goods-in and wastage entities."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class StockReceipt(BaseModel):
    """Goods received from a supplier, with intake checks."""

    id: int | None = None
    received_date: date = Field(default_factory=date.today)
    stock_type: str  # tea, coffee, packaging...
    product_name: str
    raw_material_id: int | None = None  # FK → raw_materials.id
    supplier_id: int | None = None  # FK → suppliers.id
    invoice_number: str | None = None
    quantity: float
    price_per_unit: float = 0.0
    package_size: float | None = None  # grams per package
    batch_number: str | None = None
    best_before_date: date | None = None
    is_damaged: bool = False
    is_accepted: bool = True
    labelling_matches_specifications: bool = False
    checked_by: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def counts_toward_stock(self) -> bool:
        return self.is_accepted and not self.is_damaged

    @property
    def stocked_quantity(self) -> float:
        return self.quantity if self.counts_toward_stock else 0.0

    @property
    def total_cost(self) -> float:
        return self.quantity * self.price_per_unit

    @property
    def total_kg(self) -> float | None:
        if not self.package_size:
            return None
        return self.quantity * self.package_size / 1000

    @property
    def price_per_kg(self) -> float | None:
        total_kg = self.total_kg
        if not total_kg:
            return None
        return self.total_cost / total_kg


class Wastage(BaseModel):
    """Stock written off as waste."""

    id: int | None = None
    wastage_date: date = Field(default_factory=date.today)
    inventory_id: int | None = None  # FK → inventory.id, null once the item is deleted
    product_name: str | None = None
    quantity: float
    reason: str
    recorded_by: str
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
