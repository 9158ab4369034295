"""Sales order entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class SalesOrderStatus(str, Enum):
    PENDING = "pending"
    DISPATCHED = "dispatched"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DeliveryMethod(BaseModel):
    """Courier or collection option offered on orders."""

    id: int | None = None
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class SalesItem(BaseModel):
    """A product line on a sales order, with its release checks."""

    id: int | None = None
    order_id: int | None = None
    product_id: int  # FK → final_products.id
    quantity: float
    price_per_unit: float
    total_price: float = 0.0  # quantity * price_per_unit
    batch_number: str | None = None
    best_before_date: date | None = None
    production_date: date | None = None
    checked_by: str | None = None
    labelling_matches_specs: bool = False
    packaging_material_id: int | None = None  # FK → raw_materials.id
    packaging_quantity: float = 0.0

    @model_validator(mode="after")
    def compute_line(self) -> "SalesItem":
        self.total_price = self.quantity * self.price_per_unit
        return self


class SalesOrder(BaseModel):
    """A customer order with delivery charges."""

    id: int | None = None
    order_date: date = Field(default_factory=date.today)
    order_number: str | None = None
    customer_name: str
    delivery_method: str | None = None
    delivery_cost: float = 0.0
    is_free_shipping: bool = False
    status: SalesOrderStatus = SalesOrderStatus.PENDING
    items_total: float = 0.0
    total_amount: float = 0.0
    items: list[SalesItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def compute_totals(self) -> "SalesOrder":
        """Compute items_total and total_amount; free shipping waives delivery."""
        if self.items:
            self.items_total = sum(i.total_price for i in self.items)
        delivery = 0.0 if self.is_free_shipping else self.delivery_cost
        self.total_amount = self.items_total + delivery
        return self

    def packaging_usage(self) -> dict[int, float]:
        """Packaging quantity per packaging material across all lines."""
        usage: dict[int, float] = {}
        for item in self.items:
            if item.packaging_material_id is None or item.packaging_quantity <= 0:
                continue
            usage[item.packaging_material_id] = (
                usage.get(item.packaging_material_id, 0.0) + item.packaging_quantity
            )
        return usage
