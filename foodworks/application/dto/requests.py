"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Inventory ---


class CreateInventoryItemRequest(BaseModel):
    """Request to create an inventory item."""

    product_name: str = Field(..., min_length=1, description="Product or material name")
    sku: str | None = Field(
        default=None,
        description="Stock keeping unit (generated when omitted)",
        examples=["TEA-4821067"],
    )
    category: str | None = Field(default=None, examples=["tea", "packaging"])
    unit: str | None = Field(default=None, examples=["kg", "piece"])
    stock_level: float = Field(
        default=0.0,
        ge=0,
        description="Opening stock, recorded as an adjustment movement",
    )
    unit_price: float = Field(default=0.0, ge=0)
    reorder_point: float | None = Field(
        default=None, ge=0, description="Defaults to the configured reorder point"
    )
    supplier_id: int | None = None
    is_recipe_based: bool = False
    is_final_product: bool = False
    created_by: str | None = None


class UpdateInventoryItemRequest(BaseModel):
    """Request to update inventory item details.

    The stock level is not editable here; use an adjustment.
    """

    product_name: str = Field(..., min_length=1)
    sku: str | None = Field(default=None, description="Omit to keep the current SKU")
    category: str | None = None
    unit: str | None = None
    unit_price: float = Field(default=0.0, ge=0)
    reorder_point: float = Field(default=0.0, ge=0)
    supplier_id: int | None = None
    is_recipe_based: bool = False
    is_final_product: bool = False
    version: int = Field(..., ge=1, description="Version the client last read")


class AdjustStockRequest(BaseModel):
    """Manual signed stock correction."""

    quantity: float = Field(
        ...,
        description="Signed delta (negative removes stock)",
        examples=[5.0, -2.5],
    )
    notes: str | None = Field(default=None, description="Reason for the correction")
    created_by: str | None = None


class ReceiveStockRequest(BaseModel):
    """Goods-in receipt with intake checks."""

    received_date: date | None = Field(default=None, description="Defaults to today")
    stock_type: str = Field(..., min_length=1, examples=["tea", "coffee", "packaging"])
    product_name: str = Field(..., min_length=1)
    raw_material_id: int | None = Field(
        default=None, description="Raw material whose average cost this receipt feeds"
    )
    supplier_id: int | None = None
    invoice_number: str | None = None
    quantity: float = Field(..., gt=0)
    price_per_unit: float = Field(default=0.0, ge=0)
    package_size: float | None = Field(default=None, gt=0, description="Grams per package")
    batch_number: str | None = None
    best_before_date: date | None = None
    is_damaged: bool = False
    is_accepted: bool = True
    labelling_matches_specifications: bool = False
    checked_by: str | None = None


class RecordWastageRequest(BaseModel):
    """Stock written off as waste."""

    inventory_id: int = Field(..., description="Inventory item to write off from")
    quantity: float = Field(..., description="Quantity wasted (must be positive)")
    reason: str = Field(..., description="Why the stock was wasted")
    recorded_by: str = Field(..., description="Who recorded the wastage")
    wastage_date: date | None = None
    notes: str | None = None


# --- Costing ---


class RawMaterialRequest(BaseModel):
    """Create or update a raw material."""

    name: str = Field(..., min_length=1)
    category: str | None = None
    unit: str | None = Field(default=None, examples=["g", "kg", "piece"])
    unit_cost: float = Field(default=0.0, ge=0)
    supplier_id: int | None = None
    is_active: bool = True


class RecipeItemRequest(BaseModel):
    """One bill-of-materials line."""

    raw_material_id: int
    quantity: float = Field(..., gt=0)


class RecipeRequest(BaseModel):
    """Create or replace a recipe; items are replaced wholesale."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    is_active: bool = True
    items: list[RecipeItemRequest] = Field(default_factory=list)


class RecalculateCostsRequest(BaseModel):
    """Refresh recipe cost snapshots."""

    raw_material_id: int | None = Field(
        default=None,
        description="Only recipes using this raw material (all recipes if None)",
    )


class ProductRequest(BaseModel):
    """Create or update a finished product."""

    name: str = Field(..., min_length=1)
    sku: str | None = None
    category: str | None = None
    recipe_id: int | None = None
    unit_selling_price: float = Field(default=0.0, ge=0)
    is_active: bool = True


# --- Batch manufacturing ---


class BatchIngredientRequest(BaseModel):
    """Ingredient lot used in a batch.

    Rows without a raw material or with a non-positive quantity are ignored.
    """

    raw_material_id: int | None = None
    batch_number: str | None = Field(default=None, description="Supplier lot number")
    best_before_date: date | None = None
    quantity: float = 0.0


class BatchRecordRequest(BaseModel):
    """Create or edit a batch manufacturing record."""

    batch_date: date | None = Field(default=None, description="Defaults to today")
    product_id: int | None = None
    product_batch_number: str | None = None
    product_best_before_date: date | None = None
    bags_count: int = Field(default=0, ge=0)
    bag_size: float | None = Field(default=None, gt=0)
    batch_size: float | None = Field(
        default=None, ge=0, description="Derived from bags × bag size when both are given"
    )
    batch_started: datetime | None = None
    batch_finished: datetime | None = Field(
        default=None, description="Setting this completes the batch"
    )
    scale_id: str | None = None
    scale_target_weight: float | None = None
    scale_actual_reading: float | None = None
    checklist: dict[str, Any] = Field(
        default_factory=dict,
        description="Checklist flags, initials and per-check notes",
        examples=[{"equipment_clean": True, "equipment_clean_initials": "JS"}],
    )
    manager_comments: str | None = None
    remedial_actions: str | None = None
    work_undertaken: str | None = None
    ingredients: list[BatchIngredientRequest] = Field(default_factory=list)
    version: int | None = Field(
        default=None,
        ge=1,
        description="Version the client last read; checked on edit",
    )
    created_by: str | None = None


# --- Sales ---


class SalesItemRequest(BaseModel):
    """Product line on a sales order."""

    product_id: int
    quantity: float = Field(..., gt=0)
    price_per_unit: float = Field(..., ge=0)
    batch_number: str | None = None
    best_before_date: date | None = None
    production_date: date | None = None
    checked_by: str | None = None
    labelling_matches_specs: bool = False
    packaging_material_id: int | None = Field(
        default=None, description="Raw material consumed as packaging"
    )
    packaging_quantity: float = Field(default=0.0, ge=0)


class SalesOrderRequest(BaseModel):
    """Create or update a sales order."""

    order_date: date | None = Field(default=None, description="Defaults to today")
    order_number: str | None = Field(
        default=None,
        description="Generated as SO-YYYYMMDD-NNNN when omitted",
        examples=["SO-20240315-0001"],
    )
    customer_name: str = Field(..., min_length=1)
    delivery_method: str | None = None
    delivery_cost: float = Field(default=0.0, ge=0)
    is_free_shipping: bool = False
    status: str = Field(
        default="pending",
        pattern="^(pending|dispatched|delivered|cancelled)$",
    )
    items: list[SalesItemRequest] = Field(default_factory=list)
    created_by: str | None = None


class DeliveryMethodRequest(BaseModel):
    """New delivery option."""

    name: str = Field(..., min_length=1)


# --- Reference data ---


class SupplierRequest(BaseModel):
    """Create or update a supplier."""

    name: str = Field(..., min_length=1)
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    products: list[str] = Field(default_factory=list, examples=[["tea", "herbs"]])
    is_approved: bool = False


class EquipmentRequest(BaseModel):
    """Create or update an equipment register entry."""

    serial_number: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    model: str | None = None
    manufacturer: str | None = None
    value: float | None = Field(default=None, ge=0)
    purchase_date: date | None = None
    last_service_date: date | None = None
    next_service_date: date | None = None
    service_interval_months: int | None = Field(default=None, ge=1)
    location: str | None = None
    status: str = Field(default="active", pattern="^(active|maintenance|retired)$")
    condition: str | None = None
    notes: str | None = None


class ComplianceDocumentRequest(BaseModel):
    """Create or update a compliance document."""

    title: str = Field(..., min_length=1)
    document_number: str | None = None
    category: str | None = Field(default=None, examples=["HACCP", "SOP", "policy"])
    content: str = ""
    status: str = Field(default="draft", pattern="^(draft|published|archived)$")
    is_accreditation: bool = False
    accreditation_type: str | None = Field(default=None, examples=["SALSA", "Organic"])
    expiry_date: date | None = None
    changes: str | None = Field(
        default=None, description="Summary of changes; forces a new version on update"
    )
    created_by: str | None = None
