"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    schema_version: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. BATCH_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory item with derived stock value."""

    id: int
    product_name: str
    sku: str | None = None
    category: str | None = None
    unit: str | None = None
    stock_level: float
    unit_price: float
    reorder_point: float
    supplier_id: int | None = None
    is_recipe_based: bool = False
    is_final_product: bool = False
    version: int
    stock_value: float = Field(..., description="stock_level × unit_price")
    needs_reorder: bool = False
    last_updated: datetime
    created_at: datetime


class InventoryListResponse(PaginatedResponse):
    items: list[InventoryItemResponse]


class InventoryMovementResponse(BaseModel):
    """Ledger movement; quantity is the signed requested delta."""

    id: int
    inventory_id: int | None = None
    product_name: str
    movement_type: str
    quantity: float
    reference_type: str | None = None
    reference_id: int | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime


class StockAdjustmentResponse(BaseModel):
    """Item state after an adjustment, with the movement that recorded it."""

    inventory_item: InventoryItemResponse
    movement: InventoryMovementResponse | None = None


class StockReceiptResponse(BaseModel):
    id: int
    received_date: date
    stock_type: str
    product_name: str
    raw_material_id: int | None = None
    supplier_id: int | None = None
    invoice_number: str | None = None
    quantity: float
    price_per_unit: float
    package_size: float | None = None
    batch_number: str | None = None
    best_before_date: date | None = None
    is_damaged: bool
    is_accepted: bool
    labelling_matches_specifications: bool
    checked_by: str | None = None
    total_cost: float
    total_kg: float | None = None
    price_per_kg: float | None = None
    created_at: datetime


class ReceiveStockResponse(BaseModel):
    """Saved receipt and, when stock moved, the affected item and movement."""

    receipt: StockReceiptResponse
    inventory_item: InventoryItemResponse | None = None
    movement: InventoryMovementResponse | None = None


class WastageResponse(BaseModel):
    id: int
    wastage_date: date
    inventory_id: int | None = None
    product_name: str | None = None
    quantity: float
    reason: str
    recorded_by: str
    notes: str | None = None
    created_at: datetime


class RecordWastageResponse(BaseModel):
    wastage: WastageResponse
    inventory_item: InventoryItemResponse
    movement: InventoryMovementResponse


# --- Costing ---


class RawMaterialResponse(BaseModel):
    id: int
    name: str
    category: str | None = None
    unit: str | None = None
    unit_cost: float
    supplier_id: int | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RecipeItemResponse(BaseModel):
    """Recipe line with the saved cost snapshot and today's cost."""

    id: int | None = None
    raw_material_id: int
    raw_material_name: str | None = None
    quantity: float
    unit_cost: float = Field(..., description="Unit cost snapshotted at save time")
    total_cost: float
    current_unit_cost: float | None = Field(
        default=None, description="Raw material's current unit cost"
    )


class RecipeResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
    total_price: float = Field(..., description="Cached cost from the last snapshot")
    current_cost: float = Field(..., description="Cost at current raw material prices")
    is_stale: bool = Field(..., description="Snapshot differs from current cost")
    items: list[RecipeItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class RecalculateCostsResponse(BaseModel):
    recipes_updated: int
    recipes: list[RecipeResponse] = Field(default_factory=list)


class ProductResponse(BaseModel):
    """Finished product with margins computed from current costs."""

    id: int
    name: str
    sku: str | None = None
    category: str | None = None
    recipe_id: int | None = None
    unit_selling_price: float
    is_active: bool
    recipe_cost: float
    markup: float = Field(..., description="Percent of cost")
    profit_margin: float = Field(..., description="Percent of selling price")
    profit_per_item: float
    created_at: datetime
    updated_at: datetime


# --- Batch manufacturing ---


class BatchIngredientResponse(BaseModel):
    id: int | None = None
    raw_material_id: int | None = None
    raw_material_name: str | None = None
    batch_number: str | None = None
    best_before_date: date | None = None
    quantity: float


class BatchRecordResponse(BaseModel):
    """Batch manufacturing record with checklist status."""

    id: int
    batch_date: date
    product_id: int | None = None
    product_name: str | None = None
    product_batch_number: str | None = None
    product_best_before_date: date | None = None
    bags_count: int
    bag_size: float | None = None
    batch_size: float | None = None
    batch_started: datetime | None = None
    batch_finished: datetime | None = None
    status: str
    scale_id: str | None = None
    scale_target_weight: float | None = None
    scale_actual_reading: float | None = None
    scale_deviation_percent: float | None = None
    checklist: dict[str, Any] = Field(default_factory=dict)
    checklist_complete: bool = False
    outstanding_checks: list[str] = Field(default_factory=list)
    manager_comments: str | None = None
    remedial_actions: str | None = None
    work_undertaken: str | None = None
    ingredients: list[BatchIngredientResponse] = Field(default_factory=list)
    version: int
    created_at: datetime
    updated_at: datetime


class BatchListResponse(PaginatedResponse):
    batches: list[BatchRecordResponse]


class SaveBatchResponse(BaseModel):
    """Saved batch and the ledger movements the save produced."""

    batch: BatchRecordResponse
    movements: list[InventoryMovementResponse] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class BatchTraceabilityResponse(BaseModel):
    """Ingredients in, finished goods out, for one batch."""

    batch: BatchRecordResponse
    consumed: list[InventoryMovementResponse] = Field(default_factory=list)
    produced: list[InventoryMovementResponse] = Field(default_factory=list)


class TraceabilityReportResponse(BaseModel):
    records: list[BatchTraceabilityResponse]
    total: int


# --- Sales ---


class SalesItemResponse(BaseModel):
    id: int | None = None
    product_id: int
    quantity: float
    price_per_unit: float
    total_price: float
    batch_number: str | None = None
    best_before_date: date | None = None
    production_date: date | None = None
    checked_by: str | None = None
    labelling_matches_specs: bool = False
    packaging_material_id: int | None = None
    packaging_quantity: float = 0.0


class SalesOrderResponse(BaseModel):
    id: int
    order_date: date
    order_number: str | None = None
    customer_name: str
    delivery_method: str | None = None
    delivery_cost: float
    is_free_shipping: bool
    status: str
    items_total: float
    total_amount: float
    items: list[SalesItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class SaveSalesOrderResponse(BaseModel):
    order: SalesOrderResponse
    movements: list[InventoryMovementResponse] = Field(default_factory=list)


class DeliveryMethodResponse(BaseModel):
    id: int
    name: str


# --- Reference data ---


class SupplierResponse(BaseModel):
    id: int
    name: str
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    products: list[str] = Field(default_factory=list)
    is_approved: bool
    created_at: datetime
    updated_at: datetime


class EquipmentResponse(BaseModel):
    id: int
    serial_number: str
    description: str
    model: str | None = None
    manufacturer: str | None = None
    value: float | None = None
    purchase_date: date | None = None
    last_service_date: date | None = None
    next_service_date: date | None = None
    service_interval_months: int | None = None
    location: str | None = None
    status: str
    condition: str | None = None
    notes: str | None = None
    service_due: bool = False
    created_at: datetime
    updated_at: datetime


class ComplianceDocumentResponse(BaseModel):
    id: int
    title: str
    document_number: str | None = None
    category: str | None = None
    content: str
    status: str
    current_version: int
    is_accreditation: bool
    accreditation_type: str | None = None
    expiry_date: date | None = None
    is_expired: bool = False
    days_until_expiry: int | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class DocumentVersionResponse(BaseModel):
    id: int | None = None
    document_id: int
    version_number: int
    content: str
    changes: str | None = None
    created_by: str | None = None
    previous_version: int | None = None
    created_at: datetime


class SaveComplianceDocumentResponse(BaseModel):
    """Saved document and the version row written, if any."""

    document: ComplianceDocumentResponse
    version: DocumentVersionResponse | None = None
