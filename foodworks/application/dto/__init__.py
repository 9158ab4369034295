"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from foodworks.application.dto.requests import (
    AdjustStockRequest,
    BatchIngredientRequest,
    BatchRecordRequest,
    ComplianceDocumentRequest,
    CreateInventoryItemRequest,
    DeliveryMethodRequest,
    EquipmentRequest,
    ProductRequest,
    RawMaterialRequest,
    RecalculateCostsRequest,
    ReceiveStockRequest,
    RecipeItemRequest,
    RecipeRequest,
    RecordWastageRequest,
    SalesItemRequest,
    SalesOrderRequest,
    SupplierRequest,
    UpdateInventoryItemRequest,
)
from foodworks.application.dto.responses import (
    BatchIngredientResponse,
    BatchListResponse,
    BatchRecordResponse,
    BatchTraceabilityResponse,
    ComplianceDocumentResponse,
    DeliveryMethodResponse,
    DocumentVersionResponse,
    EquipmentResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryMovementResponse,
    PaginatedResponse,
    ProductResponse,
    ProviderHealthResponse,
    RawMaterialResponse,
    RecalculateCostsResponse,
    ReceiveStockResponse,
    RecipeItemResponse,
    RecipeResponse,
    RecordWastageResponse,
    SalesItemResponse,
    SalesOrderResponse,
    SaveBatchResponse,
    SaveComplianceDocumentResponse,
    SaveSalesOrderResponse,
    StockAdjustmentResponse,
    StockReceiptResponse,
    SupplierResponse,
    TraceabilityReportResponse,
    WastageResponse,
)

__all__ = [
    # Requests
    "CreateInventoryItemRequest",
    "UpdateInventoryItemRequest",
    "AdjustStockRequest",
    "ReceiveStockRequest",
    "RecordWastageRequest",
    "RawMaterialRequest",
    "RecipeItemRequest",
    "RecipeRequest",
    "RecalculateCostsRequest",
    "ProductRequest",
    "BatchIngredientRequest",
    "BatchRecordRequest",
    "SalesItemRequest",
    "SalesOrderRequest",
    "DeliveryMethodRequest",
    "SupplierRequest",
    "EquipmentRequest",
    "ComplianceDocumentRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "PaginatedResponse",
    "InventoryItemResponse",
    "InventoryListResponse",
    "InventoryMovementResponse",
    "StockAdjustmentResponse",
    "StockReceiptResponse",
    "ReceiveStockResponse",
    "WastageResponse",
    "RecordWastageResponse",
    "RawMaterialResponse",
    "RecipeItemResponse",
    "RecipeResponse",
    "RecalculateCostsResponse",
    "ProductResponse",
    "BatchIngredientResponse",
    "BatchRecordResponse",
    "BatchListResponse",
    "SaveBatchResponse",
    "BatchTraceabilityResponse",
    "TraceabilityReportResponse",
    "SalesItemResponse",
    "SalesOrderResponse",
    "SaveSalesOrderResponse",
    "DeliveryMethodResponse",
    "SupplierResponse",
    "EquipmentResponse",
    "ComplianceDocumentResponse",
    "DocumentVersionResponse",
    "SaveComplianceDocumentResponse",
]
