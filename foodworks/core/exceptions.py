"""
Domain exceptions for the Foodworks application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class FoodworksError(Exception):
    """Base exception for all Foodworks errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(FoodworksError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Not-found Exceptions
class NotFoundError(FoodworksError):
    """Requested entity does not exist."""

    entity = "Entity"
    code_name = "NOT_FOUND"

    def __init__(self, entity_id: int | str):
        super().__init__(
            f"{self.entity} not found: {entity_id}",
            code=self.code_name,
            details={"id": entity_id},
        )


class InventoryItemNotFoundError(NotFoundError):
    entity = "Inventory item"
    code_name = "INVENTORY_ITEM_NOT_FOUND"


class RawMaterialNotFoundError(NotFoundError):
    entity = "Raw material"
    code_name = "RAW_MATERIAL_NOT_FOUND"


class RecipeNotFoundError(NotFoundError):
    entity = "Recipe"
    code_name = "RECIPE_NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    entity = "Final product"
    code_name = "PRODUCT_NOT_FOUND"


class BatchNotFoundError(NotFoundError):
    entity = "Batch record"
    code_name = "BATCH_NOT_FOUND"


class SupplierNotFoundError(NotFoundError):
    entity = "Supplier"
    code_name = "SUPPLIER_NOT_FOUND"


class EquipmentNotFoundError(NotFoundError):
    entity = "Equipment"
    code_name = "EQUIPMENT_NOT_FOUND"


class ComplianceDocumentNotFoundError(NotFoundError):
    entity = "Compliance document"
    code_name = "COMPLIANCE_DOCUMENT_NOT_FOUND"


class SalesOrderNotFoundError(NotFoundError):
    entity = "Sales order"
    code_name = "SALES_ORDER_NOT_FOUND"


class StockReceiptNotFoundError(NotFoundError):
    entity = "Stock receipt"
    code_name = "STOCK_RECEIPT_NOT_FOUND"


# Conflict Exceptions
class ConflictError(FoodworksError):
    """The write conflicts with the current stored state."""

    pass


class ConcurrencyConflictError(ConflictError):
    """A record was modified by someone else since it was read."""

    def __init__(self, entity: str, entity_id: int, expected_version: int | None = None):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently; reload and retry",
            code="CONCURRENCY_CONFLICT",
            details={
                "entity": entity,
                "id": entity_id,
                "expected_version": expected_version,
            },
        )


class InvalidBatchTransitionError(ConflictError):
    """Batch status change is not allowed."""

    def __init__(self, batch_id: int, from_status: str, to_status: str):
        super().__init__(
            f"Batch {batch_id} cannot move from {from_status} to {to_status}",
            code="INVALID_BATCH_TRANSITION",
            details={
                "batch_id": batch_id,
                "from_status": from_status,
                "to_status": to_status,
            },
        )


class RecordInUseError(ConflictError):
    """Record is still referenced by batches, recipes or orders."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            f"{entity} {entity_id} is still in use and cannot be deleted",
            code="RECORD_IN_USE",
            details={"entity": entity, "id": entity_id},
        )


class DuplicateSalesOrderError(ConflictError):
    """Order number is already in use."""

    def __init__(self, order_number: str):
        super().__init__(
            f"Sales order number already exists: {order_number}",
            code="DUPLICATE_SALES_ORDER",
            details={"order_number": order_number},
        )


# Validation Exceptions
class ValidationError(FoodworksError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class BatchValidationError(ValidationError):
    """Batch record is missing required fields."""

    def __init__(self, missing: list[str]):
        super().__init__(
            field=", ".join(missing),
            message="required for a batch record",
        )
        self.code = "BATCH_VALIDATION_ERROR"
        self.details["missing"] = missing


class ConfigurationError(FoodworksError):
    """Configuration error."""

    pass
