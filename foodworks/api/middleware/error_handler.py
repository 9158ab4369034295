"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from foodworks.application.dto.responses import ErrorResponse
from foodworks.config import get_logger
from foodworks.core.exceptions import (
    ConfigurationError,
    ConflictError,
    FoodworksError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "INVENTORY_ITEM_NOT_FOUND": "Check the item ID and try GET /api/inventory to list items.",
    "RAW_MATERIAL_NOT_FOUND": "Check the material ID and try GET /api/raw-materials.",
    "RECIPE_NOT_FOUND": "Check the recipe ID and try GET /api/recipes.",
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/products.",
    "BATCH_NOT_FOUND": "Check the batch ID and try GET /api/batches.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID and try GET /api/suppliers.",
    "EQUIPMENT_NOT_FOUND": "Check the equipment ID and try GET /api/equipment.",
    "COMPLIANCE_DOCUMENT_NOT_FOUND": "Check the document ID and try GET /api/compliance/documents.",
    "SALES_ORDER_NOT_FOUND": "Check the order ID and try GET /api/sales/orders.",
    "STOCK_RECEIPT_NOT_FOUND": "Check the receipt ID and try GET /api/inventory/receipts.",
    "CONCURRENCY_CONFLICT": "The record changed since it was loaded. Reload it and retry.",
    "INVALID_BATCH_TRANSITION": "A finished batch cannot be reopened.",
    "DUPLICATE_SALES_ORDER": "Leave order_number empty to have one generated.",
    "RECORD_IN_USE": "Remove it from recipes, batches and orders first, or mark it inactive.",
    "BATCH_VALIDATION_ERROR": "Fill in the listed fields and add at least one ingredient.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state. Reload and retry.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standardized JSON error response."""
    status_code = _status_for(exc)

    # Prefer FoodworksError.code, fall back to class name
    if isinstance(exc, FoodworksError):
        error_code = exc.code
        detail = str(exc.details) if exc.details else None
    else:
        error_code = exc.__class__.__name__
        detail = None

    request_id = getattr(request.state, "request_id", None)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_type=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=str(exc),
        hint=_get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escape the route handlers to standardized
    JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(FoodworksError)
    async def domain_exception_handler(
        request: Request,
        exc: FoodworksError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code, exc.detail or "")
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int, detail: str) -> str:
    """Infer a machine-readable error code from HTTPException detail."""
    detail_lower = detail.lower()

    if status_code == 404:
        if "inventory item" in detail_lower:
            return "INVENTORY_ITEM_NOT_FOUND"
        if "raw material" in detail_lower:
            return "RAW_MATERIAL_NOT_FOUND"
        if "recipe" in detail_lower:
            return "RECIPE_NOT_FOUND"
        if "product" in detail_lower:
            return "PRODUCT_NOT_FOUND"
        if "batch" in detail_lower:
            return "BATCH_NOT_FOUND"
        if "supplier" in detail_lower:
            return "SUPPLIER_NOT_FOUND"
        if "equipment" in detail_lower:
            return "EQUIPMENT_NOT_FOUND"
        if "document" in detail_lower:
            return "COMPLIANCE_DOCUMENT_NOT_FOUND"
        if "order" in detail_lower:
            return "SALES_ORDER_NOT_FOUND"
        if "receipt" in detail_lower:
            return "STOCK_RECEIPT_NOT_FOUND"
        return "NOT_FOUND"

    if status_code == 400:
        return "BAD_REQUEST"

    if status_code == 409:
        return "CONFLICT"

    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"

    return "HTTP_ERROR"
