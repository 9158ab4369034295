"""Supplier endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import get_sup_store
from foodworks.application.dto.converters import supplier_to_response
from foodworks.application.dto.requests import SupplierRequest
from foodworks.application.dto.responses import ErrorResponse, SupplierResponse
from foodworks.core.entities.supplier import Supplier
from foodworks.infrastructure.storage.sqlite import SQLiteSupplierStore

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(
    request: SupplierRequest,
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> SupplierResponse:
    supplier = await store.create(Supplier(**request.model_dump()))
    return supplier_to_response(supplier)


@router.get("", response_model=list[SupplierResponse])
async def list_suppliers(
    approved_only: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> list[SupplierResponse]:
    suppliers = await store.list_suppliers(
        approved_only=approved_only, limit=limit, offset=offset
    )
    return [supplier_to_response(s) for s in suppliers]


@router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: int,
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> SupplierResponse:
    supplier = await store.get(supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail=f"Supplier not found: {supplier_id}")
    return supplier_to_response(supplier)


@router.put(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_supplier(
    supplier_id: int,
    request: SupplierRequest,
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> SupplierResponse:
    existing = await store.get(supplier_id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Supplier not found: {supplier_id}")
    supplier = await store.update(existing.model_copy(update=request.model_dump()))
    return supplier_to_response(supplier)


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_supplier(
    supplier_id: int,
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> None:
    if not await store.delete(supplier_id):
        raise HTTPException(status_code=404, detail=f"Supplier not found: {supplier_id}")
