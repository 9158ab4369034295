"""Finished product endpoints. Margins are computed at read time."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import get_prod_store
from foodworks.application.dto.converters import product_to_response
from foodworks.application.dto.requests import ProductRequest
from foodworks.application.dto.responses import ErrorResponse, ProductResponse
from foodworks.core.entities.product import FinalProduct
from foodworks.infrastructure.storage.sqlite import SQLiteProductStore

router = APIRouter(prefix="/api/products", tags=["costing"])


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_product(
    request: ProductRequest,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductResponse:
    product = await store.create(FinalProduct(**request.model_dump()))
    return product_to_response(product)


@router.get("", response_model=list[ProductResponse])
async def list_products(
    active_only: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> list[ProductResponse]:
    products = await store.list_products(active_only=active_only, limit=limit, offset=offset)
    return [product_to_response(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductResponse:
    product = await store.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: ProductRequest,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductResponse:
    existing = await store.get(product_id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    product = await store.update(existing.model_copy(update=request.model_dump()))
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> None:
    if not await store.delete(product_id):
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
