"""Raw material endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import get_raw_mat_store
from foodworks.application.dto.converters import raw_material_to_response
from foodworks.application.dto.requests import RawMaterialRequest
from foodworks.application.dto.responses import ErrorResponse, RawMaterialResponse
from foodworks.core.entities.recipe import RawMaterial
from foodworks.infrastructure.storage.sqlite import SQLiteRawMaterialStore

router = APIRouter(prefix="/api/raw-materials", tags=["costing"])


@router.post("", response_model=RawMaterialResponse, status_code=status.HTTP_201_CREATED)
async def create_raw_material(
    request: RawMaterialRequest,
    store: SQLiteRawMaterialStore = Depends(get_raw_mat_store),
) -> RawMaterialResponse:
    material = await store.create(RawMaterial(**request.model_dump()))
    return raw_material_to_response(material)


@router.get("", response_model=list[RawMaterialResponse])
async def list_raw_materials(
    active_only: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteRawMaterialStore = Depends(get_raw_mat_store),
) -> list[RawMaterialResponse]:
    materials = await store.list_materials(active_only=active_only, limit=limit, offset=offset)
    return [raw_material_to_response(m) for m in materials]


@router.get(
    "/{material_id}",
    response_model=RawMaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_raw_material(
    material_id: int,
    store: SQLiteRawMaterialStore = Depends(get_raw_mat_store),
) -> RawMaterialResponse:
    material = await store.get(material_id)
    if not material:
        raise HTTPException(status_code=404, detail=f"Raw material not found: {material_id}")
    return raw_material_to_response(material)


@router.put(
    "/{material_id}",
    response_model=RawMaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_raw_material(
    material_id: int,
    request: RawMaterialRequest,
    store: SQLiteRawMaterialStore = Depends(get_raw_mat_store),
) -> RawMaterialResponse:
    """Update a raw material.

    ``unit_cost`` is overwritten by the receipt average on the next
    accepted receipt for this material.
    """
    existing = await store.get(material_id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Raw material not found: {material_id}")
    material = await store.update(existing.model_copy(update=request.model_dump()))
    return raw_material_to_response(material)


@router.delete(
    "/{material_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_raw_material(
    material_id: int,
    store: SQLiteRawMaterialStore = Depends(get_raw_mat_store),
) -> None:
    if not await store.delete(material_id):
        raise HTTPException(status_code=404, detail=f"Raw material not found: {material_id}")
