"""Equipment register endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import get_equip_store
from foodworks.application.dto.converters import equipment_to_response
from foodworks.application.dto.requests import EquipmentRequest
from foodworks.application.dto.responses import EquipmentResponse, ErrorResponse
from foodworks.core.entities.equipment import Equipment, EquipmentStatus
from foodworks.infrastructure.storage.sqlite import SQLiteEquipmentStore

router = APIRouter(prefix="/api/equipment", tags=["equipment"])


def _request_to_equipment(request: EquipmentRequest, equipment_id: int | None = None) -> Equipment:
    data = request.model_dump()
    data["status"] = EquipmentStatus(request.status)
    return Equipment(id=equipment_id, **data)


@router.post("", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_equipment(
    request: EquipmentRequest,
    store: SQLiteEquipmentStore = Depends(get_equip_store),
) -> EquipmentResponse:
    equipment = await store.create(_request_to_equipment(request))
    return equipment_to_response(equipment)


@router.get("", response_model=list[EquipmentResponse])
async def list_equipment(
    service_due: bool = Query(
        default=False, description="Only non-retired equipment due for service"
    ),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteEquipmentStore = Depends(get_equip_store),
) -> list[EquipmentResponse]:
    items = await store.list_equipment(service_due=service_due, limit=limit, offset=offset)
    return [equipment_to_response(e) for e in items]


@router.get(
    "/{equipment_id}",
    response_model=EquipmentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_equipment(
    equipment_id: int,
    store: SQLiteEquipmentStore = Depends(get_equip_store),
) -> EquipmentResponse:
    equipment = await store.get(equipment_id)
    if not equipment:
        raise HTTPException(status_code=404, detail=f"Equipment not found: {equipment_id}")
    return equipment_to_response(equipment)


@router.put(
    "/{equipment_id}",
    response_model=EquipmentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_equipment(
    equipment_id: int,
    request: EquipmentRequest,
    store: SQLiteEquipmentStore = Depends(get_equip_store),
) -> EquipmentResponse:
    existing = await store.get(equipment_id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Equipment not found: {equipment_id}")
    updated = _request_to_equipment(request, equipment_id)
    updated.created_at = existing.created_at
    return equipment_to_response(await store.update(updated))


@router.delete(
    "/{equipment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_equipment(
    equipment_id: int,
    store: SQLiteEquipmentStore = Depends(get_equip_store),
) -> None:
    if not await store.delete(equipment_id):
        raise HTTPException(status_code=404, detail=f"Equipment not found: {equipment_id}")
