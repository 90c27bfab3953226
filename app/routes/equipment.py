"""Equipment CRUD routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import entity_access
from app.database import get_db
from app.routes.common import PageLimit, PageNumber, RowId, map_service_error
from app.schemas.common import MessageRead, Page
from app.schemas.operations import EquipmentCreate, EquipmentRead, EquipmentUpdate
from app.services.operations_service import EquipmentService

router = APIRouter(prefix="/equipment", tags=["equipment"], dependencies=[Depends(entity_access)])


@router.post("", response_model=EquipmentRead, status_code=status.HTTP_201_CREATED)
async def create_equipment(
	payload: EquipmentCreate,
	db: AsyncSession = Depends(get_db),
) -> EquipmentRead:
	service = EquipmentService(db)
	try:
		equipment = await service.create(payload)
	except Exception as exc:
		raise map_service_error(exc, "Server error: Failed to add equipment.") from exc
	return EquipmentRead.model_validate(equipment)


@router.get("", response_model=Page[EquipmentRead])
async def list_equipment(
	page: PageNumber = 1,
	limit: PageLimit = 10,
	search: str = "",
	db: AsyncSession = Depends(get_db),
) -> Page[EquipmentRead]:
	service = EquipmentService(db)
	try:
		items, total_count = await service.list_page(page=page, limit=limit, search=search)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve equipment.") from exc
	return Page[EquipmentRead](
		items=[EquipmentRead.model_validate(item) for item in items],
		total_count=total_count,
		page=page,
		limit=limit,
	)


@router.get("/{equipment_id}", response_model=EquipmentRead)
async def get_equipment(
	equipment_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> EquipmentRead:
	service = EquipmentService(db)
	try:
		equipment = await service.get(equipment_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve equipment.") from exc
	return EquipmentRead.model_validate(equipment)


@router.put("/{equipment_id}", response_model=EquipmentRead)
async def update_equipment(
	equipment_id: RowId,
	payload: EquipmentUpdate,
	db: AsyncSession = Depends(get_db),
) -> EquipmentRead:
	service = EquipmentService(db)
	try:
		equipment = await service.update(equipment_id, payload)
	except Exception as exc:
		raise map_service_error(exc, "Equipment update failed.") from exc
	return EquipmentRead.model_validate(equipment)


@router.delete("/{equipment_id}", response_model=MessageRead)
async def delete_equipment(
	equipment_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = EquipmentService(db)
	try:
		await service.delete(equipment_id)
	except Exception as exc:
		raise map_service_error(exc, "Equipment deletion failed.") from exc
	return MessageRead(message="Equipment deleted successfully.")
