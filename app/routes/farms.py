"""Farm CRUD routes: reads embed the owning farmer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import entity_access
from app.database import get_db
from app.routes.common import PageLimit, PageNumber, RowId, map_service_error
from app.schemas.common import MessageRead, Page
from app.schemas.farm import FarmCreate, FarmRead, FarmUpdate
from app.services.farm_service import FarmService

router = APIRouter(prefix="/farms", tags=["farms"], dependencies=[Depends(entity_access)])


@router.post("", response_model=FarmRead, status_code=status.HTTP_201_CREATED)
async def create_farm(
	payload: FarmCreate,
	db: AsyncSession = Depends(get_db),
) -> FarmRead:
	service = FarmService(db)
	try:
		farm = await service.create(payload)
	except Exception as exc:
		raise map_service_error(exc, "Server error: Failed to add farm.") from exc
	return FarmRead.model_validate(farm)


@router.get("", response_model=Page[FarmRead])
async def list_farms(
	page: PageNumber = 1,
	limit: PageLimit = 10,
	search: str = "",
	db: AsyncSession = Depends(get_db),
) -> Page[FarmRead]:
	service = FarmService(db)
	try:
		farms, total_count = await service.list_page(page=page, limit=limit, search=search)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve farms.") from exc
	return Page[FarmRead](
		items=[FarmRead.model_validate(farm) for farm in farms],
		total_count=total_count,
		page=page,
		limit=limit,
	)


@router.get("/{farm_id}", response_model=FarmRead)
async def get_farm(
	farm_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> FarmRead:
	service = FarmService(db)
	try:
		farm = await service.get(farm_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve farm.") from exc
	return FarmRead.model_validate(farm)


@router.put("/{farm_id}", response_model=FarmRead)
async def update_farm(
	farm_id: RowId,
	payload: FarmUpdate,
	db: AsyncSession = Depends(get_db),
) -> FarmRead:
	service = FarmService(db)
	try:
		farm = await service.update(farm_id, payload)
	except Exception as exc:
		raise map_service_error(exc, "Farm update failed.") from exc
	return FarmRead.model_validate(farm)


@router.delete("/{farm_id}", response_model=MessageRead)
async def delete_farm(
	farm_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = FarmService(db)
	try:
		await service.delete(farm_id)
	except Exception as exc:
		raise map_service_error(exc, "Farm deletion failed.") from exc
	return MessageRead(message="Farm deleted successfully.")
