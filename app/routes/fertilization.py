"""Fertilization record CRUD routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import entity_access
from app.database import get_db
from app.routes.common import PageLimit, PageNumber, RowId, map_service_error
from app.schemas.common import MessageRead, Page
from app.schemas.crops import FertilizationCreate, FertilizationRead, FertilizationUpdate
from app.services.crop_service import FertilizationService

router = APIRouter(prefix="/fertilization", tags=["fertilization"], dependencies=[Depends(entity_access)])


@router.post("", response_model=FertilizationRead, status_code=status.HTTP_201_CREATED)
async def create_fertilization(
	payload: FertilizationCreate,
	db: AsyncSession = Depends(get_db),
) -> FertilizationRead:
	service = FertilizationService(db)
	try:
		fertilization = await service.create(payload)
	except Exception as exc:
		raise map_service_error(exc, "Failed to create fertilization record.") from exc
	return FertilizationRead.model_validate(fertilization)


@router.get("", response_model=Page[FertilizationRead])
async def list_fertilizations(
	page: PageNumber = 1,
	limit: PageLimit = 10,
	search: str = "",
	db: AsyncSession = Depends(get_db),
) -> Page[FertilizationRead]:
	service = FertilizationService(db)
	try:
		fertilizations, total_count = await service.list_page(page=page, limit=limit, search=search)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve fertilization records.") from exc
	return Page[FertilizationRead](
		items=[FertilizationRead.model_validate(fertilization) for fertilization in fertilizations],
		total_count=total_count,
		page=page,
		limit=limit,
	)


@router.get("/{fertilization_id}", response_model=FertilizationRead)
async def get_fertilization(
	fertilization_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> FertilizationRead:
	service = FertilizationService(db)
	try:
		fertilization = await service.get(fertilization_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve fertilization record.") from exc
	return FertilizationRead.model_validate(fertilization)


@router.put("/{fertilization_id}", response_model=FertilizationRead)
async def update_fertilization(
	fertilization_id: RowId,
	payload: FertilizationUpdate,
	db: AsyncSession = Depends(get_db),
) -> FertilizationRead:
	service = FertilizationService(db)
	try:
		fertilization = await service.update(fertilization_id, payload)
	except Exception as exc:
		raise map_service_error(exc, "Failed to update fertilization record.") from exc
	return FertilizationRead.model_validate(fertilization)


@router.delete("/{fertilization_id}", response_model=MessageRead)
async def delete_fertilization(
	fertilization_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = FertilizationService(db)
	try:
		await service.delete(fertilization_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to delete fertilization record.") from exc
	return MessageRead(message="Fertilization record deleted successfully.")
