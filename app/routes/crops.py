"""Crop CRUD routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import entity_access
from app.database import get_db
from app.routes.common import PageLimit, PageNumber, RowId, map_service_error
from app.schemas.common import MessageRead, Page
from app.schemas.crops import CropCreate, CropRead, CropUpdate
from app.services.crop_service import CropService

router = APIRouter(prefix="/crops", tags=["crops"], dependencies=[Depends(entity_access)])


@router.post("", response_model=CropRead, status_code=status.HTTP_201_CREATED)
async def create_crop(
	payload: CropCreate,
	db: AsyncSession = Depends(get_db),
) -> CropRead:
	service = CropService(db)
	try:
		crop = await service.create(payload)
	except Exception as exc:
		raise map_service_error(exc, "Server error: Failed to add crop.") from exc
	return CropRead.model_validate(crop)


@router.get("", response_model=Page[CropRead])
async def list_crops(
	page: PageNumber = 1,
	limit: PageLimit = 10,
	search: str = "",
	db: AsyncSession = Depends(get_db),
) -> Page[CropRead]:
	service = CropService(db)
	try:
		crops, total_count = await service.list_page(page=page, limit=limit, search=search)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve crops.") from exc
	return Page[CropRead](
		items=[CropRead.model_validate(crop) for crop in crops],
		total_count=total_count,
		page=page,
		limit=limit,
	)


@router.get("/{crop_id}", response_model=CropRead)
async def get_crop(
	crop_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> CropRead:
	service = CropService(db)
	try:
		crop = await service.get(crop_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve crop.") from exc
	return CropRead.model_validate(crop)


@router.put("/{crop_id}", response_model=CropRead)
async def update_crop(
	crop_id: RowId,
	payload: CropUpdate,
	db: AsyncSession = Depends(get_db),
) -> CropRead:
	service = CropService(db)
	try:
		crop = await service.update(crop_id, payload)
	except Exception as exc:
		raise map_service_error(exc, "Crop update failed.") from exc
	return CropRead.model_validate(crop)


@router.delete("/{crop_id}", response_model=MessageRead)
async def delete_crop(
	crop_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = CropService(db)
	try:
		await service.delete(crop_id)
	except Exception as exc:
		raise map_service_error(exc, "Crop deletion failed.") from exc
	return MessageRead(message="Crop deleted successfully.")
