"""Farmer CRUD routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import entity_access
from app.database import get_db
from app.routes.common import PageLimit, PageNumber, RowId, map_service_error
from app.schemas.common import MessageRead, Page
from app.schemas.farm import FarmerCreate, FarmerRead, FarmerUpdate
from app.services.farm_service import FarmerService

router = APIRouter(prefix="/farmers", tags=["farmers"], dependencies=[Depends(entity_access)])


@router.post("", response_model=FarmerRead, status_code=status.HTTP_201_CREATED)
async def create_farmer(
	payload: FarmerCreate,
	db: AsyncSession = Depends(get_db),
) -> FarmerRead:
	service = FarmerService(db)
	try:
		farmer = await service.create(payload)
	except Exception as exc:
		raise map_service_error(exc, "Server error occurred while adding farmer.") from exc
	return FarmerRead.model_validate(farmer)


@router.get("", response_model=Page[FarmerRead])
async def list_farmers(
	page: PageNumber = 1,
	limit: PageLimit = 10,
	search: str = "",
	db: AsyncSession = Depends(get_db),
) -> Page[FarmerRead]:
	service = FarmerService(db)
	try:
		farmers, total_count = await service.list_page(page=page, limit=limit, search=search)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve farmers.") from exc
	return Page[FarmerRead](
		items=[FarmerRead.model_validate(farmer) for farmer in farmers],
		total_count=total_count,
		page=page,
		limit=limit,
	)


@router.get("/{farmer_id}", response_model=FarmerRead)
async def get_farmer(
	farmer_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> FarmerRead:
	service = FarmerService(db)
	try:
		farmer = await service.get(farmer_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve farmer.") from exc
	return FarmerRead.model_validate(farmer)


@router.put("/{farmer_id}", response_model=FarmerRead)
async def update_farmer(
	farmer_id: RowId,
	payload: FarmerUpdate,
	db: AsyncSession = Depends(get_db),
) -> FarmerRead:
	service = FarmerService(db)
	try:
		farmer = await service.update(farmer_id, payload)
	except Exception as exc:
		raise map_service_error(exc, "Farmer update failed.") from exc
	return FarmerRead.model_validate(farmer)


@router.delete("/{farmer_id}", response_model=MessageRead)
async def delete_farmer(
	farmer_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = FarmerService(db)
	try:
		await service.delete(farmer_id)
	except Exception as exc:
		raise map_service_error(exc, "Farmer deletion failed.") from exc
	return MessageRead(message="Farmer deleted successfully.")
