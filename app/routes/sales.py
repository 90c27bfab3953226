"""Sale CRUD routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import entity_access
from app.database import get_db
from app.routes.common import PageLimit, PageNumber, RowId, map_service_error
from app.schemas.common import MessageRead, Page
from app.schemas.operations import SaleCreate, SaleRead, SaleUpdate
from app.services.operations_service import SaleService

router = APIRouter(prefix="/sales", tags=["sales"], dependencies=[Depends(entity_access)])


@router.post("", response_model=SaleRead, status_code=status.HTTP_201_CREATED)
async def create_sale(
	payload: SaleCreate,
	db: AsyncSession = Depends(get_db),
) -> SaleRead:
	service = SaleService(db)
	try:
		sale = await service.create(payload)
	except Exception as exc:
		raise map_service_error(exc, "Failed to create sale.") from exc
	return SaleRead.model_validate(sale)


@router.get("", response_model=Page[SaleRead])
async def list_sales(
	page: PageNumber = 1,
	limit: PageLimit = 10,
	search: str = "",
	db: AsyncSession = Depends(get_db),
) -> Page[SaleRead]:
	service = SaleService(db)
	try:
		sales, total_count = await service.list_page(page=page, limit=limit, search=search)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve sales.") from exc
	return Page[SaleRead](
		items=[SaleRead.model_validate(sale) for sale in sales],
		total_count=total_count,
		page=page,
		limit=limit,
	)


@router.get("/{sale_id}", response_model=SaleRead)
async def get_sale(
	sale_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> SaleRead:
	service = SaleService(db)
	try:
		sale = await service.get(sale_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve sale.") from exc
	return SaleRead.model_validate(sale)


@router.put("/{sale_id}", response_model=SaleRead)
async def update_sale(
	sale_id: RowId,
	payload: SaleUpdate,
	db: AsyncSession = Depends(get_db),
) -> SaleRead:
	service = SaleService(db)
	try:
		sale = await service.update(sale_id, payload)
	except Exception as exc:
		raise map_service_error(exc, "Failed to update sale.") from exc
	return SaleRead.model_validate(sale)


@router.delete("/{sale_id}", response_model=MessageRead)
async def delete_sale(
	sale_id: RowId,
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = SaleService(db)
	try:
		await service.delete(sale_id)
	except Exception as exc:
		raise map_service_error(exc, "Failed to delete sale.") from exc
	return MessageRead(message="Sale deleted successfully.")
