"""User lookup route used to pick a farmer's owning account."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.routes.common import map_service_error
from app.schemas.auth import UserOption
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserOption])
async def list_users(db: AsyncSession = Depends(get_db)) -> list[UserOption]:
	service = AuthService(db)
	try:
		users = await service.list_users()
	except Exception as exc:
		raise map_service_error(exc, "Failed to retrieve users.") from exc
	return [UserOption.model_validate(user) for user in users]
