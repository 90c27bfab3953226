"""Account routes: signup, login, current user, profile and password updates."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user_id
from app.database import get_db
from app.routes.common import RowId, map_service_error
from app.schemas.auth import (
	ChangePasswordRequest,
	LoginRequest,
	LoginResponse,
	ProfileUpdateResponse,
	SignupResponse,
	UserProfile,
	UserSummary,
)
from app.schemas.common import MessageRead
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])

OptionalForm = Annotated[str | None, Form()]
ImageUpload = Annotated[UploadFile | None, File(alias="imagePhoto")]


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
	fullname: OptionalForm = None,
	username: OptionalForm = None,
	email: OptionalForm = None,
	password: OptionalForm = None,
	phone: OptionalForm = None,
	address: OptionalForm = None,
	image_photo: ImageUpload = None,
	db: AsyncSession = Depends(get_db),
) -> SignupResponse:
	service = AuthService(db)
	try:
		user = await service.signup(
			fullname=fullname,
			username=username,
			email=email,
			password=password,
			phone=phone,
			address=address,
			image=image_photo,
		)
	except Exception as exc:
		raise map_service_error(exc, "Internal server error.") from exc
	return SignupResponse(message="User created.", user=UserSummary.model_validate(user))


@router.post("/login", response_model=LoginResponse)
async def login(
	payload: LoginRequest,
	db: AsyncSession = Depends(get_db),
) -> LoginResponse:
	service = AuthService(db)
	try:
		token, user = await service.login(payload.email, payload.password)
	except Exception as exc:
		raise map_service_error(exc, "Internal server error.") from exc
	return LoginResponse(token=token, user_id=user.id)


@router.get("/me", response_model=UserProfile)
async def me(
	current_user_id: int = Depends(get_current_user_id),
	db: AsyncSession = Depends(get_db),
) -> UserProfile:
	service = AuthService(db)
	try:
		user = await service.get_profile(current_user_id)
	except Exception as exc:
		raise map_service_error(exc, "Internal server error.") from exc
	return UserProfile.model_validate(user)


@router.put("/update-profile/{user_id}", response_model=ProfileUpdateResponse)
async def update_profile(
	user_id: RowId,
	fullname: OptionalForm = None,
	username: OptionalForm = None,
	email: OptionalForm = None,
	phone: OptionalForm = None,
	address: OptionalForm = None,
	image_photo: ImageUpload = None,
	current_user_id: int = Depends(get_current_user_id),
	db: AsyncSession = Depends(get_db),
) -> ProfileUpdateResponse:
	service = AuthService(db)
	try:
		user = await service.update_profile(
			user_id,
			current_user_id,
			fullname=fullname,
			username=username,
			email=email,
			phone=phone,
			address=address,
			image=image_photo,
		)
	except Exception as exc:
		raise map_service_error(exc, "Internal server error.") from exc
	return ProfileUpdateResponse(message="Profile updated.", user=UserProfile.model_validate(user))


@router.put("/change-password/{user_id}", response_model=MessageRead)
async def change_password(
	user_id: RowId,
	payload: ChangePasswordRequest,
	current_user_id: int = Depends(get_current_user_id),
	db: AsyncSession = Depends(get_db),
) -> MessageRead:
	service = AuthService(db)
	try:
		await service.change_password(
			user_id,
			current_user_id,
			payload.current_password,
			payload.new_password,
		)
	except Exception as exc:
		raise map_service_error(exc, "Internal server error.") from exc
	return MessageRead(message="Password changed.")
