"""Pydantic schemas for signup, login, profile and password endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Identifier


class LoginRequest(BaseModel):
	email: str = Field(min_length=1)
	password: str = Field(min_length=1)


class LoginResponse(BaseModel):
	token: str
	user_id: Identifier = Field(serialization_alias="userId")


class ChangePasswordRequest(BaseModel):
	current_password: str | None = Field(default=None, alias="currentPassword")
	new_password: str | None = Field(default=None, alias="newPassword")


class UserSummary(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	username: str


class UserOption(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	fullname: str


class UserProfile(BaseModel):
	"""Everything about a user except the password hash."""

	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	fullname: str
	username: str
	email: str
	image_photo: str | None = None
	phone: str | None = None
	address: str | None = None
	created_at: datetime


class SignupResponse(BaseModel):
	message: str
	user: UserSummary


class ProfileUpdateResponse(BaseModel):
	message: str
	user: UserProfile
