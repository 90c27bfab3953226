"""Pydantic request/response schemas for farmers and farms."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from app.models.enums import GenderEnum
from app.schemas.common import (
	Identifier,
	IdentifierInput,
	NonNegativeDecimal,
	OptionalText,
	RequiredText,
)


class FarmerCreate(BaseModel):
	user_id: IdentifierInput
	full_name: RequiredText
	gender: GenderEnum
	phone: OptionalText = None
	email: OptionalText = None
	address: OptionalText = None


class FarmerUpdate(BaseModel):
	user_id: IdentifierInput | None = None
	full_name: RequiredText | None = None
	gender: GenderEnum | None = None
	phone: OptionalText = None
	email: OptionalText = None
	address: OptionalText = None


class FarmerRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	user_id: Identifier
	full_name: str
	gender: GenderEnum
	phone: str | None = None
	email: str | None = None
	address: str | None = None


class FarmerSummary(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	full_name: str


class FarmCreate(BaseModel):
	farmer_id: IdentifierInput
	name: RequiredText
	location: RequiredText
	size_acres: NonNegativeDecimal
	irrigation: bool = False
	gps_coordinates: OptionalText = None


class FarmUpdate(BaseModel):
	farmer_id: IdentifierInput | None = None
	name: RequiredText | None = None
	location: RequiredText | None = None
	size_acres: NonNegativeDecimal | None = None
	irrigation: bool | None = None
	gps_coordinates: OptionalText = None


class FarmRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	farmer_id: Identifier
	name: str
	location: str
	size_acres: float
	irrigation: bool
	gps_coordinates: str | None = None
	farmer: FarmerSummary | None = None
