"""Pydantic request/response schemas for crops and fertilization records."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict

from app.models.enums import CropStatusEnum
from app.schemas.common import (
	Identifier,
	IdentifierInput,
	OptionalDate,
	OptionalDecimal,
	OptionalText,
	RequiredText,
)


class CropCreate(BaseModel):
	farm_id: IdentifierInput
	name: RequiredText
	variety: OptionalText = None
	planting_date: OptionalDate = None
	expected_harvest_date: OptionalDate = None
	status: CropStatusEnum


class CropUpdate(BaseModel):
	farm_id: IdentifierInput | None = None
	name: RequiredText | None = None
	variety: OptionalText = None
	planting_date: OptionalDate = None
	expected_harvest_date: OptionalDate = None
	status: CropStatusEnum | None = None


class CropRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	farm_id: Identifier
	name: str
	variety: str | None = None
	planting_date: datetime.date | None = None
	expected_harvest_date: datetime.date | None = None
	status: CropStatusEnum


class FertilizationCreate(BaseModel):
	crop_id: IdentifierInput
	date: OptionalDate = None
	type: OptionalText = None
	quantity_kg: OptionalDecimal = None


class FertilizationUpdate(BaseModel):
	crop_id: IdentifierInput | None = None
	date: OptionalDate = None
	type: OptionalText = None
	quantity_kg: OptionalDecimal = None


class FertilizationRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	crop_id: Identifier
	date: datetime.date | None = None
	type: str | None = None
	quantity_kg: float | None = None
