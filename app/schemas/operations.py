"""Pydantic request/response schemas for equipment and sales."""

from __future__ import annotations

import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict

from app.models.enums import EquipmentConditionEnum
from app.schemas.common import (
	Identifier,
	IdentifierInput,
	OptionalDate,
	OptionalDecimal,
	OptionalText,
	RequiredText,
)


def _blank_condition(value: object) -> object:
	if isinstance(value, str) and not value.strip():
		return None
	return value


OptionalCondition = Annotated[EquipmentConditionEnum | None, BeforeValidator(_blank_condition)]


class EquipmentCreate(BaseModel):
	farm_id: IdentifierInput
	name: RequiredText
	purchase_date: OptionalDate = None
	condition: OptionalCondition = None
	is_operational: bool = True


class EquipmentUpdate(BaseModel):
	farm_id: IdentifierInput | None = None
	name: RequiredText | None = None
	purchase_date: OptionalDate = None
	condition: OptionalCondition = None
	is_operational: bool | None = None


class EquipmentRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	farm_id: Identifier
	name: str
	purchase_date: datetime.date | None = None
	condition: EquipmentConditionEnum | None = None
	is_operational: bool


class SaleCreate(BaseModel):
	farm_id: IdentifierInput
	product_type: RequiredText
	product_name: OptionalText = None
	quantity: OptionalDecimal = None
	unit: OptionalText = None
	price_per_unit: OptionalDecimal = None
	sale_date: OptionalDate = None
	buyer_name: OptionalText = None


class SaleUpdate(BaseModel):
	farm_id: IdentifierInput | None = None
	product_type: RequiredText | None = None
	product_name: OptionalText = None
	quantity: OptionalDecimal = None
	unit: OptionalText = None
	price_per_unit: OptionalDecimal = None
	sale_date: OptionalDate = None
	buyer_name: OptionalText = None


class SaleRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: Identifier
	farm_id: Identifier
	product_type: str
	product_name: str | None = None
	quantity: float | None = None
	unit: str | None = None
	price_per_unit: float | None = None
	sale_date: datetime.date | None = None
	buyer_name: str | None = None
