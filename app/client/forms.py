"""Client-side form models mirroring the dashboard's validation rules.

Form values are kept as the strings an HTML form would hold; blank optional
inputs stay ``""`` and the API stores them as NULL.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, ClassVar, Literal

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, Field, TypeAdapter, model_validator

from app.models.enums import CropStatusEnum, EquipmentConditionEnum, GenderEnum

_EMAIL = TypeAdapter(EmailStr)


def _optional_date(value: str) -> str:
	if value:
		try:
			date.fromisoformat(value)
		except ValueError as exc:
			raise ValueError("Invalid date") from exc
	return value


def _optional_email(value: str) -> str:
	if value:
		_EMAIL.validate_python(value)
	return value


def _optional_phone(value: str) -> str:
	if value and not 5 <= len(value) <= 15:
		raise ValueError("Phone number must be between 5 and 15 characters long.")
	return value


def _blank_number(value: Any) -> Any:
	if isinstance(value, str) and not value.strip():
		return None
	return value


DateText = Annotated[str, AfterValidator(_optional_date)]
SelectedId = Annotated[str, Field(min_length=1)]
OptionalNumber = Annotated[Annotated[float, Field(ge=0)] | None, BeforeValidator(_blank_number)]


class EntityForm(BaseModel):
	"""Base for the per-entity modal forms."""

	date_fields: ClassVar[tuple[str, ...]] = ()

	@classmethod
	def defaults(cls) -> dict[str, Any]:
		"""Values the add modal opens with."""
		values: dict[str, Any] = {}
		for name, field in cls.model_fields.items():
			if field.is_required():
				values[name] = ""
			else:
				default = field.get_default(call_default_factory=True)
				values[name] = "" if default is None else default
		return values

	@classmethod
	def values_from_row(cls, row: dict[str, Any]) -> dict[str, Any]:
		"""Form values for editing ``row``: ids as strings, dates as YYYY-MM-DD."""
		values = cls.defaults()
		for name in cls.model_fields:
			if name not in row:
				continue
			value = row[name]
			if value is None:
				values[name] = ""
			elif name in cls.date_fields:
				values[name] = str(value).split("T", 1)[0]
			elif name.endswith("_id"):
				values[name] = str(value)
			else:
				values[name] = value
		return values

	def to_payload(self) -> dict[str, Any]:
		return self.model_dump(mode="json")


class FarmerForm(EntityForm):
	full_name: str = Field(min_length=3)
	user_id: SelectedId
	gender: GenderEnum
	phone: Annotated[str, AfterValidator(_optional_phone)] = ""
	email: Annotated[str, AfterValidator(_optional_email)] = ""
	address: str = Field(min_length=5)


class FarmForm(EntityForm):
	farmer_id: SelectedId
	name: str = Field(min_length=3)
	location: str = Field(min_length=5)
	size_acres: float = Field(ge=0.01)
	irrigation: bool = False
	gps_coordinates: str = ""


class CropForm(EntityForm):
	date_fields = ("planting_date", "expected_harvest_date")

	farm_id: SelectedId
	name: str = Field(min_length=3)
	variety: str = ""
	planting_date: DateText = ""
	expected_harvest_date: DateText = ""
	status: CropStatusEnum = CropStatusEnum.planted


class EquipmentForm(EntityForm):
	date_fields = ("purchase_date",)

	farm_id: SelectedId
	name: str = Field(min_length=3)
	purchase_date: DateText = ""
	condition: EquipmentConditionEnum | Literal[""] = ""
	is_operational: bool = True


class SaleForm(EntityForm):
	date_fields = ("sale_date",)

	farm_id: SelectedId
	product_type: str = Field(min_length=1)
	product_name: str = ""
	quantity: OptionalNumber = None
	unit: str = ""
	price_per_unit: OptionalNumber = None
	sale_date: DateText = ""
	buyer_name: str = ""


class FertilizationForm(EntityForm):
	date_fields = ("date",)

	crop_id: SelectedId
	date: DateText = ""
	type: str = ""
	quantity_kg: OptionalNumber = None


class SignupForm(BaseModel):
	fullname: str = Field(min_length=3)
	username: str = Field(min_length=3)
	email: EmailStr
	password: str = Field(min_length=3)
	phone: str | None = None
	address: str | None = None


class LoginForm(BaseModel):
	email: EmailStr
	password: str = Field(min_length=1)


class PasswordChangeForm(BaseModel):
	current_password: str = Field(min_length=1)
	new_password: str = Field(min_length=1)
	confirm_new_password: str

	@model_validator(mode="after")
	def _passwords_match(self) -> PasswordChangeForm:
		if self.new_password != self.confirm_new_password:
			raise ValueError("New password and confirm password do not match.")
		return self


ENTITY_FORMS: dict[str, type[EntityForm]] = {
	"farmers": FarmerForm,
	"farms": FarmForm,
	"crops": CropForm,
	"equipment": EquipmentForm,
	"sales": SaleForm,
	"fertilization": FertilizationForm,
}
