"""Farmer and farm services."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from app.models.farm import Farm, Farmer
from app.services.crud_service import CrudService, escape_like
from app.services.errors import ConflictError


class FarmerService(CrudService[Farmer]):
	"""Farmer CRUD with an application-level email uniqueness check.

	The check is a separate query, so two concurrent writes with the same
	email can both pass it; there is no store constraint behind it.
	"""

	model = Farmer
	label = "Farmer"
	search_columns = (Farmer.full_name, Farmer.email, Farmer.phone, Farmer.address)
	references = {"user_id": "User"}

	async def before_write(self, values: dict[str, Any], instance_id: int | None) -> None:
		email = values.get("email")
		if not email:
			return
		stmt = select(Farmer.id).where(Farmer.email == email)
		if instance_id is not None:
			stmt = stmt.where(Farmer.id != instance_id)
		row = await self.db.execute(stmt.limit(1))
		if row.scalar_one_or_none() is not None:
			raise ConflictError("This email is already registered to another farmer.")


class FarmService(CrudService[Farm]):
	"""Farm CRUD; reads carry the owning farmer and search matches the farmer's name."""

	model = Farm
	label = "Farm"
	search_columns = (Farm.name, Farm.location)
	references = {"farmer_id": "Farmer"}
	load_options = (selectinload(Farm.farmer),)

	def search_condition(self, search: str) -> ColumnElement[bool] | None:
		condition = super().search_condition(search)
		if condition is None:
			return None
		pattern = f"%{escape_like(search.strip())}%"
		return or_(condition, Farm.farmer.has(Farmer.full_name.ilike(pattern, escape="\\")))
