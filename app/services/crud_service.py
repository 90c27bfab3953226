"""Generic create/list/get/update/delete service shared by every entity."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Enum, String, cast, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.models.base import Base
from app.services.errors import (
	FOREIGN_KEY_VIOLATION,
	UNIQUE_VIOLATION,
	ConflictError,
	MissingReferenceError,
	integrity_sqlstate,
)

ModelT = TypeVar("ModelT", bound=Base)


def escape_like(term: str) -> str:
	return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CrudService(Generic[ModelT]):
	"""CRUD over one ORM model.

	Subclasses declare the model, a human label for messages, the columns
	searched by ``list_page`` and the foreign-key fields with the label of
	the row they point at.
	"""

	model: ClassVar[type[Base]]
	label: ClassVar[str]
	search_columns: ClassVar[tuple[Any, ...]] = ()
	references: ClassVar[dict[str, str]] = {}
	load_options: ClassVar[tuple[Any, ...]] = ()

	def __init__(self, db: AsyncSession):
		self.db = db

	async def create(self, payload: BaseModel) -> ModelT:
		values = payload.model_dump()
		await self.before_write(values, instance_id=None)
		instance = self.model(**values)
		self.db.add(instance)
		await self._flush(values)
		return await self.get(instance.id)

	async def list_page(self, *, page: int, limit: int, search: str = "") -> tuple[list[ModelT], int]:
		"""Return one page of rows (ordered by id) and the total matching count.

		Both reads run in the caller's session but not in a snapshot, so a
		concurrent write between them can make the count disagree with the page.
		"""
		count_stmt = select(func.count()).select_from(self.model)
		stmt = (
			select(self.model)
			.options(*self.load_options)
			.order_by(self.model.id.asc())
			.offset((page - 1) * limit)
			.limit(limit)
		)
		condition = self.search_condition(search)
		if condition is not None:
			count_stmt = count_stmt.where(condition)
			stmt = stmt.where(condition)

		total = (await self.db.execute(count_stmt)).scalar_one()
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all()), int(total)

	async def get(self, instance_id: int) -> ModelT:
		stmt = (
			select(self.model)
			.where(self.model.id == instance_id)
			.options(*self.load_options)
			.execution_options(populate_existing=True)
		)
		row = await self.db.execute(stmt)
		instance = row.scalar_one_or_none()
		if instance is None:
			raise LookupError(f"{self.label} not found.")
		return instance

	async def update(self, instance_id: int, payload: BaseModel) -> ModelT:
		instance = await self.get(instance_id)
		changes = payload.model_dump(exclude_unset=True)
		for field in sorted(self.not_null_fields() & changes.keys()):
			if changes[field] is None:
				raise ValueError(f"{field} cannot be null.")

		await self.before_write(changes, instance_id=instance_id)
		for field, value in changes.items():
			setattr(instance, field, value)
		await self._flush(changes)
		return await self.get(instance_id)

	async def delete(self, instance_id: int) -> None:
		instance = await self.get(instance_id)
		await self.db.delete(instance)
		try:
			await self.db.flush()
		except IntegrityError as exc:
			if integrity_sqlstate(exc) == FOREIGN_KEY_VIOLATION:
				raise ConflictError(
					f"{self.label} is still referenced by other records and cannot be deleted."
				) from exc
			raise

	async def before_write(self, values: dict[str, Any], instance_id: int | None) -> None:
		"""Hook for application-level checks before an insert or update."""
		return None

	def search_condition(self, search: str) -> ColumnElement[bool] | None:
		term = search.strip()
		if not term or not self.search_columns:
			return None
		pattern = f"%{escape_like(term)}%"
		return or_(*(self._searchable(column).ilike(pattern, escape="\\") for column in self.search_columns))

	@classmethod
	def not_null_fields(cls) -> set[str]:
		return {
			column.key
			for column in cls.model.__table__.columns
			if not column.nullable and not column.primary_key
		}

	@staticmethod
	def _searchable(column: Any) -> Any:
		if isinstance(column.type, Enum):
			return cast(column, String)
		return column

	async def _flush(self, values: dict[str, Any]) -> None:
		try:
			await self.db.flush()
		except IntegrityError as exc:
			translated = self._translate_integrity_error(exc, values)
			if translated is None:
				raise
			raise translated from exc

	def _translate_integrity_error(self, exc: IntegrityError, values: dict[str, Any]) -> Exception | None:
		sqlstate = integrity_sqlstate(exc)
		if sqlstate == FOREIGN_KEY_VIOLATION:
			for field, target in self.references.items():
				if field in values:
					return MissingReferenceError(
						f"Invalid {target} ID provided. No {target.lower()} found with ID {values[field]}."
					)
			return MissingReferenceError(f"{self.label} references a record that does not exist.")
		if sqlstate == UNIQUE_VIOLATION:
			return ConflictError(f"A {self.label.lower()} with this unique field already exists.")
		return None
