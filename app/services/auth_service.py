"""Account service: signup, login, profile edits and password changes."""

from __future__ import annotations

from fastapi import UploadFile
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import hash_password, verify_password
from app.auth.jwt import create_access_token
from app.models.user import User
from app.services.errors import (
	UNIQUE_VIOLATION,
	ConflictError,
	InvalidCredentialsError,
	integrity_sqlstate,
)
from app.services.upload_service import ImageStore


class AuthService:
	def __init__(self, db: AsyncSession, images: ImageStore | None = None):
		self.db = db
		self.images = images or ImageStore()

	async def signup(
		self,
		*,
		fullname: str | None,
		username: str | None,
		email: str | None,
		password: str | None,
		phone: str | None = None,
		address: str | None = None,
		image: UploadFile | None = None,
	) -> User:
		if not (fullname and username and email and password) or not self.images.is_present(image):
			raise ValueError("All fields are required including profile image.")

		row = await self.db.execute(
			select(User.id).where(or_(User.username == username, User.email == email)).limit(1)
		)
		if row.scalar_one_or_none() is not None:
			raise ConflictError("Username or Email already exists.")

		filename = await self.images.save(image)
		user = User(
			fullname=fullname,
			username=username,
			email=email,
			password=hash_password(password),
			image_photo=filename,
			phone=phone or None,
			address=address or None,
		)
		self.db.add(user)
		await self._flush("Username or Email already exists.", saved_image=filename)
		await self.db.refresh(user)
		return user

	async def login(self, email: str, password: str) -> tuple[str, User]:
		row = await self.db.execute(select(User).where(User.email == email))
		user = row.scalar_one_or_none()
		if user is None or not verify_password(password, user.password):
			raise InvalidCredentialsError("Incorrect email or password.")
		return create_access_token(user.id), user

	async def get_profile(self, user_id: int) -> User:
		row = await self.db.execute(select(User).where(User.id == user_id))
		user = row.scalar_one_or_none()
		if user is None:
			raise LookupError("User not found.")
		return user

	async def update_profile(
		self,
		user_id: int,
		actor_id: int,
		*,
		fullname: str | None = None,
		username: str | None = None,
		email: str | None = None,
		phone: str | None = None,
		address: str | None = None,
		image: UploadFile | None = None,
	) -> User:
		"""Apply the non-blank fields to ``user_id``'s profile; blank ones keep their value."""
		self._ensure_self(user_id, actor_id)
		user = await self.get_profile(user_id)

		if username and await self._taken(User.username == username, user_id):
			raise ConflictError("Username already taken.")
		if email and await self._taken(User.email == email, user_id):
			raise ConflictError("Email already taken.")

		changes = {
			"fullname": fullname,
			"username": username,
			"email": email,
			"phone": phone,
			"address": address,
		}
		for field, value in changes.items():
			if value:
				setattr(user, field, value)
		saved_image = None
		if self.images.is_present(image):
			saved_image = await self.images.save(image)
			user.image_photo = saved_image

		await self._flush("Username or Email already taken.", saved_image=saved_image)
		await self.db.refresh(user)
		return user

	async def change_password(
		self,
		user_id: int,
		actor_id: int,
		current_password: str | None,
		new_password: str | None,
	) -> None:
		self._ensure_self(user_id, actor_id)
		if not current_password or not new_password:
			raise ValueError("Both passwords are required.")

		row = await self.db.execute(select(User).where(User.id == user_id))
		user = row.scalar_one_or_none()
		if user is None or not verify_password(current_password, user.password):
			raise InvalidCredentialsError("Incorrect current password.")

		user.password = hash_password(new_password)
		await self.db.flush()

	async def list_users(self) -> list[User]:
		rows = await self.db.execute(select(User).order_by(User.id.asc()))
		return list(rows.scalars().all())

	@staticmethod
	def _ensure_self(user_id: int, actor_id: int) -> None:
		if user_id != actor_id:
			raise PermissionError("Unauthorized.")

	async def _taken(self, condition: object, user_id: int) -> bool:
		row = await self.db.execute(
			select(User.id).where(condition, User.id != user_id).limit(1)  # type: ignore[arg-type]
		)
		return row.scalar_one_or_none() is not None

	async def _flush(self, conflict_message: str, saved_image: str | None = None) -> None:
		"""Flush pending user changes; a failed flush deletes ``saved_image`` again."""
		try:
			await self.db.flush()
		except Exception as exc:
			if saved_image:
				await self.images.discard(saved_image)
			if isinstance(exc, IntegrityError) and integrity_sqlstate(exc) == UNIQUE_VIOLATION:
				raise ConflictError(conflict_message) from exc
			raise
