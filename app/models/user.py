"""User ORM model for email/password (JWT) authentication.

Users sign up with a profile image and authenticate with email/password.
Accounts are edited in place (profile, password) and never hard-deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPrimaryKeyMixin, CreatedAtMixin

if TYPE_CHECKING:
    from app.models.farm import Farmer


class User(Base, BigIntPrimaryKeyMixin, CreatedAtMixin):
    """Application user: owns farmer profiles."""

    __tablename__ = "users"

    fullname: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    password: Mapped[str] = mapped_column(String(128), nullable=False)
    image_photo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    farmers: Mapped[list[Farmer]] = relationship(back_populates="user", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
