"""Farmer and Farm ORM models: the ownership chain from users down to land.

A user registers one or more farmer profiles; each farmer owns farms, and
crops, equipment and sales all hang off a farm.  Foreign keys use
``ON DELETE RESTRICT`` so that removing a parent with live children is
reported back to the caller instead of silently cascading.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, Enum, ForeignKey, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPrimaryKeyMixin
from app.models.enums import GenderEnum

if TYPE_CHECKING:
    from app.models.crops import Crop
    from app.models.operations import Equipment, Sale
    from app.models.user import User

# ═══════════════════════════════════════════════════════════════════════════
# Farmer
# ═══════════════════════════════════════════════════════════════════════════


class Farmer(Base, BigIntPrimaryKeyMixin):
    """A farmer profile linked to a user account.

    ``email`` is unique by application-level check only; there is no
    store constraint behind it.
    """

    __tablename__ = "farmers"

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[GenderEnum] = mapped_column(
        Enum(
            GenderEnum,
            name="gender",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    user: Mapped[User] = relationship(back_populates="farmers")
    farms: Mapped[list[Farm]] = relationship(back_populates="farmer", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Farmer id={self.id} name={self.full_name!r}>"


# ═══════════════════════════════════════════════════════════════════════════
# Farm
# ═══════════════════════════════════════════════════════════════════════════


class Farm(Base, BigIntPrimaryKeyMixin):
    """A parcel of land worked by a farmer."""

    __tablename__ = "farms"

    farmer_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("farmers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    size_acres: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    irrigation: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )
    gps_coordinates: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    farmer: Mapped[Farmer] = relationship(back_populates="farms", lazy="selectin")
    crops: Mapped[list[Crop]] = relationship(back_populates="farm", passive_deletes="all")
    equipment: Mapped[list[Equipment]] = relationship(back_populates="farm", passive_deletes="all")
    sales: Mapped[list[Sale]] = relationship(back_populates="farm", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Farm id={self.id} name={self.name!r} farmer={self.farmer_id}>"
