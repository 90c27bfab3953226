"""Crop and Fertilization ORM models."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Date, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPrimaryKeyMixin
from app.models.enums import CropStatusEnum

if TYPE_CHECKING:
    from app.models.farm import Farm


class Crop(Base, BigIntPrimaryKeyMixin):
    """A crop planted on a farm, tracked from planting to harvest."""

    __tablename__ = "crops"

    farm_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("farms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    variety: Mapped[str | None] = mapped_column(String(255), nullable=True)
    planting_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    expected_harvest_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    status: Mapped[CropStatusEnum] = mapped_column(
        Enum(
            CropStatusEnum,
            name="crop_status",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
        default=CropStatusEnum.planted,
        server_default=CropStatusEnum.planted.value,
    )

    # ── Relationships ────────────────────────────────────────────────────
    farm: Mapped[Farm] = relationship(back_populates="crops")
    fertilizations: Mapped[list[Fertilization]] = relationship(back_populates="crop", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Crop id={self.id} name={self.name!r} status={self.status}>"


class Fertilization(Base, BigIntPrimaryKeyMixin):
    """A fertilizer application against a crop (quantity in kg)."""

    __tablename__ = "fertilizations"

    crop_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("crops.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    quantity_kg: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    crop: Mapped[Crop] = relationship(back_populates="fertilizations")

    def __repr__(self) -> str:
        return f"<Fertilization id={self.id} crop={self.crop_id} type={self.type!r}>"
