"""Equipment and Sale ORM models: the operational side of a farm."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, Date, Enum, ForeignKey, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPrimaryKeyMixin
from app.models.enums import EquipmentConditionEnum

if TYPE_CHECKING:
    from app.models.farm import Farm


class Equipment(Base, BigIntPrimaryKeyMixin):
    """A machine or tool assigned to a farm."""

    __tablename__ = "equipment"

    farm_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("farms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    purchase_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    condition: Mapped[EquipmentConditionEnum | None] = mapped_column(
        Enum(
            EquipmentConditionEnum,
            name="equipment_condition",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=True,
    )
    is_operational: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    # ── Relationships ────────────────────────────────────────────────────
    farm: Mapped[Farm] = relationship(back_populates="equipment")

    def __repr__(self) -> str:
        return f"<Equipment id={self.id} name={self.name!r} farm={self.farm_id}>"


class Sale(Base, BigIntPrimaryKeyMixin):
    """A sale of farm produce to a buyer."""

    __tablename__ = "sales"

    farm_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("farms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    product_type: Mapped[str] = mapped_column(String(100), nullable=False)
    product_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    quantity: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    unit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    price_per_unit: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    sale_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    buyer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    farm: Mapped[Farm] = relationship(back_populates="sales")

    def __repr__(self) -> str:
        return f"<Sale id={self.id} product={self.product_type!r} farm={self.farm_id}>"
