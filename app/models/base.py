"""ORM base class and mixins: all models inherit from Base."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base: shared MetaData registry for all models."""

    pass


class BigIntPrimaryKeyMixin:
    """BIGSERIAL primary key.

    Values can exceed the range a JSON number represents exactly, so every
    response schema declares them as ``Identifier`` (rendered as a string).
    """

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=True,
    )


class CreatedAtMixin:
    """Adds a server-populated created_at column."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
