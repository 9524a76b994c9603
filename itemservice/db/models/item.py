"""SQLAlchemy model for stored items."""

from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column


class Base(DeclarativeBase):
    """Declarative base for item service ORM models."""


class ItemRecord(Base):
    """Persisted item row."""

    __tablename__ = "items"
    __table_args__ = (PrimaryKeyConstraint("id", name="pk_items"),)

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    item_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
