"""InventoryItem ORM model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from clubops.infrastructure.persistence.database import Base
from clubops.infrastructure.persistence.models.mixins import GatedModel


class InventoryItem(GatedModel, Base):
    """Inventory item. Table: inventory_item."""

    __tablename__ = "inventory_item"

    name: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unit: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    last_modified_by: Mapped[str | None] = mapped_column(String, nullable=True)
