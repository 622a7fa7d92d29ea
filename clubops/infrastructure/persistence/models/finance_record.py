"""FinanceRecord ORM model. Income/expense ledger line."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from clubops.infrastructure.persistence.database import Base
from clubops.infrastructure.persistence.models.mixins import GatedModel


class FinanceRecord(GatedModel, Base):
    """Finance record. Table: finance_record."""

    __tablename__ = "finance_record"

    type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recorded_by: Mapped[str | None] = mapped_column(String, nullable=True)
