"""DTOs for finance records (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class FinanceRecordResult:
    """Finance record read-model."""

    id: str
    type: str
    amount: Decimal
    description: str
    notes: str
    recorded_by: str | None
    approved: bool
    approval_request_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class FinanceSummary:
    """Totals over approved finance records."""

    income: Decimal
    expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense
