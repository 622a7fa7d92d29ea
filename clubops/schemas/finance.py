"""Finance API schemas."""

from datetime import datetime

from clubops.schemas.common import CamelModel


class FinanceRecordRequest(CamelModel):
    """Body for POST/PUT/DELETE /finance. recordId is required for PUT and DELETE."""

    record_id: str | None = None
    type: str | None = None
    amount: int | float | None = None
    description: str | None = None
    notes: str | None = None


class FinanceRecordResponse(CamelModel):
    id: str
    type: str
    amount: float
    description: str
    notes: str
    recorded_by: str | None
    approved: bool
    approval_request_id: str | None
    created_at: datetime
    updated_at: datetime


class FinanceSummaryResponse(CamelModel):
    income: float
    expense: float
    balance: float
