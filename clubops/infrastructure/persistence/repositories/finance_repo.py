"""FinanceRecord repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clubops.application.dtos.finance import FinanceRecordResult, FinanceSummary
from clubops.domain.enums import FinanceType
from clubops.infrastructure.persistence.models.finance_record import FinanceRecord
from clubops.infrastructure.persistence.repositories.base import BaseRepository
from clubops.shared.utils.datetime import ensure_utc


def _record_to_result(row: FinanceRecord) -> FinanceRecordResult:
    return FinanceRecordResult(
        id=row.id,
        type=row.type,
        amount=Decimal(row.amount),
        description=row.description,
        notes=row.notes or "",
        recorded_by=row.recorded_by,
        approved=row.approved,
        approval_request_id=row.approval_request_id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class FinanceRepository(BaseRepository[FinanceRecord]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, FinanceRecord)

    async def list_records(
        self, record_type: str | None = None, approved: bool | None = None
    ) -> list[FinanceRecordResult]:
        stmt = select(FinanceRecord).order_by(FinanceRecord.created_at.desc())
        if record_type:
            stmt = stmt.where(FinanceRecord.type == record_type)
        if approved is not None:
            stmt = stmt.where(FinanceRecord.approved.is_(approved))
        result = await self.db.execute(stmt)
        return [_record_to_result(r) for r in result.scalars().all()]

    async def get_by_id(self, record_id: str) -> FinanceRecordResult | None:
        row = await self.get_model(record_id)
        return _record_to_result(row) if row else None

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> FinanceRecordResult | None:
        result = await self.db.execute(
            select(FinanceRecord).where(
                FinanceRecord.approval_request_id == approval_request_id
            )
        )
        row = result.scalars().first()
        return _record_to_result(row) if row else None

    async def create_record(self, values: dict[str, Any]) -> FinanceRecordResult:
        return _record_to_result(await self.create(FinanceRecord(**values)))

    async def update_record(
        self, record_id: str, values: dict[str, Any]
    ) -> FinanceRecordResult | None:
        row = await self.get_model(record_id)
        if row is None:
            return None
        return _record_to_result(await self.apply_changes(row, values))

    async def delete_record(self, record_id: str) -> bool:
        return await self.delete_by_id(record_id)

    async def get_summary(self) -> FinanceSummary:
        """Totals per type over approved records; missing types count as zero."""
        result = await self.db.execute(
            select(FinanceRecord.type, func.coalesce(func.sum(FinanceRecord.amount), 0))
            .where(FinanceRecord.approved.is_(True))
            .group_by(FinanceRecord.type)
        )
        totals = {row_type: Decimal(total) for row_type, total in result.all()}
        return FinanceSummary(
            income=totals.get(FinanceType.INCOME.value, Decimal("0")),
            expense=totals.get(FinanceType.EXPENSE.value, Decimal("0")),
        )
