"""ApprovalRequest repository: ledger rows and their status transitions."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clubops.application.dtos.approval import ApprovalRequestResult
from clubops.domain.enums import ApprovalStatus
from clubops.domain.exceptions import ResourceNotFoundException
from clubops.infrastructure.persistence.models.approval_request import ApprovalRequest
from clubops.infrastructure.persistence.repositories.base import BaseRepository
from clubops.shared.utils.datetime import ensure_utc, utc_now


def _request_to_result(row: ApprovalRequest) -> ApprovalRequestResult:
    return ApprovalRequestResult(
        id=row.id,
        request_type=row.request_type,
        requester_id=row.requester_id,
        payload=dict(row.payload or {}),
        status=ApprovalStatus(row.status),
        created_at=ensure_utc(row.created_at),
        justification=row.justification,
        target_ref=row.target_ref,
        reviewer_id=row.reviewer_id,
        reviewer_note=row.reviewer_note,
        resolved_at=ensure_utc(row.resolved_at),
        executed_at=ensure_utc(row.executed_at),
        execution_error=row.execution_error,
    )


class ApprovalRequestRepository(BaseRepository[ApprovalRequest]):
    """Approval request persistence. Payload is never rewritten after insert."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApprovalRequest)

    async def _require_model(self, request_id: str) -> ApprovalRequest:
        row = await self.get_model(request_id)
        if row is None:
            raise ResourceNotFoundException("approval_request", request_id)
        return row

    async def create_request(
        self,
        request_type: str,
        requester_id: str,
        payload: dict[str, Any],
        justification: str | None = None,
        target_ref: str | None = None,
    ) -> ApprovalRequestResult:
        row = ApprovalRequest(
            request_type=request_type,
            requester_id=requester_id,
            payload=payload,
            justification=justification,
            target_ref=target_ref,
            status=ApprovalStatus.PENDING.value,
        )
        return _request_to_result(await self.create(row))

    async def get_by_id(self, request_id: str) -> ApprovalRequestResult | None:
        row = await self.get_model(request_id)
        return _request_to_result(row) if row else None

    async def get_for_update(self, request_id: str) -> ApprovalRequestResult | None:
        """Row-locking read; concurrent resolvers queue behind the first."""
        result = await self.db.execute(
            select(ApprovalRequest)
            .where(ApprovalRequest.id == request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _request_to_result(row) if row else None

    async def list_by_status(self, status: ApprovalStatus) -> list[ApprovalRequestResult]:
        result = await self.db.execute(
            select(ApprovalRequest)
            .where(ApprovalRequest.status == ApprovalStatus(status).value)
            .order_by(ApprovalRequest.created_at.asc())
        )
        return [_request_to_result(r) for r in result.scalars().all()]

    async def list_by_requester(self, requester_id: str) -> list[ApprovalRequestResult]:
        result = await self.db.execute(
            select(ApprovalRequest)
            .where(ApprovalRequest.requester_id == requester_id)
            .order_by(ApprovalRequest.created_at.desc())
        )
        return [_request_to_result(r) for r in result.scalars().all()]

    async def mark_resolved(
        self,
        request_id: str,
        status: ApprovalStatus,
        reviewer_id: str,
        reviewer_note: str | None,
    ) -> ApprovalRequestResult:
        row = await self._require_model(request_id)
        await self.apply_changes(
            row,
            {
                "status": ApprovalStatus(status).value,
                "reviewer_id": reviewer_id,
                "reviewer_note": reviewer_note,
                "resolved_at": utc_now(),
            },
        )
        return _request_to_result(row)

    async def mark_executed(self, request_id: str) -> ApprovalRequestResult:
        row = await self._require_model(request_id)
        await self.apply_changes(row, {"executed_at": utc_now(), "execution_error": None})
        return _request_to_result(row)

    async def record_execution_error(
        self, request_id: str, error: str
    ) -> ApprovalRequestResult:
        row = await self._require_model(request_id)
        await self.apply_changes(row, {"execution_error": error[:2000]})
        return _request_to_result(row)
