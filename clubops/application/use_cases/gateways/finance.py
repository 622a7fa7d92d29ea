"""Finance gateway: income/expense records."""

from __future__ import annotations

from typing import Any

from clubops.application.dtos.finance import FinanceRecordResult, FinanceSummary
from clubops.application.interfaces.repositories import (
    IFinanceRepository,
    IRoleAssignmentRepository,
)
from clubops.application.services.action_executor import ActionExecutor
from clubops.application.services.approval_ledger import ApprovalLedger
from clubops.application.use_cases.gateways.base import MutationGateway
from clubops.domain.enums import MutationDomain


class FinanceGateway(MutationGateway):
    domain = MutationDomain.FINANCE
    target_field = "recordId"
    resource_type = "finance_record"

    def __init__(
        self,
        role_repo: IRoleAssignmentRepository,
        executor: ActionExecutor,
        ledger: ApprovalLedger,
        finance_repo: IFinanceRepository,
    ) -> None:
        super().__init__(role_repo, executor, ledger)
        self._finance_repo = finance_repo

    async def _load_target(self, target_ref: str) -> FinanceRecordResult | None:
        return await self._finance_repo.get_by_id(target_ref)

    def _describe_new(self, payload: dict[str, Any]) -> str:
        return f"{payload.get('type')} {payload.get('amount')} - {payload.get('description')}"

    def _describe_existing(self, entity: FinanceRecordResult) -> str:
        return entity.description

    async def list_records(
        self, actor_id: str, record_type: str | None = None, approved: bool | None = None
    ) -> list[FinanceRecordResult]:
        await self._require_read(actor_id)
        return await self._finance_repo.list_records(record_type=record_type, approved=approved)

    async def summary(self, actor_id: str) -> FinanceSummary:
        """Income, expense and balance over approved records."""
        await self._require_read(actor_id)
        return await self._finance_repo.get_summary()
