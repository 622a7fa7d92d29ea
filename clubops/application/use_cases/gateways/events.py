"""Event gateway: club events with their registration groups."""

from __future__ import annotations

from typing import Any

from clubops.application.dtos.event import EventResult, EventStatistics
from clubops.application.interfaces.repositories import (
    IEventRepository,
    IRoleAssignmentRepository,
)
from clubops.application.services.action_executor import ActionExecutor
from clubops.application.services.approval_ledger import ApprovalLedger
from clubops.application.use_cases.gateways.base import MutationGateway
from clubops.domain.enums import MutationDomain


class EventGateway(MutationGateway):
    domain = MutationDomain.EVENT
    target_field = "eventId"
    resource_type = "event"

    def __init__(
        self,
        role_repo: IRoleAssignmentRepository,
        executor: ActionExecutor,
        ledger: ApprovalLedger,
        event_repo: IEventRepository,
    ) -> None:
        super().__init__(role_repo, executor, ledger)
        self._event_repo = event_repo

    async def _load_target(self, target_ref: str) -> EventResult | None:
        return await self._event_repo.get_by_id(target_ref)

    def _describe_new(self, payload: dict[str, Any]) -> str:
        groups = payload.get("groups") or []
        suffix = f", {len(groups)} group(s)" if groups else ""
        return f"{payload.get('title')} ({payload.get('type')}{suffix})"

    def _describe_existing(self, entity: EventResult) -> str:
        return entity.title

    async def list_events(
        self, actor_id: str, status: str | None = None, event_type: str | None = None
    ) -> list[EventResult]:
        await self._require_read(actor_id)
        return await self._event_repo.list_events(status=status, event_type=event_type)

    async def statistics(self, actor_id: str) -> list[EventStatistics]:
        """Per-event group, capacity and registration counts."""
        await self._require_read(actor_id)
        return await self._event_repo.get_statistics()
