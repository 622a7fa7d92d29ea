"""Inventory gateway: fixed assets and consumables."""

from __future__ import annotations

from typing import Any

from clubops.application.dtos.inventory import InventoryItemResult
from clubops.application.interfaces.repositories import (
    IInventoryRepository,
    IRoleAssignmentRepository,
)
from clubops.application.services.action_executor import ActionExecutor
from clubops.application.services.approval_ledger import ApprovalLedger
from clubops.application.use_cases.gateways.base import MutationGateway
from clubops.domain.enums import MutationDomain


class InventoryGateway(MutationGateway):
    domain = MutationDomain.INVENTORY
    target_field = "itemId"
    resource_type = "inventory_item"

    def __init__(
        self,
        role_repo: IRoleAssignmentRepository,
        executor: ActionExecutor,
        ledger: ApprovalLedger,
        inventory_repo: IInventoryRepository,
    ) -> None:
        super().__init__(role_repo, executor, ledger)
        self._inventory_repo = inventory_repo

    async def _load_target(self, target_ref: str) -> InventoryItemResult | None:
        return await self._inventory_repo.get_by_id(target_ref)

    def _describe_new(self, payload: dict[str, Any]) -> str:
        quantity = payload.get("quantity", 0)
        return f"{payload.get('name')} ({payload.get('category')}) x{quantity} {payload.get('unit')}"

    def _describe_existing(self, entity: InventoryItemResult) -> str:
        return entity.name

    async def list_items(
        self, actor_id: str, category: str | None = None, approved: bool | None = None
    ) -> list[InventoryItemResult]:
        await self._require_read(actor_id)
        return await self._inventory_repo.list_items(category=category, approved=approved)
