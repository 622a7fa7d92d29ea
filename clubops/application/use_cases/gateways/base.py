"""Mutation gateway: validate, ask the permission table, then execute or queue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from clubops.application.dtos.approval import ApprovalRequestResult
from clubops.application.interfaces.repositories import IRoleAssignmentRepository
from clubops.application.services.action_executor import ActionExecutor
from clubops.application.services.approval_ledger import ApprovalLedger
from clubops.application.use_cases.gateways.validation import PAYLOAD_VALIDATORS
from clubops.domain import policy
from clubops.domain.enums import MutationDomain, MutationOperation, PermissionOutcome
from clubops.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from clubops.domain.value_objects import MutationType
from clubops.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_PAST_TENSE = {
    MutationOperation.ADD: "added",
    MutationOperation.EDIT: "updated",
    MutationOperation.DELETE: "deleted",
}


@dataclass(frozen=True)
class GatewayResult:
    """What a mutation attempt produced: a written entity or a pending request."""

    needs_approval: bool
    message: str
    entity: Any = None
    entity_id: str | None = None
    request: ApprovalRequestResult | None = None


class MutationGateway:
    """Shared add/edit/delete flow for one mutation domain.

    Subclasses set domain, target_field and resource_type, and implement
    _load_target plus the justification builders.
    """

    domain: ClassVar[MutationDomain]
    target_field: ClassVar[str]
    resource_type: ClassVar[str]

    def __init__(
        self,
        role_repo: IRoleAssignmentRepository,
        executor: ActionExecutor,
        ledger: ApprovalLedger,
    ) -> None:
        self._role_repo = role_repo
        self._executor = executor
        self._ledger = ledger

    @property
    def noun(self) -> str:
        return MutationType(self.domain, MutationOperation.ADD).display_name.removeprefix(
            "add "
        )

    async def _role_of(self, actor_id: str) -> str | None:
        assignment = await self._role_repo.get_active(actor_id)
        return assignment.role if assignment else None

    async def _require_read(self, actor_id: str) -> None:
        if not policy.can_read(await self._role_of(actor_id), self.domain):
            raise AuthorizationException(resource=self.domain.value, action="read")

    async def _load_target(self, target_ref: str) -> Any:
        raise NotImplementedError

    async def require_target(self, target_ref: str) -> Any:
        """Load an edit/delete target or raise ResourceNotFoundException."""
        existing = await self._load_target(target_ref)
        if existing is None:
            raise ResourceNotFoundException(self.resource_type, target_ref)
        return existing

    def _describe_new(self, payload: dict[str, Any]) -> str:
        raise NotImplementedError

    def _describe_existing(self, entity: Any) -> str:
        raise NotImplementedError

    def justification(
        self, operation: MutationOperation, payload: dict[str, Any], existing: Any = None
    ) -> str:
        """Human-readable summary shown to the reviewer."""
        subject = (
            self._describe_new(payload)
            if existing is None
            else self._describe_existing(existing)
        )
        return f"request to {operation.value} {self.noun}: {subject}"

    async def add(self, actor_id: str, payload: dict[str, Any]) -> GatewayResult:
        return await self.submit(actor_id, MutationOperation.ADD, payload)

    async def edit(
        self, actor_id: str, target_ref: str | None, payload: dict[str, Any]
    ) -> GatewayResult:
        return await self.submit(actor_id, MutationOperation.EDIT, payload, target_ref)

    async def delete(self, actor_id: str, target_ref: str | None) -> GatewayResult:
        return await self.submit(actor_id, MutationOperation.DELETE, {}, target_ref)

    async def submit(
        self,
        actor_id: str,
        operation: MutationOperation,
        payload: dict[str, Any],
        target_ref: str | None = None,
    ) -> GatewayResult:
        """Run one mutation attempt through validate -> resolve -> execute | queue.

        Raises:
            ValidationException: Payload or target reference invalid.
            AuthorizationException: The caller's role may not touch this domain.
            ResourceNotFoundException: Edit/delete target does not exist.
        """
        cleaned = PAYLOAD_VALIDATORS[self.domain](operation, payload or {})
        if operation is not MutationOperation.ADD and not target_ref:
            raise ValidationException(
                f"{self.target_field} is required", field=self.target_field
            )

        outcome = policy.resolve(await self._role_of(actor_id), self.domain)
        if outcome is PermissionOutcome.DENY:
            raise AuthorizationException(resource=self.domain.value, action=operation.value)

        existing = None
        if target_ref is not None and operation is not MutationOperation.ADD:
            existing = await self.require_target(target_ref)

        mutation_type = MutationType(self.domain, operation)
        if outcome is PermissionOutcome.EXECUTE:
            execution = await self._executor.apply(
                mutation_type, cleaned, target_ref=target_ref, actor_id=actor_id
            )
            return GatewayResult(
                needs_approval=False,
                message=f"{self.noun.capitalize()} {_PAST_TENSE[operation]}",
                entity=execution.entity,
                entity_id=execution.entity_id,
            )

        request = await self._ledger.enqueue(
            actor_id,
            mutation_type.tag,
            cleaned,
            justification=self.justification(operation, cleaned, existing),
            target_ref=target_ref,
        )
        return GatewayResult(
            needs_approval=True,
            message="Request submitted for approval",
            request=request,
        )
