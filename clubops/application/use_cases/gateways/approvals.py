"""Approval gateway: direct request submission plus the reviewer's queue."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from clubops.application.dtos.approval import ApprovalRequestResult, ResolutionOutcome
from clubops.application.interfaces.repositories import IRoleAssignmentRepository
from clubops.application.services.approval_ledger import ApprovalLedger
from clubops.application.use_cases.gateways.base import MutationGateway
from clubops.application.use_cases.gateways.validation import PAYLOAD_VALIDATORS
from clubops.domain import policy
from clubops.domain.enums import MutationDomain, MutationOperation, PermissionOutcome
from clubops.domain.exceptions import (
    AuthorizationException,
    InvalidRequestTypeException,
    ValidationException,
)
from clubops.domain.value_objects import MutationType

SCOPE_PENDING = "pending"
SCOPE_OWN = "own"


class ApprovalGateway:
    """Front door of the approval ledger for HTTP callers."""

    def __init__(
        self,
        role_repo: IRoleAssignmentRepository,
        ledger: ApprovalLedger,
        domain_gateways: Mapping[MutationDomain, MutationGateway],
    ) -> None:
        self._role_repo = role_repo
        self._ledger = ledger
        self._domain_gateways = domain_gateways

    async def submit(
        self,
        actor_id: str,
        request_type: str,
        payload: Any,
        justification: str | None = None,
        target_ref: str | None = None,
    ) -> ApprovalRequestResult:
        """Queue a request explicitly (the same path a queue-only gateway write takes).

        Raises:
            InvalidRequestTypeException: Tag outside the queueable taxonomy.
            ValidationException: Bad payload, missing target, or caller needs no approval.
            AuthorizationException: Caller's role may not request this domain.
            ResourceNotFoundException: Edit/delete target does not exist.
        """
        try:
            mutation_type = MutationType.parse(request_type)
        except ValueError:
            raise InvalidRequestTypeException(request_type) from None
        if not mutation_type.is_queueable:
            raise InvalidRequestTypeException(request_type)

        if payload is None and mutation_type.operation is MutationOperation.DELETE:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationException("payload must be an object", field="payload")
        cleaned = PAYLOAD_VALIDATORS[mutation_type.domain](mutation_type.operation, payload)
        if mutation_type.operation is not MutationOperation.ADD and not target_ref:
            raise ValidationException("targetRef is required", field="target_ref")

        assignment = await self._role_repo.get_active(actor_id)
        if assignment is None:
            raise AuthorizationException(resource="approval", action="submit")
        outcome = policy.resolve(assignment.role, mutation_type.domain)
        if outcome is PermissionOutcome.EXECUTE:
            raise ValidationException(
                "President actions need no approval; perform them directly",
                field="request_type",
            )
        if outcome is PermissionOutcome.DENY:
            raise AuthorizationException(
                resource=mutation_type.domain.value, action=mutation_type.operation.value
            )
        if mutation_type.operation is not MutationOperation.ADD:
            await self._domain_gateways[mutation_type.domain].require_target(target_ref)

        return await self._ledger.enqueue(
            actor_id,
            mutation_type.tag,
            cleaned,
            justification=justification,
            target_ref=target_ref,
        )

    async def list_requests(self, actor_id: str, scope: str | None = None) -> list[ApprovalRequestResult]:
        if scope == SCOPE_PENDING:
            return await self._ledger.list_pending(actor_id)
        if scope not in (None, "", SCOPE_OWN):
            raise ValidationException("scope must be 'pending' or 'own'", field="scope")
        return await self._ledger.list_own(actor_id)

    async def get(self, actor_id: str, request_id: str) -> ApprovalRequestResult:
        return await self._ledger.get(actor_id, request_id)

    async def resolve(
        self, actor_id: str, request_id: str | None, decision: str | None, note: str | None = None
    ) -> ResolutionOutcome:
        if not request_id:
            raise ValidationException("requestId is required", field="request_id")
        if not decision:
            raise ValidationException("decision is required", field="decision")
        return await self._ledger.resolve(actor_id, request_id, decision, note)

    async def retry_execution(self, actor_id: str, request_id: str) -> ResolutionOutcome:
        return await self._ledger.retry_execution(actor_id, request_id)
