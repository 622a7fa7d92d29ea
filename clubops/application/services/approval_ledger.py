"""Approval ledger: durable queue of deferred mutations and its state machine.

pending -> approved | rejected, exactly once, by the top role holder only.
The ledger never inspects payloads; gateways validate before enqueue and the
action executor interprets them on acceptance.
"""

from __future__ import annotations

import contextlib
from typing import Any

from clubops.application.dtos.approval import ApprovalRequestResult, ResolutionOutcome
from clubops.application.interfaces.repositories import (
    IApprovalRequestRepository,
    IRoleAssignmentRepository,
    ITransactionScope,
)
from clubops.application.services.action_executor import ActionExecutor
from clubops.domain.enums import ApprovalStatus, Decision
from clubops.domain.exceptions import (
    AlreadyExecutedException,
    AlreadyResolvedException,
    AuthorizationException,
    InvalidRequestTypeException,
    ResourceNotFoundException,
    ValidationException,
)
from clubops.domain.policy import is_top_role
from clubops.domain.value_objects import MutationType
from clubops.shared.telemetry.logging import get_logger
from clubops.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


class ApprovalLedger:
    """Create, list and resolve approval requests."""

    def __init__(
        self,
        approval_repo: IApprovalRequestRepository,
        role_repo: IRoleAssignmentRepository,
        executor: ActionExecutor,
        transaction: ITransactionScope | None = None,
    ) -> None:
        self._approval_repo = approval_repo
        self._role_repo = role_repo
        self._executor = executor
        self._transaction = transaction

    async def _role_of(self, actor_id: str) -> str | None:
        assignment = await self._role_repo.get_active(actor_id)
        return assignment.role if assignment else None

    async def _require_top_role(self, actor_id: str, action: str) -> None:
        if not is_top_role(await self._role_of(actor_id)):
            raise AuthorizationException(resource="approval", action=action)

    def _savepoint(self) -> contextlib.AbstractAsyncContextManager[Any]:
        if self._transaction is None:
            return contextlib.nullcontext()
        return self._transaction.savepoint()

    @traced("approval_ledger.enqueue")
    async def enqueue(
        self,
        requester_id: str,
        request_type: str,
        payload: dict[str, Any],
        justification: str | None = None,
        target_ref: str | None = None,
    ) -> ApprovalRequestResult:
        """Persist a pending request.

        Raises:
            InvalidRequestTypeException: request_type is not a queueable tag.
        """
        try:
            mutation_type = MutationType.parse(request_type)
        except ValueError:
            raise InvalidRequestTypeException(request_type) from None
        if not mutation_type.is_queueable:
            raise InvalidRequestTypeException(request_type)

        request = await self._approval_repo.create_request(
            request_type=mutation_type.tag,
            requester_id=requester_id,
            payload=payload,
            justification=justification,
            target_ref=target_ref,
        )
        logger.info(
            "Approval request %s queued: type=%s requester=%s",
            request.id,
            request.request_type,
            requester_id,
        )
        return request

    async def list_pending(self, actor_id: str) -> list[ApprovalRequestResult]:
        """Pending queue, oldest first. Top role only."""
        await self._require_top_role(actor_id, "list")
        return await self._approval_repo.list_by_status(ApprovalStatus.PENDING)

    async def list_own(self, actor_id: str) -> list[ApprovalRequestResult]:
        """The caller's own request history, newest first."""
        return await self._approval_repo.list_by_requester(actor_id)

    async def get(self, actor_id: str, request_id: str) -> ApprovalRequestResult:
        """One request, visible to its requester and the top role holder.

        Other callers get NotFound so request ids do not leak.
        """
        request = await self._approval_repo.get_by_id(request_id)
        if request is None:
            raise ResourceNotFoundException("approval_request", request_id)
        if request.requester_id != actor_id and not is_top_role(
            await self._role_of(actor_id)
        ):
            raise ResourceNotFoundException("approval_request", request_id)
        return request

    @traced("approval_ledger.resolve")
    async def resolve(
        self,
        reviewer_id: str,
        request_id: str,
        decision: str | Decision,
        note: str | None = None,
    ) -> ResolutionOutcome:
        """Approve or reject a pending request; approval replays the mutation.

        An executor failure does not undo the approval: the outcome carries
        execution_error and the request stays approved with executed_at unset,
        ready for retry_execution.

        Raises:
            AuthorizationException: Reviewer does not hold the top role.
            ValidationException: Decision is not approved/rejected.
            ResourceNotFoundException: No such request.
            AlreadyResolvedException: Request is not pending.
        """
        await self._require_top_role(reviewer_id, "resolve")
        request = await self._approval_repo.get_for_update(request_id)
        if request is None:
            raise ResourceNotFoundException("approval_request", request_id)
        if request.status is not ApprovalStatus.PENDING:
            raise AlreadyResolvedException(request_id, request.status.value)

        try:
            parsed = decision if isinstance(decision, Decision) else Decision.parse(decision)
        except ValueError:
            raise ValidationException(
                "decision must be 'approved' or 'rejected'", field="decision"
            ) from None

        resolved = await self._approval_repo.mark_resolved(
            request_id,
            status=parsed.resulting_status,
            reviewer_id=reviewer_id,
            reviewer_note=note,
        )
        logger.info(
            "Approval request %s %s: type=%s reviewer=%s",
            request_id,
            resolved.status.value,
            resolved.request_type,
            reviewer_id,
        )
        add_span_attributes(
            request_type=resolved.request_type, status=resolved.status.value
        )
        if parsed is Decision.REJECTED:
            return ResolutionOutcome(request=resolved)
        return await self._execute(resolved)

    @traced("approval_ledger.retry_execution")
    async def retry_execution(
        self, reviewer_id: str, request_id: str
    ) -> ResolutionOutcome:
        """Re-apply an approved request whose mutation never landed.

        Raises:
            AuthorizationException: Reviewer does not hold the top role.
            ResourceNotFoundException: No such request.
            AlreadyExecutedException: Request is not approved-and-unapplied.
        """
        await self._require_top_role(reviewer_id, "execute")
        request = await self._approval_repo.get_for_update(request_id)
        if request is None:
            raise ResourceNotFoundException("approval_request", request_id)
        if not request.awaiting_execution:
            raise AlreadyExecutedException(request_id, request.status.value)
        logger.info("Retrying execution of approval request %s", request_id)
        return await self._execute(request)

    async def _execute(self, request: ApprovalRequestResult) -> ResolutionOutcome:
        try:
            async with self._savepoint():
                execution = await self._executor.apply(
                    request.request_type,
                    request.payload,
                    target_ref=request.target_ref,
                    actor_id=request.requester_id,
                    approval_request_id=request.id,
                )
        except Exception as e:
            logger.exception(
                "Approved request %s (%s) failed to apply",
                request.id,
                request.request_type,
            )
            failed = await self._approval_repo.record_execution_error(request.id, str(e))
            return ResolutionOutcome(request=failed, execution_error=str(e))

        if execution.mutation_type is None:
            return ResolutionOutcome(request=request, execution=execution)
        executed = await self._approval_repo.mark_executed(request.id)
        return ResolutionOutcome(request=executed, execution=execution)
