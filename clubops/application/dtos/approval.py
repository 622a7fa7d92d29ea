"""DTOs for the approval ledger and action executor (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from clubops.domain.enums import ApprovalStatus
from clubops.domain.value_objects import MutationType


@dataclass(frozen=True)
class ApprovalRequestResult:
    """Approval request read-model. payload is immutable after creation."""

    id: str
    request_type: str
    requester_id: str
    payload: dict[str, Any]
    status: ApprovalStatus
    created_at: datetime
    justification: str | None = None
    target_ref: str | None = None
    reviewer_id: str | None = None
    reviewer_note: str | None = None
    resolved_at: datetime | None = None
    executed_at: datetime | None = None
    execution_error: str | None = None

    @property
    def mutation_type(self) -> MutationType:
        return MutationType.parse(self.request_type)

    @property
    def request_type_name(self) -> str:
        try:
            return self.mutation_type.display_name
        except ValueError:
            return self.request_type

    @property
    def awaiting_execution(self) -> bool:
        return self.status is ApprovalStatus.APPROVED and self.executed_at is None


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one executor write. entity is the written read-model (None for deletes/no-ops)."""

    mutation_type: MutationType | None
    entity_id: str | None
    entity: Any = None
    applied: bool = True


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of resolving (or re-executing) a request.

    When execution_error is set the request is approved but its mutation was
    not applied; the caller must surface the failure.
    """

    request: ApprovalRequestResult
    execution: ExecutionResult | None = None
    execution_error: str | None = None

    @property
    def executed(self) -> bool:
        return self.execution is not None and self.execution_error is None
