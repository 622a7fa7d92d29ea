"""Approval API schemas."""

from datetime import datetime
from typing import Any

from clubops.domain.enums import ApprovalStatus
from clubops.schemas.common import CamelModel


class SubmitApprovalRequest(CamelModel):
    """Body for POST /approvals."""

    request_type: str
    payload: dict[str, Any] | None = None
    justification: str | None = None
    target_ref: str | None = None


class ResolveApprovalRequest(CamelModel):
    """Body for PUT /approvals. 'action' (approve/reject) is accepted in place of decision."""

    request_id: str | None = None
    decision: str | None = None
    action: str | None = None
    note: str | None = None

    @property
    def resolved_decision(self) -> str | None:
        return self.decision or self.action


class ApprovalRequestResponse(CamelModel):
    id: str
    request_type: str
    request_type_name: str
    requester_id: str
    payload: dict[str, Any]
    justification: str | None
    target_ref: str | None
    status: ApprovalStatus
    reviewer_id: str | None
    reviewer_note: str | None
    created_at: datetime
    resolved_at: datetime | None
    executed_at: datetime | None
    execution_error: str | None
