"""Approvals API: request history, pending queue, submit, resolve, retry execution."""

from fastapi import APIRouter, Request

from clubops.api.v1.dependencies import CurrentActor, ReadServices, WriteServices
from clubops.api.v1.responses import resolution_response
from clubops.core.limiter import limit_writes
from clubops.schemas import (
    ApprovalRequestResponse,
    ResolveApprovalRequest,
    SubmitApprovalRequest,
    dump,
)

router = APIRouter()


@router.get("")
async def list_approvals(
    actor: CurrentActor,
    services: ReadServices,
    scope: str | None = None,
):
    """scope=pending: the president's review queue (oldest first). Default: caller's own history."""
    requests = await services.approvals.list_requests(actor, scope)
    return {
        "success": True,
        "requests": [dump(ApprovalRequestResponse.model_validate(r)) for r in requests],
    }


@router.get("/{request_id}")
async def get_approval(request_id: str, actor: CurrentActor, services: ReadServices):
    approval = await services.approvals.get(actor, request_id)
    return {"success": True, "request": dump(ApprovalRequestResponse.model_validate(approval))}


@router.post("", status_code=201)
@limit_writes
async def submit_approval(
    request: Request,
    body: SubmitApprovalRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    """Queue a request directly. Presidents are refused: their actions need no approval."""
    approval = await services.approvals.submit(
        actor,
        body.request_type,
        body.payload,
        justification=body.justification,
        target_ref=body.target_ref,
    )
    return {
        "success": True,
        "needsApproval": True,
        "requestId": approval.id,
        "message": "Request submitted for approval",
        "request": dump(ApprovalRequestResponse.model_validate(approval)),
    }


@router.put("")
@limit_writes
async def resolve_approval(
    request: Request,
    body: ResolveApprovalRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    """Approve or reject a pending request (president only). Approval applies the mutation."""
    outcome = await services.approvals.resolve(
        actor, body.request_id, body.resolved_decision, body.note
    )
    return resolution_response(outcome)


@router.post("/{request_id}/execute")
@limit_writes
async def retry_approval_execution(
    request: Request,
    request_id: str,
    actor: CurrentActor,
    services: WriteServices,
):
    """Re-apply an approved request whose mutation failed earlier (president only)."""
    outcome = await services.approvals.retry_execution(actor, request_id)
    return resolution_response(outcome)
