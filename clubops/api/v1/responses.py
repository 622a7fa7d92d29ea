"""Envelope builders shared by the endpoint modules."""

from typing import Any

from fastapi.responses import JSONResponse

from clubops.application.dtos.approval import ResolutionOutcome
from clubops.application.use_cases.gateways import GatewayResult
from clubops.schemas import ApprovalRequestResponse, CamelModel, dump, queued_response


def mutation_response(
    result: GatewayResult,
    key: str,
    schema: type[CamelModel],
    *,
    created: bool = False,
) -> JSONResponse:
    """202 with the request id when queued; 200/201 with the written entity otherwise."""
    if result.needs_approval:
        return JSONResponse(
            status_code=202, content=queued_response(result.request.id, result.message)
        )
    body: dict[str, Any] = {
        "success": True,
        "needsApproval": False,
        "message": result.message,
    }
    if result.entity is not None:
        body[key] = dump(schema.model_validate(result.entity))
    else:
        body["id"] = result.entity_id
    return JSONResponse(status_code=201 if created else 200, content=body)


def resolution_response(outcome: ResolutionOutcome) -> JSONResponse:
    """Envelope for resolve/retry.

    An approved request whose mutation failed is reported as 500
    EXECUTION_FAILED; the approval itself has been recorded.
    """
    request = outcome.request
    if outcome.execution_error is not None:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "EXECUTION_FAILED",
                "requestId": request.id,
                "status": request.status.value,
                "message": (
                    f"Request approved but '{request.request_type_name}' could not be applied: "
                    f"{outcome.execution_error}. Retry with POST /approvals/{request.id}/execute."
                ),
            },
        )
    message = (
        f"Request {request.status.value}: {request.request_type_name}"
        if outcome.executed or outcome.execution is None
        else f"Request {request.status.value}; nothing to apply for '{request.request_type}'"
    )
    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "requestId": request.id,
            "status": request.status.value,
            "requestTypeName": request.request_type_name,
            "executed": outcome.executed,
            "entityId": outcome.execution.entity_id if outcome.execution else None,
            "request": dump(ApprovalRequestResponse.model_validate(request)),
            "message": message,
        },
    )
