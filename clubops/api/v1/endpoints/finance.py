"""Finance API: list/summary, add, edit, delete (queued for treasurers)."""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from clubops.api.v1.dependencies import CurrentActor, ReadServices, WriteServices
from clubops.api.v1.responses import mutation_response
from clubops.core.limiter import limit_writes
from clubops.schemas import (
    FinanceRecordRequest,
    FinanceRecordResponse,
    FinanceSummaryResponse,
    dump,
)

router = APIRouter()


@router.get("")
async def list_finance(
    actor: CurrentActor,
    services: ReadServices,
    view: str | None = None,
    record_type: Annotated[str | None, Query(alias="type")] = None,
    approved: bool | None = None,
):
    """List records (newest first) or, with view=summary, income/expense/balance."""
    if view == "summary":
        summary = await services.finance.summary(actor)
        return {
            "success": True,
            "summary": dump(
                FinanceSummaryResponse(
                    income=summary.income,
                    expense=summary.expense,
                    balance=summary.balance,
                )
            ),
        }
    records = await services.finance.list_records(actor, record_type, approved)
    return {
        "success": True,
        "records": [dump(FinanceRecordResponse.model_validate(r)) for r in records],
    }


@router.post("")
@limit_writes
async def add_finance(
    request: Request,
    body: FinanceRecordRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.finance.add(actor, body.fields_set_payload("record_id"))
    return mutation_response(result, "record", FinanceRecordResponse, created=True)


@router.put("")
@limit_writes
async def edit_finance(
    request: Request,
    body: FinanceRecordRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.finance.edit(
        actor, body.record_id, body.fields_set_payload("record_id")
    )
    return mutation_response(result, "record", FinanceRecordResponse)


@router.delete("")
@limit_writes
async def delete_finance(
    request: Request,
    body: FinanceRecordRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.finance.delete(actor, body.record_id)
    return mutation_response(result, "record", FinanceRecordResponse)
