"""Events API: list/statistics, add, edit, delete (queued for vice president and activity director)."""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from clubops.api.v1.dependencies import CurrentActor, ReadServices, WriteServices
from clubops.api.v1.responses import mutation_response
from clubops.core.limiter import limit_writes
from clubops.schemas import EventRequest, EventResponse, EventStatisticsResponse, dump

router = APIRouter()


@router.get("")
async def list_events(
    actor: CurrentActor,
    services: ReadServices,
    view: str | None = None,
    status: str | None = None,
    event_type: Annotated[str | None, Query(alias="type")] = None,
):
    """List events with groups, or with view=statistics per-event capacity and registrations."""
    if view == "statistics":
        stats = await services.events.statistics(actor)
        return {
            "success": True,
            "statistics": [dump(EventStatisticsResponse.model_validate(s)) for s in stats],
        }
    events = await services.events.list_events(actor, status, event_type)
    return {
        "success": True,
        "events": [dump(EventResponse.model_validate(e)) for e in events],
    }


@router.post("")
@limit_writes
async def add_event(
    request: Request,
    body: EventRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.events.add(actor, body.fields_set_payload("event_id"))
    return mutation_response(result, "event", EventResponse, created=True)


@router.put("")
@limit_writes
async def edit_event(
    request: Request,
    body: EventRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.events.edit(
        actor, body.event_id, body.fields_set_payload("event_id")
    )
    return mutation_response(result, "event", EventResponse)


@router.delete("")
@limit_writes
async def delete_event(
    request: Request,
    body: EventRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.events.delete(actor, body.event_id)
    return mutation_response(result, "event", EventResponse)
