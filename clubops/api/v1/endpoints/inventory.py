"""Inventory API: list, add, edit, delete (queued for treasurers)."""

from fastapi import APIRouter, Request

from clubops.api.v1.dependencies import CurrentActor, ReadServices, WriteServices
from clubops.api.v1.responses import mutation_response
from clubops.core.limiter import limit_writes
from clubops.schemas import InventoryItemRequest, InventoryItemResponse, dump

router = APIRouter()


@router.get("")
async def list_inventory(
    actor: CurrentActor,
    services: ReadServices,
    category: str | None = None,
    approved: bool | None = None,
):
    items = await services.inventory.list_items(actor, category, approved)
    return {
        "success": True,
        "items": [dump(InventoryItemResponse.model_validate(i)) for i in items],
    }


@router.post("")
@limit_writes
async def add_inventory(
    request: Request,
    body: InventoryItemRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.inventory.add(actor, body.fields_set_payload("item_id"))
    return mutation_response(result, "item", InventoryItemResponse, created=True)


@router.put("")
@limit_writes
async def edit_inventory(
    request: Request,
    body: InventoryItemRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.inventory.edit(
        actor, body.item_id, body.fields_set_payload("item_id")
    )
    return mutation_response(result, "item", InventoryItemResponse)


@router.delete("")
@limit_writes
async def delete_inventory(
    request: Request,
    body: InventoryItemRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    result = await services.inventory.delete(actor, body.item_id)
    return mutation_response(result, "item", InventoryItemResponse)
