"""Inventory API schemas."""

from datetime import date, datetime

from clubops.schemas.common import CamelModel


class InventoryItemRequest(CamelModel):
    """Body for POST/PUT/DELETE /inventory. itemId is required for PUT and DELETE."""

    item_id: str | None = None
    name: str | None = None
    category: str | None = None
    quantity: int | None = None
    unit: str | None = None
    description: str | None = None
    purchase_date: str | None = None
    price: int | float | None = None


class InventoryItemResponse(CamelModel):
    id: str
    name: str
    category: str
    quantity: int
    unit: str
    description: str
    purchase_date: date | None
    price: float | None
    last_modified_by: str | None
    approved: bool
    approval_request_id: str | None
    created_at: datetime
    updated_at: datetime
