"""DTOs for inventory items (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class InventoryItemResult:
    """Inventory item read-model."""

    id: str
    name: str
    category: str
    quantity: int
    unit: str
    description: str
    purchase_date: date | None
    price: Decimal | None
    last_modified_by: str | None
    approved: bool
    approval_request_id: str | None
    created_at: datetime
    updated_at: datetime
