"""InventoryItem repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clubops.application.dtos.inventory import InventoryItemResult
from clubops.infrastructure.persistence.models.inventory_item import InventoryItem
from clubops.infrastructure.persistence.repositories.base import BaseRepository
from clubops.shared.utils.datetime import ensure_utc


def _item_to_result(row: InventoryItem) -> InventoryItemResult:
    return InventoryItemResult(
        id=row.id,
        name=row.name,
        category=row.category,
        quantity=row.quantity,
        unit=row.unit,
        description=row.description or "",
        purchase_date=row.purchase_date,
        price=Decimal(row.price) if row.price is not None else None,
        last_modified_by=row.last_modified_by,
        approved=row.approved,
        approval_request_id=row.approval_request_id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class InventoryRepository(BaseRepository[InventoryItem]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, InventoryItem)

    async def list_items(
        self, category: str | None = None, approved: bool | None = None
    ) -> list[InventoryItemResult]:
        stmt = select(InventoryItem).order_by(InventoryItem.created_at.desc())
        if category:
            stmt = stmt.where(InventoryItem.category == category)
        if approved is not None:
            stmt = stmt.where(InventoryItem.approved.is_(approved))
        result = await self.db.execute(stmt)
        return [_item_to_result(r) for r in result.scalars().all()]

    async def get_by_id(self, item_id: str) -> InventoryItemResult | None:
        row = await self.get_model(item_id)
        return _item_to_result(row) if row else None

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> InventoryItemResult | None:
        result = await self.db.execute(
            select(InventoryItem).where(
                InventoryItem.approval_request_id == approval_request_id
            )
        )
        row = result.scalars().first()
        return _item_to_result(row) if row else None

    async def create_item(self, values: dict[str, Any]) -> InventoryItemResult:
        return _item_to_result(await self.create(InventoryItem(**values)))

    async def update_item(
        self, item_id: str, values: dict[str, Any]
    ) -> InventoryItemResult | None:
        row = await self.get_model(item_id)
        if row is None:
            return None
        return _item_to_result(await self.apply_changes(row, values))

    async def delete_item(self, item_id: str) -> bool:
        return await self.delete_by_id(item_id)
