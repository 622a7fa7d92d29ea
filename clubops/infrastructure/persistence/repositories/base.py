"""Base repository: generic CRUD shared by the concrete repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clubops.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_model, create, apply_changes and delete.

    Subclasses expose DTOs; ORM instances never leave the repository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_model(self, entity_id: str) -> ModelType | None:
        """Return a single ORM row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new row and reload server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply_changes(self, obj: ModelType, values: dict[str, Any]) -> ModelType:
        """Set column values on an attached row, flush, and reload it."""
        for key, value in values.items():
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete_by_id(self, entity_id: str) -> bool:
        """Delete a row by primary key; False if it did not exist."""
        obj = await self.get_model(entity_id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self.db.flush()
        return True
