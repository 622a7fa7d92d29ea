"""Savepoint boundary inside the request transaction."""

from contextlib import AbstractAsyncContextManager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession


class SqlTransactionScope:
    """ITransactionScope backed by SAVEPOINTs on the request session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Writes inside roll back alone on error; the outer transaction survives."""
        return self.db.begin_nested()
