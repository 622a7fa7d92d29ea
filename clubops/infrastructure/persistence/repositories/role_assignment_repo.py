"""RoleAssignment repository: the role directory store."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clubops.application.dtos.role_assignment import RoleAssignmentResult
from clubops.domain.enums import RoleCode
from clubops.domain.exceptions import RoleAlreadyAssignedException
from clubops.infrastructure.persistence.models.role_assignment import RoleAssignment
from clubops.infrastructure.persistence.repositories.base import BaseRepository
from clubops.shared.utils.datetime import ensure_utc, utc_now


def _assignment_to_result(row: RoleAssignment) -> RoleAssignmentResult:
    return RoleAssignmentResult(
        id=row.id,
        actor_id=row.actor_id,
        role=RoleCode(row.role),
        is_active=row.is_active,
        assigned_by=row.assigned_by,
        assigned_at=ensure_utc(row.assigned_at),
        deactivated_at=ensure_utc(row.deactivated_at),
        deactivated_by=row.deactivated_by,
    )


class RoleAssignmentRepository(BaseRepository[RoleAssignment]):
    """Role assignment rows; deactivation flips is_active, nothing is deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, RoleAssignment)

    async def _get_active_model(self, actor_id: str) -> RoleAssignment | None:
        result = await self.db.execute(
            select(RoleAssignment).where(
                RoleAssignment.actor_id == actor_id,
                RoleAssignment.is_active.is_(True),
            )
        )
        return result.scalar_one_or_none()

    async def get_active(self, actor_id: str) -> RoleAssignmentResult | None:
        row = await self._get_active_model(actor_id)
        return _assignment_to_result(row) if row else None

    async def list_active(self) -> list[RoleAssignmentResult]:
        result = await self.db.execute(
            select(RoleAssignment)
            .where(RoleAssignment.is_active.is_(True))
            .order_by(RoleAssignment.assigned_at.desc())
        )
        return [_assignment_to_result(r) for r in result.scalars().all()]

    async def create_assignment(
        self, actor_id: str, role: RoleCode, assigned_by: str | None
    ) -> RoleAssignmentResult:
        """Insert an active assignment.

        The partial unique index on actor_id backs up the service-level check
        when two appointments race.
        """
        row = RoleAssignment(
            actor_id=actor_id,
            role=RoleCode(role).value,
            is_active=True,
            assigned_by=assigned_by,
        )
        try:
            async with self.db.begin_nested():
                await self.create(row)
        except IntegrityError:
            current = await self._get_active_model(actor_id)
            raise RoleAlreadyAssignedException(
                actor_id, current.role if current else RoleCode(role).value
            ) from None
        return _assignment_to_result(row)

    async def deactivate(
        self, assignment_id: str, deactivated_by: str | None
    ) -> RoleAssignmentResult | None:
        row = await self.get_model(assignment_id)
        if row is None or not row.is_active:
            return None
        await self.apply_changes(
            row,
            {
                "is_active": False,
                "deactivated_at": utc_now(),
                "deactivated_by": deactivated_by,
            },
        )
        return _assignment_to_result(row)
