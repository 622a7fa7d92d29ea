"""Event repository: events, groups, tickets and (for cleanup and counts) registrations."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clubops.application.dtos.event import EventGroupResult, EventResult, EventStatistics
from clubops.infrastructure.persistence.models.event import (
    ClubEvent,
    EventGroup,
    EventTicket,
    Registration,
)
from clubops.infrastructure.persistence.repositories.base import BaseRepository
from clubops.shared.utils.datetime import ensure_utc


def _group_to_result(row: EventGroup) -> EventGroupResult:
    return EventGroupResult(
        id=row.id,
        event_id=row.event_id,
        name=row.name,
        capacity=row.capacity,
        claimed=row.claimed,
        share_link=row.share_link,
        checkin_img=row.checkin_img,
        ticket_count=row.ticket_count,
        capacity_per_ticket=row.capacity_per_ticket,
    )


def _event_to_result(row: ClubEvent, groups: list[EventGroup] | None = None) -> EventResult:
    return EventResult(
        id=row.id,
        title=row.title,
        description=row.description or "",
        type=row.type,
        status=row.status,
        registration_link=row.registration_link,
        created_by=row.created_by,
        approved=row.approved,
        approval_request_id=row.approval_request_id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
        groups=[_group_to_result(g) for g in (row.groups if groups is None else groups)],
    )


class EventRepository(BaseRepository[ClubEvent]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ClubEvent)

    async def _load(self, event_id: str) -> ClubEvent | None:
        result = await self.db.execute(
            select(ClubEvent)
            .where(ClubEvent.id == event_id)
            .options(selectinload(ClubEvent.groups))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_events(
        self, status: str | None = None, event_type: str | None = None
    ) -> list[EventResult]:
        stmt = (
            select(ClubEvent)
            .options(selectinload(ClubEvent.groups))
            .order_by(ClubEvent.created_at.desc())
        )
        if status:
            stmt = stmt.where(ClubEvent.status == status)
        if event_type:
            stmt = stmt.where(ClubEvent.type == event_type)
        result = await self.db.execute(stmt)
        return [_event_to_result(r) for r in result.scalars().all()]

    async def get_by_id(self, event_id: str) -> EventResult | None:
        row = await self._load(event_id)
        return _event_to_result(row) if row else None

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> EventResult | None:
        result = await self.db.execute(
            select(ClubEvent.id).where(ClubEvent.approval_request_id == approval_request_id)
        )
        event_id = result.scalars().first()
        return await self.get_by_id(event_id) if event_id else None

    async def create_event(
        self, values: dict[str, Any], groups: list[dict[str, Any]]
    ) -> EventResult:
        """Insert the event, its groups, and tickets 1..n for groups with ticket_count > 1."""
        event = ClubEvent(**values)
        self.db.add(event)
        await self.db.flush()

        for group_values in groups:
            group = EventGroup(event_id=event.id, **group_values)
            self.db.add(group)
            await self.db.flush()
            if group.ticket_count > 1:
                for number in range(1, group.ticket_count + 1):
                    self.db.add(
                        EventTicket(
                            group_id=group.id,
                            ticket_number=number,
                            capacity=group.capacity_per_ticket,
                            qr_code_url=group.checkin_img,
                        )
                    )
        await self.db.flush()

        created = await self._load(event.id)
        return _event_to_result(created)

    async def update_event(
        self, event_id: str, values: dict[str, Any]
    ) -> EventResult | None:
        row = await self.get_model(event_id)
        if row is None:
            return None
        await self.apply_changes(row, values)
        return await self.get_by_id(event_id)

    async def delete_tickets_for_event(self, event_id: str) -> int:
        group_ids = select(EventGroup.id).where(EventGroup.event_id == event_id)
        result = await self.db.execute(
            delete(EventTicket).where(EventTicket.group_id.in_(group_ids))
        )
        return result.rowcount or 0

    async def delete_registrations_for_event(self, event_id: str) -> int:
        result = await self.db.execute(
            delete(Registration).where(Registration.event_id == event_id)
        )
        return result.rowcount or 0

    async def delete_groups_for_event(self, event_id: str) -> int:
        result = await self.db.execute(
            delete(EventGroup).where(EventGroup.event_id == event_id)
        )
        return result.rowcount or 0

    async def delete_event(self, event_id: str) -> bool:
        result = await self.db.execute(delete(ClubEvent).where(ClubEvent.id == event_id))
        return bool(result.rowcount)

    async def get_statistics(self) -> list[EventStatistics]:
        groups = (
            select(
                EventGroup.event_id.label("event_id"),
                func.count(EventGroup.id).label("group_count"),
                func.coalesce(func.sum(EventGroup.capacity), 0).label("total_capacity"),
                func.coalesce(func.sum(EventGroup.claimed), 0).label("total_claimed"),
            )
            .group_by(EventGroup.event_id)
            .subquery()
        )
        registrations = (
            select(
                Registration.event_id.label("event_id"),
                func.count(Registration.id).label("registration_count"),
            )
            .group_by(Registration.event_id)
            .subquery()
        )
        result = await self.db.execute(
            select(
                ClubEvent.id,
                ClubEvent.title,
                ClubEvent.status,
                func.coalesce(groups.c.group_count, 0),
                func.coalesce(groups.c.total_capacity, 0),
                func.coalesce(groups.c.total_claimed, 0),
                func.coalesce(registrations.c.registration_count, 0),
            )
            .outerjoin(groups, groups.c.event_id == ClubEvent.id)
            .outerjoin(registrations, registrations.c.event_id == ClubEvent.id)
            .order_by(ClubEvent.created_at.desc())
        )
        return [
            EventStatistics(
                event_id=event_id,
                title=title,
                status=status,
                group_count=int(group_count),
                total_capacity=int(total_capacity),
                total_claimed=int(total_claimed),
                registration_count=int(registration_count),
            )
            for (
                event_id,
                title,
                status,
                group_count,
                total_capacity,
                total_claimed,
                registration_count,
            ) in result.all()
        ]
