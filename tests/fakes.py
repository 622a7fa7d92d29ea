"""In-memory implementations of the repository protocols for unit and API tests."""

from __future__ import annotations

import contextlib
import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from clubops.api.v1.dependencies.services import ClubServices, build_services
from clubops.application.dtos.approval import ApprovalRequestResult
from clubops.application.dtos.event import EventGroupResult, EventResult, EventStatistics
from clubops.application.dtos.finance import FinanceRecordResult, FinanceSummary
from clubops.application.dtos.inventory import InventoryItemResult
from clubops.application.dtos.role_assignment import RoleAssignmentResult
from clubops.domain.enums import ApprovalStatus, RoleCode
from clubops.domain.exceptions import RoleAlreadyAssignedException

_EPOCH = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class _Clock:
    """Strictly increasing timestamps so ordering assertions are deterministic."""

    def __init__(self) -> None:
        self._ticks = itertools.count()

    def now(self) -> datetime:
        return _EPOCH + timedelta(seconds=next(self._ticks))


class _Ids:
    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._seq = itertools.count(1)

    def next(self) -> str:
        return f"{self._prefix}-{next(self._seq)}"


class FakeRoleAssignmentRepository:
    def __init__(self, clock: _Clock) -> None:
        self._clock = clock
        self._ids = _Ids("ra")
        self.rows: list[RoleAssignmentResult] = []

    def seed(self, actor_id: str, role: RoleCode) -> RoleAssignmentResult:
        row = RoleAssignmentResult(
            id=self._ids.next(),
            actor_id=actor_id,
            role=role,
            is_active=True,
            assigned_by=None,
            assigned_at=self._clock.now(),
        )
        self.rows.append(row)
        return row

    async def get_active(self, actor_id: str) -> RoleAssignmentResult | None:
        return next((r for r in self.rows if r.actor_id == actor_id and r.is_active), None)

    async def list_active(self) -> list[RoleAssignmentResult]:
        return sorted(
            (r for r in self.rows if r.is_active), key=lambda r: r.assigned_at, reverse=True
        )

    async def create_assignment(
        self, actor_id: str, role: RoleCode, assigned_by: str | None
    ) -> RoleAssignmentResult:
        current = await self.get_active(actor_id)
        if current is not None:
            raise RoleAlreadyAssignedException(actor_id, current.role.value)
        row = RoleAssignmentResult(
            id=self._ids.next(),
            actor_id=actor_id,
            role=RoleCode(role),
            is_active=True,
            assigned_by=assigned_by,
            assigned_at=self._clock.now(),
        )
        self.rows.append(row)
        return row

    async def deactivate(
        self, assignment_id: str, deactivated_by: str | None
    ) -> RoleAssignmentResult | None:
        for i, row in enumerate(self.rows):
            if row.id == assignment_id and row.is_active:
                self.rows[i] = replace(
                    row,
                    is_active=False,
                    deactivated_at=self._clock.now(),
                    deactivated_by=deactivated_by,
                )
                return self.rows[i]
        return None


class FakeApprovalRequestRepository:
    def __init__(self, clock: _Clock) -> None:
        self._clock = clock
        self._ids = _Ids("req")
        self.rows: dict[str, ApprovalRequestResult] = {}
        self.locked: list[str] = []

    async def create_request(
        self,
        request_type: str,
        requester_id: str,
        payload: dict[str, Any],
        justification: str | None = None,
        target_ref: str | None = None,
    ) -> ApprovalRequestResult:
        row = ApprovalRequestResult(
            id=self._ids.next(),
            request_type=request_type,
            requester_id=requester_id,
            payload=dict(payload),
            status=ApprovalStatus.PENDING,
            created_at=self._clock.now(),
            justification=justification,
            target_ref=target_ref,
        )
        self.rows[row.id] = row
        return row

    async def get_by_id(self, request_id: str) -> ApprovalRequestResult | None:
        return self.rows.get(request_id)

    async def get_for_update(self, request_id: str) -> ApprovalRequestResult | None:
        self.locked.append(request_id)
        return self.rows.get(request_id)

    async def list_by_status(self, status: ApprovalStatus) -> list[ApprovalRequestResult]:
        return sorted(
            (r for r in self.rows.values() if r.status is status), key=lambda r: r.created_at
        )

    async def list_by_requester(self, requester_id: str) -> list[ApprovalRequestResult]:
        return sorted(
            (r for r in self.rows.values() if r.requester_id == requester_id),
            key=lambda r: r.created_at,
            reverse=True,
        )

    def _update(self, request_id: str, **changes: Any) -> ApprovalRequestResult:
        self.rows[request_id] = replace(self.rows[request_id], **changes)
        return self.rows[request_id]

    async def mark_resolved(
        self,
        request_id: str,
        status: ApprovalStatus,
        reviewer_id: str,
        reviewer_note: str | None,
    ) -> ApprovalRequestResult:
        return self._update(
            request_id,
            status=status,
            reviewer_id=reviewer_id,
            reviewer_note=reviewer_note,
            resolved_at=self._clock.now(),
        )

    async def mark_executed(self, request_id: str) -> ApprovalRequestResult:
        return self._update(request_id, executed_at=self._clock.now(), execution_error=None)

    async def record_execution_error(
        self, request_id: str, error: str
    ) -> ApprovalRequestResult:
        return self._update(request_id, execution_error=error[:2000])


class FakeFinanceRepository:
    def __init__(self, clock: _Clock) -> None:
        self._clock = clock
        self._ids = _Ids("fin")
        self.rows: dict[str, FinanceRecordResult] = {}
        self.unavailable = False

    def _check(self) -> None:
        if self.unavailable:
            raise RuntimeError("finance store unavailable")

    async def list_records(
        self, record_type: str | None = None, approved: bool | None = None
    ) -> list[FinanceRecordResult]:
        rows = [
            r
            for r in self.rows.values()
            if (record_type is None or r.type == record_type)
            and (approved is None or r.approved is approved)
        ]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    async def get_by_id(self, record_id: str) -> FinanceRecordResult | None:
        return self.rows.get(record_id)

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> FinanceRecordResult | None:
        return next(
            (r for r in self.rows.values() if r.approval_request_id == approval_request_id),
            None,
        )

    async def create_record(self, values: dict[str, Any]) -> FinanceRecordResult:
        self._check()
        now = self._clock.now()
        row = FinanceRecordResult(
            id=self._ids.next(),
            type=values["type"],
            amount=Decimal(values["amount"]),
            description=values["description"],
            notes=values.get("notes", ""),
            recorded_by=values.get("recorded_by"),
            approved=values.get("approved", False),
            approval_request_id=values.get("approval_request_id"),
            created_at=now,
            updated_at=now,
        )
        self.rows[row.id] = row
        return row

    async def update_record(
        self, record_id: str, values: dict[str, Any]
    ) -> FinanceRecordResult | None:
        self._check()
        if record_id not in self.rows:
            return None
        self.rows[record_id] = replace(
            self.rows[record_id], **values, updated_at=self._clock.now()
        )
        return self.rows[record_id]

    async def delete_record(self, record_id: str) -> bool:
        self._check()
        return self.rows.pop(record_id, None) is not None

    async def get_summary(self) -> FinanceSummary:
        income = sum(
            (r.amount for r in self.rows.values() if r.approved and r.type == "income"),
            Decimal("0"),
        )
        expense = sum(
            (r.amount for r in self.rows.values() if r.approved and r.type == "expense"),
            Decimal("0"),
        )
        return FinanceSummary(income=income, expense=expense)


class FakeInventoryRepository:
    def __init__(self, clock: _Clock) -> None:
        self._clock = clock
        self._ids = _Ids("inv")
        self.rows: dict[str, InventoryItemResult] = {}

    async def list_items(
        self, category: str | None = None, approved: bool | None = None
    ) -> list[InventoryItemResult]:
        rows = [
            r
            for r in self.rows.values()
            if (category is None or r.category == category)
            and (approved is None or r.approved is approved)
        ]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    async def get_by_id(self, item_id: str) -> InventoryItemResult | None:
        return self.rows.get(item_id)

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> InventoryItemResult | None:
        return next(
            (r for r in self.rows.values() if r.approval_request_id == approval_request_id),
            None,
        )

    async def create_item(self, values: dict[str, Any]) -> InventoryItemResult:
        now = self._clock.now()
        row = InventoryItemResult(
            id=self._ids.next(),
            name=values["name"],
            category=values["category"],
            quantity=values.get("quantity", 0),
            unit=values["unit"],
            description=values.get("description", ""),
            purchase_date=values.get("purchase_date"),
            price=values.get("price"),
            last_modified_by=values.get("last_modified_by"),
            approved=values.get("approved", False),
            approval_request_id=values.get("approval_request_id"),
            created_at=now,
            updated_at=now,
        )
        self.rows[row.id] = row
        return row

    async def update_item(
        self, item_id: str, values: dict[str, Any]
    ) -> InventoryItemResult | None:
        if item_id not in self.rows:
            return None
        self.rows[item_id] = replace(self.rows[item_id], **values, updated_at=self._clock.now())
        return self.rows[item_id]

    async def delete_item(self, item_id: str) -> bool:
        return self.rows.pop(item_id, None) is not None


class FakeEventRepository:
    """Events with groups, numbered tickets and registrations.

    calls records every delete in order so tests can check the cascade sequence.
    """

    def __init__(self, clock: _Clock) -> None:
        self._clock = clock
        self._ids = _Ids("evt")
        self._group_ids = _Ids("grp")
        self.rows: dict[str, EventResult] = {}
        self.tickets: list[tuple[str, int]] = []
        self.registrations: list[str] = []
        self.calls: list[str] = []

    def register(self, event_id: str, count: int = 1) -> None:
        self.registrations.extend([event_id] * count)

    async def list_events(
        self, status: str | None = None, event_type: str | None = None
    ) -> list[EventResult]:
        rows = [
            r
            for r in self.rows.values()
            if (status is None or r.status == status)
            and (event_type is None or r.type == event_type)
        ]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    async def get_by_id(self, event_id: str) -> EventResult | None:
        return self.rows.get(event_id)

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> EventResult | None:
        return next(
            (r for r in self.rows.values() if r.approval_request_id == approval_request_id),
            None,
        )

    async def create_event(
        self, values: dict[str, Any], groups: list[dict[str, Any]]
    ) -> EventResult:
        now = self._clock.now()
        event_id = self._ids.next()
        group_rows = []
        for g in groups:
            group = EventGroupResult(
                id=self._group_ids.next(),
                event_id=event_id,
                name=g["name"],
                capacity=g["capacity"],
                claimed=0,
                share_link=g.get("share_link"),
                checkin_img=g.get("checkin_img"),
                ticket_count=g["ticket_count"],
                capacity_per_ticket=g["capacity_per_ticket"],
            )
            group_rows.append(group)
            if group.ticket_count > 1:
                self.tickets.extend((group.id, n) for n in range(1, group.ticket_count + 1))
        row = EventResult(
            id=event_id,
            title=values["title"],
            description=values.get("description", ""),
            type=values["type"],
            status=values.get("status", "open"),
            registration_link=values.get("registration_link"),
            created_by=values.get("created_by"),
            approved=values.get("approved", False),
            approval_request_id=values.get("approval_request_id"),
            created_at=now,
            updated_at=now,
            groups=group_rows,
        )
        self.rows[row.id] = row
        return row

    async def update_event(self, event_id: str, values: dict[str, Any]) -> EventResult | None:
        if event_id not in self.rows:
            return None
        self.rows[event_id] = replace(self.rows[event_id], **values, updated_at=self._clock.now())
        return self.rows[event_id]

    def _group_ids_of(self, event_id: str) -> set[str]:
        event = self.rows.get(event_id)
        return {g.id for g in event.groups} if event else set()

    async def delete_tickets_for_event(self, event_id: str) -> int:
        self.calls.append("tickets")
        group_ids = self._group_ids_of(event_id)
        before = len(self.tickets)
        self.tickets = [t for t in self.tickets if t[0] not in group_ids]
        return before - len(self.tickets)

    async def delete_registrations_for_event(self, event_id: str) -> int:
        self.calls.append("registrations")
        before = len(self.registrations)
        self.registrations = [e for e in self.registrations if e != event_id]
        return before - len(self.registrations)

    async def delete_groups_for_event(self, event_id: str) -> int:
        self.calls.append("groups")
        if self.tickets and any(t[0] in self._group_ids_of(event_id) for t in self.tickets):
            raise RuntimeError("tickets still reference groups")
        event = self.rows.get(event_id)
        if event is None:
            return 0
        self.rows[event_id] = replace(event, groups=[])
        return len(event.groups)

    async def delete_event(self, event_id: str) -> bool:
        self.calls.append("event")
        event = self.rows.get(event_id)
        if event is not None and (event.groups or event_id in self.registrations):
            raise RuntimeError("event still referenced")
        return self.rows.pop(event_id, None) is not None

    async def get_statistics(self) -> list[EventStatistics]:
        return [
            EventStatistics(
                event_id=e.id,
                title=e.title,
                status=e.status,
                group_count=len(e.groups),
                total_capacity=sum(g.capacity for g in e.groups),
                total_claimed=sum(g.claimed for g in e.groups),
                registration_count=self.registrations.count(e.id),
            )
            for e in sorted(self.rows.values(), key=lambda r: r.created_at, reverse=True)
        ]


class FakeTransactionScope:
    """Counts savepoints; writes are not rolled back."""

    def __init__(self) -> None:
        self.savepoints = 0

    @contextlib.asynccontextmanager
    async def savepoint(self):
        self.savepoints += 1
        yield self


@dataclass
class FakeStore:
    """One in-memory club: every repository plus a way to wire the services over them."""

    clock: _Clock = field(default_factory=_Clock)
    roles: FakeRoleAssignmentRepository = field(init=False)
    approvals: FakeApprovalRequestRepository = field(init=False)
    finance: FakeFinanceRepository = field(init=False)
    inventory: FakeInventoryRepository = field(init=False)
    events: FakeEventRepository = field(init=False)
    transaction: FakeTransactionScope = field(default_factory=FakeTransactionScope)

    def __post_init__(self) -> None:
        self.roles = FakeRoleAssignmentRepository(self.clock)
        self.approvals = FakeApprovalRequestRepository(self.clock)
        self.finance = FakeFinanceRepository(self.clock)
        self.inventory = FakeInventoryRepository(self.clock)
        self.events = FakeEventRepository(self.clock)

    def services(self) -> ClubServices:
        return build_services(
            role_repo=self.roles,
            approval_repo=self.approvals,
            finance_repo=self.finance,
            inventory_repo=self.inventory,
            event_repo=self.events,
            transaction=self.transaction,
        )


PRESIDENT = "actor-president"
TREASURER = "actor-treasurer"
VICE_PRESIDENT = "actor-vp"
ACTIVITY_DIRECTOR = "actor-ad"
ADVISOR = "actor-advisor"
OUTSIDER = "actor-outsider"


def seeded_store() -> FakeStore:
    """A club with one holder of every role and one actor without a role."""
    store = FakeStore()
    store.roles.seed(PRESIDENT, RoleCode.PRESIDENT)
    store.roles.seed(TREASURER, RoleCode.TREASURER)
    store.roles.seed(VICE_PRESIDENT, RoleCode.VICE_PRESIDENT)
    store.roles.seed(ACTIVITY_DIRECTOR, RoleCode.ACTIVITY_DIRECTOR)
    store.roles.seed(ADVISOR, RoleCode.ADVISOR)
    return store
