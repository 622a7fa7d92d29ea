"""DTOs for club events and their groups (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class EventGroupResult:
    """Registration group of an event. claimed is maintained by the registration counter."""

    id: str
    event_id: str
    name: str
    capacity: int
    claimed: int
    share_link: str | None
    checkin_img: str | None
    ticket_count: int
    capacity_per_ticket: int


@dataclass(frozen=True)
class EventResult:
    """Event read-model with its groups."""

    id: str
    title: str
    description: str
    type: str
    status: str
    registration_link: str | None
    created_by: str | None
    approved: bool
    approval_request_id: str | None
    created_at: datetime
    updated_at: datetime
    groups: list[EventGroupResult] = field(default_factory=list)


@dataclass(frozen=True)
class EventStatistics:
    """Per-event capacity and registration counts."""

    event_id: str
    title: str
    status: str
    group_count: int
    total_capacity: int
    total_claimed: int
    registration_count: int
