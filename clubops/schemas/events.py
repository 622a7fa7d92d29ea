"""Event API schemas."""

from datetime import datetime

from pydantic import Field

from clubops.schemas.common import CamelModel


class EventGroupRequest(CamelModel):
    name: str | None = None
    capacity: int | None = None
    ticket_count: int | None = None
    capacity_per_ticket: int | None = None
    share_link: str | None = None
    checkin_img: str | None = None


class EventRequest(CamelModel):
    """Body for POST/PUT/DELETE /events. eventId is required for PUT and DELETE."""

    event_id: str | None = None
    title: str | None = None
    description: str | None = None
    type: str | None = None
    status: str | None = None
    registration_link: str | None = None
    groups: list[EventGroupRequest] | None = Field(default=None, max_length=50)


class EventGroupResponse(CamelModel):
    id: str
    name: str
    capacity: int
    claimed: int
    share_link: str | None
    checkin_img: str | None
    ticket_count: int
    capacity_per_ticket: int


class EventResponse(CamelModel):
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
    groups: list[EventGroupResponse] = Field(default_factory=list)


class EventStatisticsResponse(CamelModel):
    event_id: str
    title: str
    status: str
    group_count: int
    total_capacity: int
    total_claimed: int
    registration_count: int
