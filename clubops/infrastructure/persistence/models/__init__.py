"""Persistence models: ORM entities and mixins."""

from clubops.infrastructure.persistence.models.approval_request import ApprovalRequest
from clubops.infrastructure.persistence.models.event import (
    ClubEvent,
    EventGroup,
    EventTicket,
    Registration,
)
from clubops.infrastructure.persistence.models.finance_record import FinanceRecord
from clubops.infrastructure.persistence.models.inventory_item import InventoryItem
from clubops.infrastructure.persistence.models.mixins import (
    ApprovalStampMixin,
    CuidMixin,
    GatedModel,
    TimestampMixin,
)
from clubops.infrastructure.persistence.models.role_assignment import RoleAssignment

__all__ = [
    "ApprovalRequest",
    "ApprovalStampMixin",
    "ClubEvent",
    "CuidMixin",
    "EventGroup",
    "EventTicket",
    "FinanceRecord",
    "GatedModel",
    "InventoryItem",
    "Registration",
    "RoleAssignment",
    "TimestampMixin",
]
