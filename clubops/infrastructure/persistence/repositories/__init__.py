"""SQLAlchemy repositories implementing the application repository protocols."""

from clubops.infrastructure.persistence.repositories.approval_request_repo import (
    ApprovalRequestRepository,
)
from clubops.infrastructure.persistence.repositories.base import BaseRepository
from clubops.infrastructure.persistence.repositories.event_repo import EventRepository
from clubops.infrastructure.persistence.repositories.finance_repo import FinanceRepository
from clubops.infrastructure.persistence.repositories.inventory_repo import (
    InventoryRepository,
)
from clubops.infrastructure.persistence.repositories.role_assignment_repo import (
    RoleAssignmentRepository,
)
from clubops.infrastructure.persistence.repositories.transaction import (
    SqlTransactionScope,
)

__all__ = [
    "ApprovalRequestRepository",
    "BaseRepository",
    "EventRepository",
    "FinanceRepository",
    "InventoryRepository",
    "RoleAssignmentRepository",
    "SqlTransactionScope",
]
