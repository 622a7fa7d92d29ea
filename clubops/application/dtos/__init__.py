"""Application DTOs (no ORM dependency)."""

from clubops.application.dtos.approval import (
    ApprovalRequestResult,
    ExecutionResult,
    ResolutionOutcome,
)
from clubops.application.dtos.event import EventGroupResult, EventResult, EventStatistics
from clubops.application.dtos.finance import FinanceRecordResult, FinanceSummary
from clubops.application.dtos.inventory import InventoryItemResult
from clubops.application.dtos.role_assignment import RoleAssignmentResult, RosterResult

__all__ = [
    "ApprovalRequestResult",
    "EventGroupResult",
    "EventResult",
    "EventStatistics",
    "ExecutionResult",
    "FinanceRecordResult",
    "FinanceSummary",
    "InventoryItemResult",
    "ResolutionOutcome",
    "RoleAssignmentResult",
    "RosterResult",
]
