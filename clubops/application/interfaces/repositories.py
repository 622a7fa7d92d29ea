"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Write methods take already-validated column values; repositories do not
re-check business rules.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Protocol

from clubops.domain.enums import ApprovalStatus, RoleCode

if TYPE_CHECKING:
    from clubops.application.dtos.approval import ApprovalRequestResult
    from clubops.application.dtos.event import EventResult, EventStatistics
    from clubops.application.dtos.finance import FinanceRecordResult, FinanceSummary
    from clubops.application.dtos.inventory import InventoryItemResult
    from clubops.application.dtos.role_assignment import RoleAssignmentResult


# Role assignment repository interface
class IRoleAssignmentRepository(Protocol):
    """Protocol for the role directory store (one active row per actor)."""

    async def get_active(self, actor_id: str) -> RoleAssignmentResult | None:
        """Return the actor's active assignment, or None."""

    async def list_active(self) -> list[RoleAssignmentResult]:
        """Return all active assignments, newest first."""

    async def create_assignment(
        self, actor_id: str, role: RoleCode, assigned_by: str | None
    ) -> RoleAssignmentResult:
        """Insert a new active assignment."""

    async def deactivate(
        self, assignment_id: str, deactivated_by: str | None
    ) -> RoleAssignmentResult | None:
        """Flip is_active to False; return the updated row or None if not found/already inactive."""


# Approval request repository interface
class IApprovalRequestRepository(Protocol):
    """Protocol for approval request persistence (payload-agnostic)."""

    async def create_request(
        self,
        request_type: str,
        requester_id: str,
        payload: dict[str, Any],
        justification: str | None = None,
        target_ref: str | None = None,
    ) -> ApprovalRequestResult:
        """Insert a pending request."""

    async def get_by_id(self, request_id: str) -> ApprovalRequestResult | None:
        """Return request by id."""

    async def get_for_update(self, request_id: str) -> ApprovalRequestResult | None:
        """Return request by id, locking the row until the transaction ends."""

    async def list_by_status(self, status: ApprovalStatus) -> list[ApprovalRequestResult]:
        """Return requests in status, oldest first."""

    async def list_by_requester(self, requester_id: str) -> list[ApprovalRequestResult]:
        """Return a requester's history, newest first."""

    async def mark_resolved(
        self,
        request_id: str,
        status: ApprovalStatus,
        reviewer_id: str,
        reviewer_note: str | None,
    ) -> ApprovalRequestResult:
        """Set terminal status, reviewer and resolved_at."""

    async def mark_executed(self, request_id: str) -> ApprovalRequestResult:
        """Set executed_at and clear execution_error."""

    async def record_execution_error(
        self, request_id: str, error: str
    ) -> ApprovalRequestResult:
        """Store the last execution failure message."""


# Finance repository interface
class IFinanceRepository(Protocol):
    """Protocol for finance record persistence."""

    async def list_records(
        self, record_type: str | None = None, approved: bool | None = None
    ) -> list[FinanceRecordResult]:
        """Return records, newest first, optionally filtered."""

    async def get_by_id(self, record_id: str) -> FinanceRecordResult | None:
        """Return record by id."""

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> FinanceRecordResult | None:
        """Return the record written for an approval request, if any."""

    async def create_record(self, values: dict[str, Any]) -> FinanceRecordResult:
        """Insert a record."""

    async def update_record(
        self, record_id: str, values: dict[str, Any]
    ) -> FinanceRecordResult | None:
        """Update a record; None if not found."""

    async def delete_record(self, record_id: str) -> bool:
        """Delete a record; False if not found."""

    async def get_summary(self) -> FinanceSummary:
        """Return income/expense totals over approved records."""


# Inventory repository interface
class IInventoryRepository(Protocol):
    """Protocol for inventory item persistence."""

    async def list_items(
        self, category: str | None = None, approved: bool | None = None
    ) -> list[InventoryItemResult]:
        """Return items, newest first, optionally filtered."""

    async def get_by_id(self, item_id: str) -> InventoryItemResult | None:
        """Return item by id."""

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> InventoryItemResult | None:
        """Return the item written for an approval request, if any."""

    async def create_item(self, values: dict[str, Any]) -> InventoryItemResult:
        """Insert an item."""

    async def update_item(
        self, item_id: str, values: dict[str, Any]
    ) -> InventoryItemResult | None:
        """Update an item; None if not found."""

    async def delete_item(self, item_id: str) -> bool:
        """Delete an item; False if not found."""


# Event repository interface
class IEventRepository(Protocol):
    """Protocol for event, group, ticket and registration persistence."""

    async def list_events(
        self, status: str | None = None, event_type: str | None = None
    ) -> list[EventResult]:
        """Return events with groups, newest first, optionally filtered."""

    async def get_by_id(self, event_id: str) -> EventResult | None:
        """Return event with groups by id."""

    async def get_by_approval_request(
        self, approval_request_id: str
    ) -> EventResult | None:
        """Return the event written for an approval request, if any."""

    async def create_event(
        self, values: dict[str, Any], groups: list[dict[str, Any]]
    ) -> EventResult:
        """Insert an event with its groups (and numbered tickets for multi-ticket groups)."""

    async def update_event(
        self, event_id: str, values: dict[str, Any]
    ) -> EventResult | None:
        """Update event columns; None if not found."""

    async def delete_tickets_for_event(self, event_id: str) -> int:
        """Delete tickets of all groups of the event; return count."""

    async def delete_registrations_for_event(self, event_id: str) -> int:
        """Delete registrations of the event; return count."""

    async def delete_groups_for_event(self, event_id: str) -> int:
        """Delete groups of the event; return count."""

    async def delete_event(self, event_id: str) -> bool:
        """Delete the event row; False if not found."""

    async def get_statistics(self) -> list[EventStatistics]:
        """Return per-event capacity and registration counts, newest first."""


# Transaction scope interface
class ITransactionScope(Protocol):
    """Protocol for nested transaction boundaries inside the request transaction."""

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Return an async context manager that rolls back only its own writes on error."""
