"""Action executor: applies one tagged mutation to its target collection.

Used by the gateways for direct (top role) writes and by the approval ledger
when an accepted request is replayed. Every handler performs exactly one
domain write; payload keys outside the domain's column whitelist are dropped.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from clubops.application.dtos.approval import ExecutionResult
from clubops.application.interfaces.repositories import (
    IEventRepository,
    IFinanceRepository,
    IInventoryRepository,
    IRoleAssignmentRepository,
)
from clubops.domain.enums import MutationDomain, MutationOperation, RoleCode
from clubops.domain.exceptions import ResourceNotFoundException, ValidationException
from clubops.domain.value_objects import MutationType
from clubops.shared.telemetry.logging import get_logger
from clubops.shared.telemetry.tracing import traced

logger = get_logger(__name__)

FINANCE_FIELDS = frozenset({"type", "amount", "description", "notes"})
INVENTORY_FIELDS = frozenset(
    {"name", "category", "quantity", "unit", "description", "purchase_date", "price"}
)
EVENT_FIELDS = frozenset({"title", "description", "type", "status", "registration_link"})
EVENT_GROUP_FIELDS = frozenset(
    {"name", "capacity", "share_link", "checkin_img", "ticket_count", "capacity_per_ticket"}
)


@dataclass(frozen=True)
class _WriteContext:
    mutation_type: MutationType
    payload: dict[str, Any]
    target_ref: str | None
    actor_id: str | None
    approval_request_id: str | None

    def require_target(self) -> str:
        if not self.target_ref:
            raise ValidationException(
                f"{self.mutation_type.display_name} needs a target reference",
                field="target_ref",
            )
        return self.target_ref


def _to_decimal(value: Any, field: str) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValidationException(f"{field} must be a number", field=field) from e


def _to_date(value: Any, field: str) -> date | None:
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationException(f"{field} must be an ISO date", field=field) from e


def _pick(payload: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if k in allowed}


def _stamp(values: dict[str, Any], ctx: _WriteContext, author_field: str | None) -> None:
    """Mark the write approved and attribute it. Edits keep an earlier request stamp on direct writes."""
    values["approved"] = True
    if author_field:
        values[author_field] = ctx.actor_id
    if ctx.approval_request_id or ctx.mutation_type.operation is MutationOperation.ADD:
        values["approval_request_id"] = ctx.approval_request_id


def finance_columns(payload: dict[str, Any]) -> dict[str, Any]:
    values = _pick(payload, FINANCE_FIELDS)
    if "amount" in values:
        values["amount"] = _to_decimal(values["amount"], "amount")
    return values


def inventory_columns(payload: dict[str, Any]) -> dict[str, Any]:
    values = _pick(payload, INVENTORY_FIELDS)
    if "price" in values:
        values["price"] = _to_decimal(values["price"], "price")
    if "purchase_date" in values:
        values["purchase_date"] = _to_date(values["purchase_date"], "purchase_date")
    if "quantity" in values and values["quantity"] is not None:
        values["quantity"] = int(values["quantity"])
    return values


def event_group_rows(groups: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """Normalize group payloads: capacity defaults to capacity_per_ticket * ticket_count."""
    rows = []
    for group in groups or []:
        row = _pick(group, EVENT_GROUP_FIELDS)
        ticket_count = int(row.get("ticket_count") or 1)
        per_ticket = int(row.get("capacity_per_ticket") or 0)
        capacity = int(row.get("capacity") or per_ticket * ticket_count)
        row.update(
            ticket_count=ticket_count,
            capacity_per_ticket=per_ticket or capacity,
            capacity=capacity,
        )
        rows.append(row)
    return rows


class ActionExecutor:
    """Dispatches each of the twelve mutation variants to exactly one write.

    The handler table is checked against MutationType.all() at construction,
    so a new domain or operation without a handler fails at startup instead of
    silently falling through.
    """

    def __init__(
        self,
        finance_repo: IFinanceRepository,
        inventory_repo: IInventoryRepository,
        event_repo: IEventRepository,
        role_repo: IRoleAssignmentRepository,
    ) -> None:
        self._finance_repo = finance_repo
        self._inventory_repo = inventory_repo
        self._event_repo = event_repo
        self._role_repo = role_repo

        F, I, E, R = (
            MutationDomain.FINANCE,
            MutationDomain.INVENTORY,
            MutationDomain.EVENT,
            MutationDomain.ROLE_DIRECTORY,
        )
        A, U, D = MutationOperation.ADD, MutationOperation.EDIT, MutationOperation.DELETE
        self._handlers: dict[
            MutationType, Callable[[_WriteContext], Awaitable[ExecutionResult]]
        ] = {
            MutationType(F, A): self._add_finance,
            MutationType(F, U): self._edit_finance,
            MutationType(F, D): self._delete_finance,
            MutationType(I, A): self._add_inventory,
            MutationType(I, U): self._edit_inventory,
            MutationType(I, D): self._delete_inventory,
            MutationType(E, A): self._add_event,
            MutationType(E, U): self._edit_event,
            MutationType(E, D): self._delete_event,
            MutationType(R, A): self._add_role,
            MutationType(R, U): self._edit_role,
            MutationType(R, D): self._delete_role,
        }
        missing = set(MutationType.all()) - set(self._handlers)
        if missing:
            raise RuntimeError(
                "No executor handler for: " + ", ".join(sorted(m.tag for m in missing))
            )

    @traced("action_executor.apply")
    async def apply(
        self,
        mutation_type: MutationType | str,
        payload: dict[str, Any],
        target_ref: str | None = None,
        actor_id: str | None = None,
        approval_request_id: str | None = None,
    ) -> ExecutionResult:
        """Apply one mutation.

        Args:
            mutation_type: Variant to apply (tag strings are parsed).
            payload: Validated domain fields.
            target_ref: Entity id for edit/delete.
            actor_id: Author stamped on the written row (the requester on replay).
            approval_request_id: Set when replaying an accepted request; makes adds idempotent.

        Returns:
            ExecutionResult; applied=False only for an unrecognized tag.

        Raises:
            ResourceNotFoundException: Edit/delete target no longer exists.
            ValidationException: Missing target reference or unconvertible value.
        """
        if not isinstance(mutation_type, MutationType):
            try:
                mutation_type = MutationType.parse(str(mutation_type))
            except ValueError:
                logger.warning(
                    "Unrecognized mutation type %r (request %s); nothing applied",
                    mutation_type,
                    approval_request_id,
                )
                return ExecutionResult(mutation_type=None, entity_id=None, applied=False)

        ctx = _WriteContext(
            mutation_type=mutation_type,
            payload=dict(payload or {}),
            target_ref=target_ref,
            actor_id=actor_id,
            approval_request_id=approval_request_id,
        )
        return await self._handlers[mutation_type](ctx)

    # Finance

    async def _add_finance(self, ctx: _WriteContext) -> ExecutionResult:
        if ctx.approval_request_id:
            existing = await self._finance_repo.get_by_approval_request(
                ctx.approval_request_id
            )
            if existing:
                return ExecutionResult(ctx.mutation_type, existing.id, existing)
        values = finance_columns(ctx.payload)
        values.setdefault("notes", "")
        _stamp(values, ctx, "recorded_by")
        record = await self._finance_repo.create_record(values)
        return ExecutionResult(ctx.mutation_type, record.id, record)

    async def _edit_finance(self, ctx: _WriteContext) -> ExecutionResult:
        record_id = ctx.require_target()
        values = finance_columns(ctx.payload)
        _stamp(values, ctx, None)
        record = await self._finance_repo.update_record(record_id, values)
        if record is None:
            raise ResourceNotFoundException("finance_record", record_id)
        return ExecutionResult(ctx.mutation_type, record.id, record)

    async def _delete_finance(self, ctx: _WriteContext) -> ExecutionResult:
        record_id = ctx.require_target()
        if not await self._finance_repo.delete_record(record_id):
            raise ResourceNotFoundException("finance_record", record_id)
        return ExecutionResult(ctx.mutation_type, record_id)

    # Inventory

    async def _add_inventory(self, ctx: _WriteContext) -> ExecutionResult:
        if ctx.approval_request_id:
            existing = await self._inventory_repo.get_by_approval_request(
                ctx.approval_request_id
            )
            if existing:
                return ExecutionResult(ctx.mutation_type, existing.id, existing)
        values = inventory_columns(ctx.payload)
        values.setdefault("quantity", 0)
        values.setdefault("description", "")
        _stamp(values, ctx, "last_modified_by")
        item = await self._inventory_repo.create_item(values)
        return ExecutionResult(ctx.mutation_type, item.id, item)

    async def _edit_inventory(self, ctx: _WriteContext) -> ExecutionResult:
        item_id = ctx.require_target()
        values = inventory_columns(ctx.payload)
        _stamp(values, ctx, "last_modified_by")
        item = await self._inventory_repo.update_item(item_id, values)
        if item is None:
            raise ResourceNotFoundException("inventory_item", item_id)
        return ExecutionResult(ctx.mutation_type, item.id, item)

    async def _delete_inventory(self, ctx: _WriteContext) -> ExecutionResult:
        item_id = ctx.require_target()
        if not await self._inventory_repo.delete_item(item_id):
            raise ResourceNotFoundException("inventory_item", item_id)
        return ExecutionResult(ctx.mutation_type, item_id)

    # Events

    async def _add_event(self, ctx: _WriteContext) -> ExecutionResult:
        if ctx.approval_request_id:
            existing = await self._event_repo.get_by_approval_request(
                ctx.approval_request_id
            )
            if existing:
                return ExecutionResult(ctx.mutation_type, existing.id, existing)
        values = _pick(ctx.payload, EVENT_FIELDS)
        values.setdefault("description", "")
        values.setdefault("status", "open")
        _stamp(values, ctx, "created_by")
        event = await self._event_repo.create_event(
            values, event_group_rows(ctx.payload.get("groups"))
        )
        return ExecutionResult(ctx.mutation_type, event.id, event)

    async def _edit_event(self, ctx: _WriteContext) -> ExecutionResult:
        event_id = ctx.require_target()
        values = _pick(ctx.payload, EVENT_FIELDS)
        _stamp(values, ctx, None)
        event = await self._event_repo.update_event(event_id, values)
        if event is None:
            raise ResourceNotFoundException("event", event_id)
        return ExecutionResult(ctx.mutation_type, event.id, event)

    async def _delete_event(self, ctx: _WriteContext) -> ExecutionResult:
        event_id = ctx.require_target()
        if await self._event_repo.get_by_id(event_id) is None:
            raise ResourceNotFoundException("event", event_id)
        # Foreign keys point upward: tickets -> groups -> event, registrations -> event.
        await self._event_repo.delete_tickets_for_event(event_id)
        await self._event_repo.delete_registrations_for_event(event_id)
        await self._event_repo.delete_groups_for_event(event_id)
        await self._event_repo.delete_event(event_id)
        return ExecutionResult(ctx.mutation_type, event_id)

    # Role directory

    def _role_target(self, ctx: _WriteContext) -> str:
        actor_id = ctx.payload.get("actor_id") or ctx.target_ref
        if not actor_id:
            raise ValidationException("Target actor is required", field="target_actor_id")
        return str(actor_id)

    @staticmethod
    def _role_code(ctx: _WriteContext) -> RoleCode:
        try:
            return RoleCode(ctx.payload.get("role"))
        except ValueError as e:
            raise ValidationException(
                f"role must be one of: {', '.join(RoleCode.values())}", field="role"
            ) from e

    async def _add_role(self, ctx: _WriteContext) -> ExecutionResult:
        assignment = await self._role_repo.create_assignment(
            actor_id=self._role_target(ctx),
            role=self._role_code(ctx),
            assigned_by=ctx.actor_id,
        )
        return ExecutionResult(ctx.mutation_type, assignment.id, assignment)

    async def _edit_role(self, ctx: _WriteContext) -> ExecutionResult:
        target = self._role_target(ctx)
        role = self._role_code(ctx)
        current = await self._role_repo.get_active(target)
        if current is None:
            raise ResourceNotFoundException("role_assignment", target)
        await self._role_repo.deactivate(current.id, ctx.actor_id)
        assignment = await self._role_repo.create_assignment(
            actor_id=target, role=role, assigned_by=ctx.actor_id
        )
        return ExecutionResult(ctx.mutation_type, assignment.id, assignment)

    async def _delete_role(self, ctx: _WriteContext) -> ExecutionResult:
        target = self._role_target(ctx)
        current = await self._role_repo.get_active(target)
        if current is None:
            raise ResourceNotFoundException("role_assignment", target)
        deactivated = await self._role_repo.deactivate(current.id, ctx.actor_id)
        return ExecutionResult(ctx.mutation_type, current.id, deactivated)
