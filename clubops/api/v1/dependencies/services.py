"""Service graph built per request from one database session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clubops.application.services import (
    ActionExecutor,
    ApprovalLedger,
    RoleDirectoryService,
)
from clubops.application.use_cases.gateways import (
    ApprovalGateway,
    EventGateway,
    FinanceGateway,
    InventoryGateway,
)
from clubops.infrastructure.persistence.database import get_db, get_db_transactional
from clubops.infrastructure.persistence.repositories import (
    ApprovalRequestRepository,
    EventRepository,
    FinanceRepository,
    InventoryRepository,
    RoleAssignmentRepository,
    SqlTransactionScope,
)


@dataclass(frozen=True)
class ClubServices:
    """Everything an endpoint may call, sharing one session and transaction."""

    roles: RoleDirectoryService
    ledger: ApprovalLedger
    approvals: ApprovalGateway
    finance: FinanceGateway
    inventory: InventoryGateway
    events: EventGateway


def build_services(
    role_repo: Any,
    approval_repo: Any,
    finance_repo: Any,
    inventory_repo: Any,
    event_repo: Any,
    transaction: Any = None,
) -> ClubServices:
    """Wire the application layer over any set of repositories."""
    executor = ActionExecutor(finance_repo, inventory_repo, event_repo, role_repo)
    ledger = ApprovalLedger(approval_repo, role_repo, executor, transaction)
    finance = FinanceGateway(role_repo, executor, ledger, finance_repo)
    inventory = InventoryGateway(role_repo, executor, ledger, inventory_repo)
    events = EventGateway(role_repo, executor, ledger, event_repo)
    domain_gateways = {gateway.domain: gateway for gateway in (finance, inventory, events)}
    return ClubServices(
        roles=RoleDirectoryService(role_repo, executor),
        ledger=ledger,
        approvals=ApprovalGateway(role_repo, ledger, domain_gateways),
        finance=finance,
        inventory=inventory,
        events=events,
    )


def _sql_services(db: AsyncSession) -> ClubServices:
    return build_services(
        role_repo=RoleAssignmentRepository(db),
        approval_repo=ApprovalRequestRepository(db),
        finance_repo=FinanceRepository(db),
        inventory_repo=InventoryRepository(db),
        event_repo=EventRepository(db),
        transaction=SqlTransactionScope(db),
    )


async def get_read_services(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClubServices:
    """Services over a non-committing session (GET endpoints)."""
    return _sql_services(db)


async def get_write_services(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ClubServices:
    """Services over the request transaction (POST/PUT/DELETE endpoints)."""
    return _sql_services(db)


ReadServices = Annotated[ClubServices, Depends(get_read_services)]
WriteServices = Annotated[ClubServices, Depends(get_write_services)]
