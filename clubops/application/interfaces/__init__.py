"""Application ports: repository and transaction protocols."""

from clubops.application.interfaces.repositories import (
    IApprovalRequestRepository,
    IEventRepository,
    IFinanceRepository,
    IInventoryRepository,
    IRoleAssignmentRepository,
    ITransactionScope,
)

__all__ = [
    "IApprovalRequestRepository",
    "IEventRepository",
    "IFinanceRepository",
    "IInventoryRepository",
    "IRoleAssignmentRepository",
    "ITransactionScope",
]
