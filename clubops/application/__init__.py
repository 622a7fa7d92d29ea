"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the repository interfaces.
"""

from clubops.application.services import (
    ActionExecutor,
    ApprovalLedger,
    RoleDirectoryService,
)
from clubops.application.use_cases import (
    ApprovalGateway,
    EventGateway,
    FinanceGateway,
    InventoryGateway,
)

__all__ = [
    "ActionExecutor",
    "ApprovalGateway",
    "ApprovalLedger",
    "EventGateway",
    "FinanceGateway",
    "InventoryGateway",
    "RoleDirectoryService",
]
