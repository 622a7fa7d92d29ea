"""Request gateways: one per mutation domain plus the approval front door."""

from clubops.application.use_cases.gateways.approvals import ApprovalGateway
from clubops.application.use_cases.gateways.base import GatewayResult, MutationGateway
from clubops.application.use_cases.gateways.events import EventGateway
from clubops.application.use_cases.gateways.finance import FinanceGateway
from clubops.application.use_cases.gateways.inventory import InventoryGateway

__all__ = [
    "ApprovalGateway",
    "EventGateway",
    "FinanceGateway",
    "GatewayResult",
    "InventoryGateway",
    "MutationGateway",
]
