"""Application use cases: one entry point per workflow."""

from clubops.application.use_cases.gateways import (
    ApprovalGateway,
    EventGateway,
    FinanceGateway,
    GatewayResult,
    InventoryGateway,
)

__all__ = [
    "ApprovalGateway",
    "EventGateway",
    "FinanceGateway",
    "GatewayResult",
    "InventoryGateway",
]
