"""API schemas (pydantic request/response models, camelCase on the wire)."""

from clubops.schemas.approvals import (
    ApprovalRequestResponse,
    ResolveApprovalRequest,
    SubmitApprovalRequest,
)
from clubops.schemas.common import CamelModel, dump, queued_response
from clubops.schemas.events import (
    EventGroupRequest,
    EventRequest,
    EventResponse,
    EventStatisticsResponse,
)
from clubops.schemas.finance import (
    FinanceRecordRequest,
    FinanceRecordResponse,
    FinanceSummaryResponse,
)
from clubops.schemas.health import HealthResponse
from clubops.schemas.inventory import InventoryItemRequest, InventoryItemResponse
from clubops.schemas.roles import AppointRequest, RevokeRequest, RoleAssignmentResponse

__all__ = [
    "AppointRequest",
    "ApprovalRequestResponse",
    "CamelModel",
    "EventGroupRequest",
    "EventRequest",
    "EventResponse",
    "EventStatisticsResponse",
    "FinanceRecordRequest",
    "FinanceRecordResponse",
    "FinanceSummaryResponse",
    "HealthResponse",
    "InventoryItemRequest",
    "InventoryItemResponse",
    "ResolveApprovalRequest",
    "RevokeRequest",
    "RoleAssignmentResponse",
    "SubmitApprovalRequest",
    "dump",
    "queued_response",
]
