"""Role directory API schemas."""

from datetime import datetime

from clubops.domain.enums import RoleCode
from clubops.schemas.common import CamelModel


class AppointRequest(CamelModel):
    """Body for POST /roles."""

    target_actor_id: str | None = None
    role: str | None = None


class RevokeRequest(CamelModel):
    """Body for DELETE /roles."""

    target_actor_id: str | None = None


class RoleAssignmentResponse(CamelModel):
    id: str
    actor_id: str
    role: RoleCode
    is_active: bool
    assigned_by: str | None
    assigned_at: datetime
    deactivated_at: datetime | None = None
    deactivated_by: str | None = None
