"""DTOs for role directory use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from clubops.domain.enums import RoleCode


@dataclass(frozen=True)
class RoleAssignmentResult:
    """Role assignment read-model. History rows keep is_active=False."""

    id: str
    actor_id: str
    role: RoleCode
    is_active: bool
    assigned_by: str | None
    assigned_at: datetime
    deactivated_at: datetime | None = None
    deactivated_by: str | None = None


@dataclass(frozen=True)
class RosterResult:
    """GET of the role directory: the caller's own assignment plus every active one."""

    current: RoleAssignmentResult
    active: list[RoleAssignmentResult]
