"""Domain layer: enums, value objects, the permission rule table, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from clubops.domain.enums import (
    AccessLevel,
    ApprovalStatus,
    Decision,
    MutationDomain,
    MutationOperation,
    PermissionOutcome,
    RoleCode,
)
from clubops.domain.exceptions import (
    AlreadyResolvedException,
    AuthenticationException,
    AuthorizationException,
    ClubOpsException,
    ResourceNotFoundException,
    RoleAlreadyAssignedException,
    SelfRevocationDeniedException,
    ValidationException,
)
from clubops.domain.value_objects import MutationType

__all__ = [
    # Enums
    "AccessLevel",
    "ApprovalStatus",
    "Decision",
    "MutationDomain",
    "MutationOperation",
    "PermissionOutcome",
    "RoleCode",
    # Exceptions
    "AlreadyResolvedException",
    "AuthenticationException",
    "AuthorizationException",
    "ClubOpsException",
    "ResourceNotFoundException",
    "RoleAlreadyAssignedException",
    "SelfRevocationDeniedException",
    "ValidationException",
    # Value objects
    "MutationType",
]
