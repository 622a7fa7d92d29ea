"""Permission rule table: who may act directly and who must ask.

Single authority consulted by every gateway. Pure functions, no I/O.
Changing authorization policy means changing PERMISSION_RULES only; a new
mutation domain needs a column here before any gateway can use it.
"""

from types import MappingProxyType
from typing import Mapping

from clubops.domain.enums import TOP_ROLE, AccessLevel, MutationDomain, PermissionOutcome, RoleCode

_F = AccessLevel.FULL
_Q = AccessLevel.QUEUE
_R = AccessLevel.READ
_N = AccessLevel.NONE

PERMISSION_RULES: Mapping[RoleCode, Mapping[MutationDomain, AccessLevel]] = MappingProxyType(
    {
        RoleCode.PRESIDENT: MappingProxyType(
            {
                MutationDomain.FINANCE: _F,
                MutationDomain.INVENTORY: _F,
                MutationDomain.EVENT: _F,
                MutationDomain.ROLE_DIRECTORY: _F,
            }
        ),
        RoleCode.TREASURER: MappingProxyType(
            {
                MutationDomain.FINANCE: _Q,
                MutationDomain.INVENTORY: _Q,
                MutationDomain.EVENT: _N,
                MutationDomain.ROLE_DIRECTORY: _R,
            }
        ),
        RoleCode.VICE_PRESIDENT: MappingProxyType(
            {
                MutationDomain.FINANCE: _N,
                MutationDomain.INVENTORY: _N,
                MutationDomain.EVENT: _Q,
                MutationDomain.ROLE_DIRECTORY: _R,
            }
        ),
        RoleCode.ACTIVITY_DIRECTOR: MappingProxyType(
            {
                MutationDomain.FINANCE: _N,
                MutationDomain.INVENTORY: _N,
                MutationDomain.EVENT: _Q,
                MutationDomain.ROLE_DIRECTORY: _R,
            }
        ),
        RoleCode.ADVISOR: MappingProxyType(
            {
                MutationDomain.FINANCE: _R,
                MutationDomain.INVENTORY: _R,
                MutationDomain.EVENT: _R,
                MutationDomain.ROLE_DIRECTORY: _R,
            }
        ),
    }
)

_OUTCOME_BY_LEVEL: Mapping[AccessLevel, PermissionOutcome] = MappingProxyType(
    {
        AccessLevel.FULL: PermissionOutcome.EXECUTE,
        AccessLevel.QUEUE: PermissionOutcome.QUEUE,
        AccessLevel.READ: PermissionOutcome.DENY,
        AccessLevel.NONE: PermissionOutcome.DENY,
    }
)


def _coerce_role(role: RoleCode | str | None) -> RoleCode | None:
    if role is None or isinstance(role, RoleCode):
        return role
    try:
        return RoleCode(role)
    except ValueError:
        return None


def access_level(role: RoleCode | str | None, domain: MutationDomain) -> AccessLevel:
    """Return the table cell for (role, domain); unknown or missing role has no access."""
    resolved = _coerce_role(role)
    if resolved is None:
        return AccessLevel.NONE
    return PERMISSION_RULES[resolved].get(domain, AccessLevel.NONE)


def resolve(role: RoleCode | str | None, domain: MutationDomain) -> PermissionOutcome:
    """Map (role, mutation domain) to execute, queue or deny."""
    return _OUTCOME_BY_LEVEL[access_level(role, domain)]


def can_read(role: RoleCode | str | None, domain: MutationDomain) -> bool:
    """True when the role may list/view entities of the domain."""
    return access_level(role, domain) is not AccessLevel.NONE


def is_top_role(role: RoleCode | str | None) -> bool:
    return _coerce_role(role) is TOP_ROLE
