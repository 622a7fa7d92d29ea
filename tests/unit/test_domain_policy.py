"""Permission rule table, role codes and the mutation taxonomy."""

import pytest

from clubops.domain.enums import (
    AccessLevel,
    ApprovalStatus,
    Decision,
    MutationDomain,
    MutationOperation,
    PermissionOutcome,
    RoleCode,
)
from clubops.domain.policy import PERMISSION_RULES, access_level, can_read, is_top_role, resolve
from clubops.domain.value_objects import MutationType


def test_every_role_has_a_cell_for_every_domain() -> None:
    """The table is total over RoleCode x MutationDomain."""
    for role in RoleCode:
        assert set(PERMISSION_RULES[role]) == set(MutationDomain)


@pytest.mark.parametrize("domain", list(MutationDomain))
def test_president_executes_everywhere(domain: MutationDomain) -> None:
    assert resolve(RoleCode.PRESIDENT, domain) is PermissionOutcome.EXECUTE


@pytest.mark.parametrize(
    ("role", "domain", "expected"),
    [
        (RoleCode.TREASURER, MutationDomain.FINANCE, PermissionOutcome.QUEUE),
        (RoleCode.TREASURER, MutationDomain.INVENTORY, PermissionOutcome.QUEUE),
        (RoleCode.TREASURER, MutationDomain.EVENT, PermissionOutcome.DENY),
        (RoleCode.VICE_PRESIDENT, MutationDomain.EVENT, PermissionOutcome.QUEUE),
        (RoleCode.VICE_PRESIDENT, MutationDomain.FINANCE, PermissionOutcome.DENY),
        (RoleCode.ACTIVITY_DIRECTOR, MutationDomain.EVENT, PermissionOutcome.QUEUE),
        (RoleCode.ACTIVITY_DIRECTOR, MutationDomain.INVENTORY, PermissionOutcome.DENY),
        (RoleCode.ADVISOR, MutationDomain.FINANCE, PermissionOutcome.DENY),
        (RoleCode.ADVISOR, MutationDomain.EVENT, PermissionOutcome.DENY),
    ],
)
def test_non_top_roles(role: RoleCode, domain: MutationDomain, expected: PermissionOutcome) -> None:
    assert resolve(role, domain) is expected


@pytest.mark.parametrize("role", [r for r in RoleCode if r is not RoleCode.PRESIDENT])
def test_only_president_writes_role_directory(role: RoleCode) -> None:
    """Role-directory writes are never queued: everyone else is denied."""
    assert resolve(role, MutationDomain.ROLE_DIRECTORY) is PermissionOutcome.DENY


def test_missing_or_unknown_role_is_denied() -> None:
    assert resolve(None, MutationDomain.FINANCE) is PermissionOutcome.DENY
    assert resolve("janitor", MutationDomain.FINANCE) is PermissionOutcome.DENY
    assert access_level(None, MutationDomain.EVENT) is AccessLevel.NONE


def test_resolve_accepts_role_strings() -> None:
    assert resolve("treasurer", MutationDomain.FINANCE) is PermissionOutcome.QUEUE


def test_can_read() -> None:
    """Advisors read everything; a treasurer cannot see events."""
    assert all(can_read(RoleCode.ADVISOR, d) for d in MutationDomain)
    assert not can_read(RoleCode.TREASURER, MutationDomain.EVENT)
    assert can_read(RoleCode.TREASURER, MutationDomain.FINANCE)
    assert not can_read(None, MutationDomain.FINANCE)


def test_is_top_role() -> None:
    assert is_top_role(RoleCode.PRESIDENT)
    assert is_top_role("president")
    assert not is_top_role(RoleCode.TREASURER)
    assert not is_top_role(None)


def test_role_display_names() -> None:
    assert RoleCode.VICE_PRESIDENT.display_name == "Vice President"
    assert RoleCode.values() == [
        "president",
        "treasurer",
        "vice_president",
        "activity_director",
        "advisor",
    ]


def test_mutation_type_taxonomy_is_closed() -> None:
    """Four domains times three operations; only role-directory writes are not queueable."""
    assert len(MutationType.all()) == 12
    queueable = MutationType.queueable()
    assert len(queueable) == 9
    assert all(m.domain is not MutationDomain.ROLE_DIRECTORY for m in queueable)


def test_mutation_type_parse_and_tag() -> None:
    mt = MutationType.parse("role_directory_edit")
    assert mt.domain is MutationDomain.ROLE_DIRECTORY
    assert mt.operation is MutationOperation.EDIT
    assert mt.tag == "role_directory_edit"
    assert MutationType.parse("finance_add").display_name == "add finance record"


@pytest.mark.parametrize("tag", ["", "finance", "finance_update", "payroll_add", "finance-add"])
def test_mutation_type_parse_rejects_unknown(tag: str) -> None:
    with pytest.raises(ValueError):
        MutationType.parse(tag)


def test_decision_parse_accepts_verb_form() -> None:
    assert Decision.parse("approve") is Decision.APPROVED
    assert Decision.parse(" Rejected ") is Decision.REJECTED
    assert Decision.parse("approved").resulting_status is ApprovalStatus.APPROVED
    with pytest.raises(ValueError):
        Decision.parse("maybe")
