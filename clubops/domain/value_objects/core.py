"""Domain value objects for club operations.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from typing import ClassVar

from clubops.domain.enums import MutationDomain, MutationOperation


@dataclass(frozen=True)
class MutationType:
    """One (domain, operation) variant of the mutation taxonomy.

    The taxonomy is closed: every combination of MutationDomain and
    MutationOperation is a valid mutation type, serialized as the tag
    "<domain>_<operation>" (e.g. "finance_add"). Only the finance,
    inventory and event variants may be queued as approval requests;
    role-directory writes are never deferred.
    """

    domain: MutationDomain
    operation: MutationOperation

    QUEUEABLE_DOMAINS: ClassVar[frozenset[MutationDomain]] = frozenset(
        {MutationDomain.FINANCE, MutationDomain.INVENTORY, MutationDomain.EVENT}
    )

    def __post_init__(self) -> None:
        if not isinstance(self.domain, MutationDomain):
            raise ValueError(f"Unknown mutation domain: {self.domain!r}")
        if not isinstance(self.operation, MutationOperation):
            raise ValueError(f"Unknown mutation operation: {self.operation!r}")

    @property
    def tag(self) -> str:
        return f"{self.domain.value}_{self.operation.value}"

    @property
    def is_queueable(self) -> bool:
        return self.domain in self.QUEUEABLE_DOMAINS

    @property
    def display_name(self) -> str:
        """Human-readable label, e.g. 'add finance record'."""
        return f"{self.operation.value} {_DOMAIN_NOUNS[self.domain]}"

    @classmethod
    def parse(cls, tag: str) -> "MutationType":
        """Parse a "<domain>_<operation>" tag. Raises ValueError for anything outside the taxonomy."""
        if not tag or "_" not in tag:
            raise ValueError(f"Invalid mutation type tag: {tag!r}")
        domain_part, _, operation_part = tag.rpartition("_")
        try:
            return cls(MutationDomain(domain_part), MutationOperation(operation_part))
        except ValueError:
            raise ValueError(f"Invalid mutation type tag: {tag!r}") from None

    @classmethod
    def all(cls) -> list["MutationType"]:
        """Every variant of the taxonomy, domain-major order."""
        return [cls(d, o) for d in MutationDomain for o in MutationOperation]

    @classmethod
    def queueable(cls) -> list["MutationType"]:
        return [m for m in cls.all() if m.is_queueable]

    def __str__(self) -> str:
        return self.tag


_DOMAIN_NOUNS: dict[MutationDomain, str] = {
    MutationDomain.FINANCE: "finance record",
    MutationDomain.INVENTORY: "inventory item",
    MutationDomain.EVENT: "event",
    MutationDomain.ROLE_DIRECTORY: "role assignment",
}
