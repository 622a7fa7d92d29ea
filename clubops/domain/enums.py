"""Domain enumerations for club operations.

Enums represent the closed value sets of the approval workflow (roles,
mutation domains and operations, request lifecycle) and of the domain
entities it gates (finance type, inventory category, event type/status).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class RoleCode(_ValuesMixin, str, Enum):
    """Club office held by an actor. PRESIDENT is the singleton top role."""

    PRESIDENT = "president"
    TREASURER = "treasurer"
    VICE_PRESIDENT = "vice_president"
    ACTIVITY_DIRECTOR = "activity_director"
    ADVISOR = "advisor"

    @property
    def display_name(self) -> str:
        return _ROLE_DISPLAY_NAMES[self]


_ROLE_DISPLAY_NAMES: dict[RoleCode, str] = {
    RoleCode.PRESIDENT: "President",
    RoleCode.TREASURER: "Treasurer",
    RoleCode.VICE_PRESIDENT: "Vice President",
    RoleCode.ACTIVITY_DIRECTOR: "Activity Director",
    RoleCode.ADVISOR: "Advisor",
}

TOP_ROLE = RoleCode.PRESIDENT


class MutationDomain(_ValuesMixin, str, Enum):
    """Collection family a gated mutation writes to."""

    FINANCE = "finance"
    INVENTORY = "inventory"
    EVENT = "event"
    ROLE_DIRECTORY = "role_directory"


class MutationOperation(_ValuesMixin, str, Enum):
    """Write operation within a mutation domain."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"


class AccessLevel(_ValuesMixin, str, Enum):
    """Cell value of the permission rule table (role x domain)."""

    FULL = "full"
    QUEUE = "queue"
    READ = "read"
    NONE = "none"


class PermissionOutcome(_ValuesMixin, str, Enum):
    """What a gateway must do with a mutation attempt."""

    EXECUTE = "execute"
    QUEUE = "queue"
    DENY = "deny"


class ApprovalStatus(_ValuesMixin, str, Enum):
    """Approval request lifecycle. PENDING is initial; the others are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Decision(_ValuesMixin, str, Enum):
    """Reviewer decision on a pending request."""

    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, raw: str) -> "Decision":
        """Accept both the status form (approved/rejected) and the verb form (approve/reject)."""
        normalized = (raw or "").strip().lower()
        aliases = {"approve": cls.APPROVED, "reject": cls.REJECTED}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)

    @property
    def resulting_status(self) -> ApprovalStatus:
        return ApprovalStatus(self.value)


class FinanceType(_ValuesMixin, str, Enum):
    """Direction of a finance record."""

    INCOME = "income"
    EXPENSE = "expense"


class InventoryCategory(_ValuesMixin, str, Enum):
    """Inventory item category."""

    FIXED_ASSET = "fixed_asset"
    CONSUMABLE = "consumable"


class EventType(_ValuesMixin, str, Enum):
    """Kind of club event."""

    GROUP_PLAY = "group_play"
    COMPETITION = "competition"
    OTHER = "other"


class EventStatus(_ValuesMixin, str, Enum):
    """Registration state of a club event."""

    OPEN = "open"
    ENDED = "ended"
