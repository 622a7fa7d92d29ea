"""Payload validation for gated mutations.

Each validator returns a cleaned copy holding only the domain's known fields
(numbers normalized, strings stripped) or raises ValidationException naming
the offending field. Validation is the gateway's job; the approval ledger
stores whatever it is handed.

Limits match the columns the executor writes to: money is Numeric(12, 2),
capacities and quantities are 32-bit integers, and every ticket of a group is
inserted in the same request.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Any

from clubops.domain.enums import (
    EventStatus,
    EventType,
    FinanceType,
    InventoryCategory,
    MutationDomain,
    MutationOperation,
)
from clubops.domain.exceptions import ValidationException

PayloadValidator = Callable[[MutationOperation, dict[str, Any]], dict[str, Any]]

MONEY_PLACES = 2
MAX_MONEY = Decimal("9999999999.99")
MAX_QUANTITY = 1_000_000
MAX_CAPACITY = 100_000
MAX_TICKETS_PER_GROUP = 500


def _text(
    payload: dict[str, Any], field: str, *, required: bool, non_blank: bool = False
) -> str | None:
    """Stripped string value.

    non_blank rejects an empty string even when the field may be omitted, for
    edits of fields that an add requires.
    """
    value = payload.get(field)
    if value is None:
        if required:
            raise ValidationException(f"{field} is required", field=field)
        return None
    if not isinstance(value, str):
        raise ValidationException(f"{field} must be a string", field=field)
    value = value.strip()
    if not value:
        if required:
            raise ValidationException(f"{field} is required", field=field)
        if non_blank:
            raise ValidationException(f"{field} must not be empty", field=field)
    return value


def _choice(
    payload: dict[str, Any], field: str, allowed: list[str], *, required: bool
) -> str | None:
    value = _text(payload, field, required=required)
    if value is not None and value not in allowed:
        raise ValidationException(
            f"{field} must be one of: {', '.join(allowed)}", field=field
        )
    return value


def _number(
    payload: dict[str, Any],
    field: str,
    *,
    required: bool,
    positive: bool = False,
    non_negative: bool = False,
    integer: bool = False,
    places: int | None = None,
    maximum: int | Decimal | None = None,
) -> int | float | None:
    value = payload.get(field)
    if value is None:
        if required:
            raise ValidationException(f"{field} is required", field=field)
        return None
    if isinstance(value, bool):
        raise ValidationException(f"{field} must be a number", field=field)
    if isinstance(value, str):
        try:
            value = int(value) if value.strip().lstrip("-").isdigit() else float(value)
        except ValueError:
            raise ValidationException(f"{field} must be a number", field=field) from None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationException(f"{field} must be a number", field=field)
    if integer:
        if isinstance(value, float) and not value.is_integer():
            raise ValidationException(f"{field} must be a whole number", field=field)
        value = int(value)
    if positive and value <= 0:
        raise ValidationException(f"{field} must be greater than 0", field=field)
    if non_negative and value < 0:
        raise ValidationException(f"{field} must not be negative", field=field)
    exact = Decimal(str(value))
    if places is not None and exact.as_tuple().exponent < -places:
        raise ValidationException(
            f"{field} must have at most {places} decimal places", field=field
        )
    if maximum is not None and exact > maximum:
        raise ValidationException(f"{field} must not exceed {maximum}", field=field)
    return value


def _iso_date(payload: dict[str, Any], field: str) -> str | None:
    value = _text(payload, field, required=False)
    if not value:
        return None
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValidationException(f"{field} must be a date (YYYY-MM-DD)", field=field) from None
    return value


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _require_changes(values: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    if not values:
        raise ValidationException(
            f"At least one of {', '.join(fields)} must be provided", field="payload"
        )
    return values


FINANCE_EDITABLE = ("type", "amount", "description", "notes")
INVENTORY_EDITABLE = (
    "name",
    "category",
    "quantity",
    "unit",
    "description",
    "purchase_date",
    "price",
)
EVENT_EDITABLE = ("title", "description", "type", "status", "registration_link")


def validate_finance_payload(
    operation: MutationOperation, payload: dict[str, Any]
) -> dict[str, Any]:
    """Finance add needs type, positive amount and description."""
    if operation is MutationOperation.DELETE:
        return {}
    adding = operation is MutationOperation.ADD
    values = _compact(
        {
            "type": _choice(payload, "type", FinanceType.values(), required=adding),
            "amount": _number(
                payload,
                "amount",
                required=adding,
                positive=True,
                places=MONEY_PLACES,
                maximum=MAX_MONEY,
            ),
            "description": _text(payload, "description", required=adding, non_blank=True),
            "notes": _text(payload, "notes", required=False),
        }
    )
    return values if adding else _require_changes(values, FINANCE_EDITABLE)


def validate_inventory_payload(
    operation: MutationOperation, payload: dict[str, Any]
) -> dict[str, Any]:
    """Inventory add needs name, category and unit; quantity and price may not be negative."""
    if operation is MutationOperation.DELETE:
        return {}
    adding = operation is MutationOperation.ADD
    values = _compact(
        {
            "name": _text(payload, "name", required=adding, non_blank=True),
            "category": _choice(
                payload, "category", InventoryCategory.values(), required=adding
            ),
            "quantity": _number(
                payload,
                "quantity",
                required=False,
                non_negative=True,
                integer=True,
                maximum=MAX_QUANTITY,
            ),
            "unit": _text(payload, "unit", required=adding, non_blank=True),
            "description": _text(payload, "description", required=False),
            "purchase_date": _iso_date(payload, "purchase_date"),
            "price": _number(
                payload,
                "price",
                required=False,
                non_negative=True,
                places=MONEY_PLACES,
                maximum=MAX_MONEY,
            ),
        }
    )
    return values if adding else _require_changes(values, INVENTORY_EDITABLE)


def _group_count(group: dict[str, Any], field: str, maximum: int) -> int | None:
    return _number(
        group, field, required=False, positive=True, integer=True, maximum=maximum
    )


def _validate_groups(raw: Any) -> list[dict[str, Any]] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValidationException("groups must be a list", field="groups")
    groups = []
    for group in raw:
        if not isinstance(group, dict):
            raise ValidationException("each group must be an object", field="groups")
        cleaned = _compact(
            {
                "name": _text(group, "name", required=True),
                "capacity": _group_count(group, "capacity", MAX_CAPACITY),
                "ticket_count": _group_count(group, "ticket_count", MAX_TICKETS_PER_GROUP),
                "capacity_per_ticket": _group_count(
                    group, "capacity_per_ticket", MAX_CAPACITY
                ),
                "share_link": _text(group, "share_link", required=False),
                "checkin_img": _text(group, "checkin_img", required=False),
            }
        )
        if "capacity" not in cleaned:
            if "capacity_per_ticket" not in cleaned:
                raise ValidationException(
                    f"group '{cleaned['name']}' needs a capacity", field="capacity"
                )
            # Capacity is derived as capacity_per_ticket * ticket_count.
            derived = cleaned["capacity_per_ticket"] * cleaned.get("ticket_count", 1)
            if derived > MAX_CAPACITY:
                raise ValidationException(
                    f"capacity must not exceed {MAX_CAPACITY}", field="capacity"
                )
        groups.append(cleaned)
    return groups


def validate_event_payload(
    operation: MutationOperation, payload: dict[str, Any]
) -> dict[str, Any]:
    """Event add needs title and type; groups are only accepted on add."""
    if operation is MutationOperation.DELETE:
        return {}
    adding = operation is MutationOperation.ADD
    values = _compact(
        {
            "title": _text(payload, "title", required=adding, non_blank=True),
            "description": _text(payload, "description", required=False),
            "type": _choice(payload, "type", EventType.values(), required=adding),
            "status": _choice(payload, "status", EventStatus.values(), required=False),
            "registration_link": _text(payload, "registration_link", required=False),
        }
    )
    if adding:
        groups = _validate_groups(payload.get("groups"))
        if groups is not None:
            values["groups"] = groups
        return values
    return _require_changes(values, EVENT_EDITABLE)


PAYLOAD_VALIDATORS: dict[MutationDomain, PayloadValidator] = {
    MutationDomain.FINANCE: validate_finance_payload,
    MutationDomain.INVENTORY: validate_inventory_payload,
    MutationDomain.EVENT: validate_event_payload,
}
