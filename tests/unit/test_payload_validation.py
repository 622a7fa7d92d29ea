"""Gateway payload validators: required fields, number rules, cleaning."""

import pytest

from clubops.application.use_cases.gateways.validation import (
    validate_event_payload,
    validate_finance_payload,
    validate_inventory_payload,
)
from clubops.domain.enums import MutationOperation
from clubops.domain.exceptions import ValidationException

ADD = MutationOperation.ADD
EDIT = MutationOperation.EDIT
DELETE = MutationOperation.DELETE


def _field_of(exc_info: pytest.ExceptionInfo[ValidationException]) -> str | None:
    return exc_info.value.details.get("field")


def test_finance_add_cleans_payload() -> None:
    cleaned = validate_finance_payload(
        ADD,
        {"type": "expense", "amount": "50", "description": "  tape ", "extra": "dropped"},
    )
    assert cleaned == {"type": "expense", "amount": 50, "description": "tape"}


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"amount": 5, "description": "x"}, "type"),
        ({"type": "gift", "amount": 5, "description": "x"}, "type"),
        ({"type": "income", "description": "x"}, "amount"),
        ({"type": "income", "amount": 0, "description": "x"}, "amount"),
        ({"type": "income", "amount": -3, "description": "x"}, "amount"),
        ({"type": "income", "amount": "lots", "description": "x"}, "amount"),
        ({"type": "income", "amount": True, "description": "x"}, "amount"),
        ({"type": "income", "amount": float("nan"), "description": "x"}, "amount"),
        ({"type": "income", "amount": 5, "description": "   "}, "description"),
        ({"type": "income", "amount": 5}, "description"),
    ],
)
def test_finance_add_rejects(payload: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_finance_payload(ADD, payload)
    assert _field_of(exc_info) == field


def test_finance_edit_allows_partial_payload() -> None:
    assert validate_finance_payload(EDIT, {"notes": "receipt lost"}) == {"notes": "receipt lost"}


def test_finance_edit_needs_at_least_one_field() -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_finance_payload(EDIT, {"unknown": 1})
    assert _field_of(exc_info) == "payload"


def test_finance_edit_still_checks_values() -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_finance_payload(EDIT, {"amount": -1})
    assert _field_of(exc_info) == "amount"


def test_delete_payload_is_empty() -> None:
    assert validate_finance_payload(DELETE, {"anything": 1}) == {}
    assert validate_inventory_payload(DELETE, {}) == {}
    assert validate_event_payload(DELETE, {}) == {}


def test_inventory_add() -> None:
    cleaned = validate_inventory_payload(
        ADD,
        {
            "name": "Shuttlecocks",
            "category": "consumable",
            "quantity": 12.0,
            "unit": "tube",
            "purchase_date": "2025-03-01",
            "price": 0,
        },
    )
    assert cleaned == {
        "name": "Shuttlecocks",
        "category": "consumable",
        "quantity": 12,
        "unit": "tube",
        "purchase_date": "2025-03-01",
        "price": 0,
    }


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"category": "consumable", "unit": "box"}, "name"),
        ({"name": "Net", "category": "furniture", "unit": "pc"}, "category"),
        ({"name": "Net", "category": "fixed_asset"}, "unit"),
        ({"name": "Net", "category": "fixed_asset", "unit": "pc", "quantity": -1}, "quantity"),
        ({"name": "Net", "category": "fixed_asset", "unit": "pc", "quantity": 1.5}, "quantity"),
        ({"name": "Net", "category": "fixed_asset", "unit": "pc", "price": -0.01}, "price"),
        (
            {"name": "Net", "category": "fixed_asset", "unit": "pc", "purchase_date": "03/01/2025"},
            "purchase_date",
        ),
    ],
)
def test_inventory_add_rejects(payload: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_inventory_payload(ADD, payload)
    assert _field_of(exc_info) == field


def test_event_add_with_groups() -> None:
    cleaned = validate_event_payload(
        ADD,
        {
            "title": "Spring doubles",
            "type": "competition",
            "groups": [
                {"name": "A", "capacity": 8},
                {"name": "B", "ticket_count": 4, "capacity_per_ticket": 2},
            ],
        },
    )
    assert cleaned["title"] == "Spring doubles"
    assert cleaned["groups"] == [
        {"name": "A", "capacity": 8},
        {"name": "B", "ticket_count": 4, "capacity_per_ticket": 2},
    ]


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"type": "other"}, "title"),
        ({"title": "x", "type": "party"}, "type"),
        ({"title": "x", "type": "other", "status": "cancelled"}, "status"),
        ({"title": "x", "type": "other", "groups": "A,B"}, "groups"),
        ({"title": "x", "type": "other", "groups": [{"capacity": 3}]}, "name"),
        ({"title": "x", "type": "other", "groups": [{"name": "A"}]}, "capacity"),
        ({"title": "x", "type": "other", "groups": [{"name": "A", "capacity": 0}]}, "capacity"),
    ],
)
def test_event_add_rejects(payload: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_event_payload(ADD, payload)
    assert _field_of(exc_info) == field


def test_event_edit_ignores_groups() -> None:
    cleaned = validate_event_payload(EDIT, {"status": "ended", "groups": [{"name": "A"}]})
    assert cleaned == {"status": "ended"}


@pytest.mark.parametrize(
    "amount",
    [0.001, "12.345", 1e15, 10_000_000_000, "9999999999.999"],
)
def test_finance_amount_must_fit_money_column(amount) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_finance_payload(
            ADD, {"type": "income", "amount": amount, "description": "dues"}
        )
    assert _field_of(exc_info) == "amount"


@pytest.mark.parametrize("amount", [0.01, "12.5", 9_999_999_999.99])
def test_finance_amount_within_money_column(amount) -> None:
    cleaned = validate_finance_payload(
        ADD, {"type": "income", "amount": amount, "description": "dues"}
    )
    assert cleaned["amount"] == float(amount)


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"price": 0.005}, "price"),
        ({"price": 1e12}, "price"),
        ({"quantity": 10**9}, "quantity"),
    ],
)
def test_inventory_numbers_bounded(payload: dict, field: str) -> None:
    base = {"name": "Net", "category": "fixed_asset", "unit": "pc"}
    with pytest.raises(ValidationException) as exc_info:
        validate_inventory_payload(ADD, {**base, **payload})
    assert _field_of(exc_info) == field


@pytest.mark.parametrize(
    ("group", "field"),
    [
        ({"name": "A", "capacity": 10**9}, "capacity"),
        ({"name": "A", "ticket_count": 10**9, "capacity_per_ticket": 2}, "ticket_count"),
        ({"name": "A", "capacity_per_ticket": 10**6}, "capacity_per_ticket"),
        ({"name": "A", "ticket_count": 500, "capacity_per_ticket": 1000}, "capacity"),
    ],
)
def test_event_group_counts_bounded(group: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_event_payload(ADD, {"title": "x", "type": "other", "groups": [group]})
    assert _field_of(exc_info) == field


def test_event_group_at_ticket_limit_accepted() -> None:
    cleaned = validate_event_payload(
        ADD,
        {
            "title": "x",
            "type": "other",
            "groups": [{"name": "A", "ticket_count": 500, "capacity_per_ticket": 2}],
        },
    )
    assert cleaned["groups"][0]["ticket_count"] == 500


@pytest.mark.parametrize(
    ("validate", "payload", "field"),
    [
        (validate_finance_payload, {"description": "   "}, "description"),
        (validate_finance_payload, {"description": ""}, "description"),
        (validate_inventory_payload, {"name": " "}, "name"),
        (validate_inventory_payload, {"unit": ""}, "unit"),
        (validate_event_payload, {"title": "\t"}, "title"),
    ],
)
def test_edit_cannot_blank_fields_required_on_add(validate, payload: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate(EDIT, payload)
    assert _field_of(exc_info) == field


def test_edit_may_clear_optional_text() -> None:
    assert validate_finance_payload(EDIT, {"notes": "  "}) == {"notes": ""}
