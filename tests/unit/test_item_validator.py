"""Unit tests for item validation rules, groups and cross-field checks."""

from __future__ import annotations

import pytest

from itemservice.binding.engine import BindingEngine
from itemservice.binding.result import BindingResult
from itemservice.schemas.item import Item
from itemservice.validation.items import CREATE
from itemservice.validation.items import UPDATE
from itemservice.validation.items import build_item_validator
from itemservice.validation.items import total_price_violation


def _codes_by_field(result: BindingResult) -> dict[str, list[str]]:
    codes: dict[str, list[str]] = {}
    for error in result.field_errors():
        codes.setdefault(error.field, []).append(error.code)
    return codes


def test_rejected_submission_collects_field_and_object_errors(engine: BindingEngine) -> None:
    result = engine.bind({"itemName": "", "price": "500", "quantity": "10"}, Item, groups=(CREATE,))

    assert _codes_by_field(result) == {"itemName": ["required"], "price": ["range"]}
    assert result.field_error("price").arguments == (1000, 1000000)
    [global_error] = result.global_errors()
    assert global_error.code == "totalPriceMin"
    assert global_error.arguments == (10000, 5000)


def test_valid_submission_has_no_errors(engine: BindingEngine) -> None:
    result = engine.bind({"itemName": "Book", "price": "15000", "quantity": "3"}, Item, groups=(CREATE,))

    assert not result.has_errors()


@pytest.mark.parametrize(
    ("price", "quantity"),
    [(1000, 1), (1000, 9), (5000, 1), (9999, 1), (500, 10), (0, 0), (2000, 4)],
)
def test_low_total_price_appends_exactly_one_object_error(price: int, quantity: int) -> None:
    item = Item(item_name="Book", price=price, quantity=quantity)
    result = BindingResult(item)

    build_item_validator().validate(item, result, (CREATE,))

    [global_error] = result.global_errors()
    assert global_error.code == "totalPriceMin"
    assert global_error.arguments == (10000, price * quantity)


def test_total_price_check_needs_both_values() -> None:
    assert total_price_violation(Item(price=1000)) is None
    assert total_price_violation(Item(quantity=3)) is None
    assert total_price_violation(Item(price=1000, quantity=10)) is None
    assert total_price_violation(Item(price=1000, quantity=9)) == (10000, 9000)


def test_binding_failure_skips_field_rules_and_total_price(engine: BindingEngine) -> None:
    result = engine.bind({"itemName": "Book", "price": "15000", "quantity": "many"}, Item, groups=(CREATE,))

    [error] = result.field_errors()
    assert error.field == "quantity"
    assert error.binding_failure is True
    assert not result.has_global_errors()


def test_missing_values_are_reported_as_required_and_range(engine: BindingEngine) -> None:
    result = engine.bind({}, Item, groups=(CREATE,))

    assert _codes_by_field(result) == {
        "itemName": ["required"],
        "price": ["range"],
        "quantity": ["required"],
    }
    assert not result.has_global_errors()


def test_quantity_upper_bound_applies_only_to_create(engine: BindingEngine) -> None:
    raw = {"id": "1", "itemName": "Book", "price": "10000", "quantity": "10000"}

    created = engine.bind(raw, Item, groups=(CREATE,))
    updated = engine.bind(raw, Item, groups=(UPDATE,))

    assert _codes_by_field(created) == {"quantity": ["max"]}
    assert created.field_error("quantity").arguments == (9999,)
    assert not updated.has_errors()


def test_id_is_required_only_on_update(engine: BindingEngine) -> None:
    raw = {"itemName": "Book", "price": "15000", "quantity": "3"}

    created = engine.bind(raw, Item, groups=(CREATE,))
    updated = engine.bind(raw, Item, groups=(UPDATE,))

    assert not created.has_errors()
    assert _codes_by_field(updated) == {"id": ["required"]}


def test_untagged_rules_run_without_any_group(engine: BindingEngine) -> None:
    result = engine.bind({"itemName": "Book", "price": "10000", "quantity": "10000"}, Item)

    assert not result.has_errors()


def test_validating_a_valid_target_twice_adds_no_errors() -> None:
    item = Item(id=1, item_name="Book", price=15000, quantity=3)
    result = BindingResult(item)
    validator = build_item_validator()

    validator.validate(item, result, (CREATE,))
    validator.validate(item, result, (CREATE,))
    validator.validate(item, result, (UPDATE,))

    assert not result.has_errors()


def test_validator_supports_items_only() -> None:
    validator = build_item_validator()

    assert validator.supports(Item)
    assert not validator.supports(dict)
