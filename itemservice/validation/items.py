"""Validation rules for items submitted through the add and edit forms."""

from __future__ import annotations

from typing import Any

from itemservice.binding.validators import FieldRule
from itemservice.binding.validators import ObjectRule
from itemservice.binding.validators import RuleSetValidator
from itemservice.schemas.item import Item

CREATE = "create"
UPDATE = "update"

MIN_PRICE = 1_000
MAX_PRICE = 1_000_000
MAX_QUANTITY = 9_999
MIN_TOTAL_PRICE = 10_000


def _has_text(value: Any) -> bool:
    return value is not None and bool(str(value).strip())


def _is_present(value: Any) -> bool:
    return value is not None


def _price_in_range(value: Any) -> bool:
    return value is not None and MIN_PRICE <= value <= MAX_PRICE


def _quantity_within_max(value: Any) -> bool:
    # Missing quantity is reported by the required rule.
    return value is None or value <= MAX_QUANTITY


def total_price_violation(item: Item) -> tuple[int, int] | None:
    """Return ``(minimum, actual)`` when price * quantity is below the minimum."""
    if item.price is None or item.quantity is None:
        return None
    total = item.price * item.quantity
    if total < MIN_TOTAL_PRICE:
        return (MIN_TOTAL_PRICE, total)
    return None


ITEM_RULES = (
    FieldRule("id", _is_present, "required", groups=frozenset({UPDATE})),
    FieldRule("itemName", _has_text, "required"),
    FieldRule("price", _price_in_range, "range", (MIN_PRICE, MAX_PRICE)),
    FieldRule("quantity", _is_present, "required"),
    FieldRule("quantity", _quantity_within_max, "max", (MAX_QUANTITY,), groups=frozenset({CREATE})),
    ObjectRule("totalPriceMin", total_price_violation),
)


def build_item_validator() -> RuleSetValidator:
    return RuleSetValidator(Item, ITEM_RULES)
