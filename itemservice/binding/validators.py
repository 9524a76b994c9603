"""Validator capability, rule sets with group tags, and the validator registry."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Collection
from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from typing import Protocol
from typing import runtime_checkable
import logging

from itemservice.binding.result import BindingResult

logger = logging.getLogger(__name__)


@runtime_checkable
class Validator(Protocol):
    """Anything that can check a target and append errors to its binding result."""

    def supports(self, target_type: type) -> bool: ...

    def validate(self, target: Any, errors: BindingResult, groups: Collection[str] = ()) -> None: ...


def reject_if_empty_or_whitespace(
    errors: BindingResult,
    field: str,
    error_code: str,
    arguments: Sequence[Any] = (),
    default_message: str | None = None,
) -> None:
    """Reject a field whose value is missing or only whitespace."""
    value = errors.get_target_value(field)
    if value is None or not str(value).strip():
        errors.reject_value(field, error_code, arguments, default_message)


def _applies(rule_groups: frozenset[str], groups: Collection[str]) -> bool:
    if not rule_groups:
        return True
    return not rule_groups.isdisjoint(groups)


@dataclass(frozen=True)
class FieldRule:
    """A single-field check: ``predicate(value)`` returns True when the value is valid.

    Rules without groups always run. Grouped rules run only when one of their
    groups is requested.
    """

    field: str
    predicate: Callable[[Any], bool]
    code: str
    arguments: tuple[Any, ...] = ()
    groups: frozenset[str] = frozenset()
    default_message: str | None = None

    def applies_to(self, groups: Collection[str]) -> bool:
        return _applies(self.groups, groups)


@dataclass(frozen=True)
class ObjectRule:
    """A cross-field check.

    ``check(target)`` returns the message arguments of a violation, or None
    when the target satisfies the rule.
    """

    code: str
    check: Callable[[Any], Sequence[Any] | None]
    groups: frozenset[str] = frozenset()
    default_message: str | None = None

    def applies_to(self, groups: Collection[str]) -> bool:
        return _applies(self.groups, groups)


Rule = FieldRule | ObjectRule


class RuleSetValidator:
    """Validator built from an explicit list of field and object rules.

    Field rules are skipped for fields whose value could not be bound, so a
    conversion failure is not reported twice.
    """

    def __init__(self, target_type: type, rules: Iterable[Rule]) -> None:
        self._target_type = target_type
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def supports(self, target_type: type) -> bool:
        return isinstance(target_type, type) and issubclass(target_type, self._target_type)

    def validate(self, target: Any, errors: BindingResult, groups: Collection[str] = ()) -> None:
        for rule in self._rules:
            if not rule.applies_to(groups):
                continue
            if isinstance(rule, FieldRule):
                self._apply_field_rule(rule, errors)
            else:
                self._apply_object_rule(rule, target, errors)

    def _apply_field_rule(self, rule: FieldRule, errors: BindingResult) -> None:
        if errors.has_binding_failure(rule.field):
            return
        value = errors.get_target_value(rule.field)
        if not rule.predicate(value):
            errors.reject_value(rule.field, rule.code, rule.arguments, rule.default_message)

    def _apply_object_rule(self, rule: ObjectRule, target: Any, errors: BindingResult) -> None:
        arguments = rule.check(target)
        if arguments is not None:
            errors.reject(rule.code, tuple(arguments), rule.default_message)


class ValidatorRegistry:
    """Process-wide validator registrations, frozen once startup is done."""

    def __init__(self, validators: Iterable[Validator] = ()) -> None:
        self._validators: list[Validator] = []
        self._frozen = False
        for validator in validators:
            self.register(validator)

    def register(self, validator: Validator) -> None:
        if self._frozen:
            raise RuntimeError("Validator registry is frozen; register validators at startup")
        if not isinstance(validator, Validator):
            raise TypeError(f"{validator!r} does not implement supports() and validate()")
        self._validators.append(validator)

    def freeze(self) -> ValidatorRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find(self, target_type: type) -> Validator | None:
        """Return the first registered validator that supports the type."""
        for validator in self._validators:
            if validator.supports(target_type):
                return validator
        logger.debug("No validator registered for %s", getattr(target_type, "__name__", target_type))
        return None

    def __len__(self) -> int:
        return len(self._validators)
