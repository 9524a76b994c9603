"""Per-request collection of binding and validation errors."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from itemservice.binding.codes import MessageCodesResolver
from itemservice.binding.errors import FieldError
from itemservice.binding.errors import ObjectError
from itemservice.binding.shape import FieldSpec
from itemservice.binding.shape import TargetShape
from itemservice.binding.shape import shape_of


def default_object_name(target_type: type) -> str:
    """Return the conventional object name for a type, e.g. ``LoginForm`` -> ``loginForm``."""
    name = target_type.__name__
    return name[:1].lower() + name[1:]


class BindingResult:
    """Ordered field and object errors for exactly one bound target.

    The result also keeps the raw submitted values so a rejected form can be
    shown again with whatever the user typed, including values that could not
    be converted.
    """

    def __init__(
        self,
        target: BaseModel,
        object_name: str | None = None,
        *,
        raw_values: Mapping[str, Any] | None = None,
        codes_resolver: MessageCodesResolver | None = None,
    ) -> None:
        self._target = target
        self._object_name = object_name or default_object_name(type(target))
        self._shape: TargetShape = shape_of(type(target))
        self._raw_values = dict(raw_values or {})
        self._codes_resolver = codes_resolver or MessageCodesResolver()
        self._errors: list[ObjectError] = []

    @property
    def target(self) -> BaseModel:
        return self._target

    @property
    def object_name(self) -> str:
        return self._object_name

    @property
    def shape(self) -> TargetShape:
        return self._shape

    @property
    def error_count(self) -> int:
        return len(self._errors)

    def add_error(self, error: ObjectError) -> None:
        """Append a prebuilt error, checking that field errors name a real field."""
        if isinstance(error, FieldError):
            self._shape.field(error.field)
        self._errors.append(error)

    def reject(
        self,
        error_code: str,
        arguments: Sequence[Any] = (),
        default_message: str | None = None,
    ) -> None:
        """Register an object error for a short code, expanding its code chain."""
        self.add_error(
            ObjectError(
                object_name=self._object_name,
                codes=self._codes_resolver.resolve_object_codes(error_code, self._object_name),
                arguments=tuple(arguments),
                default_message=default_message,
            )
        )

    def reject_value(
        self,
        field: str,
        error_code: str,
        arguments: Sequence[Any] = (),
        default_message: str | None = None,
    ) -> None:
        """Register a field error for a short code, expanding its code chain."""
        spec = self._shape.field(field)
        self.add_error(
            FieldError(
                object_name=self._object_name,
                field=spec.form_name,
                rejected_value=self._rejected_value(spec),
                binding_failure=False,
                codes=self._codes_resolver.resolve_field_codes(
                    error_code,
                    self._object_name,
                    spec.form_name,
                    spec.type_name,
                ),
                arguments=tuple(arguments),
                default_message=default_message,
            )
        )

    def has_errors(self) -> bool:
        return bool(self._errors)

    def has_global_errors(self) -> bool:
        return any(error.is_global for error in self._errors)

    def has_field_errors(self, field: str | None = None) -> bool:
        return bool(self.field_errors(field))

    def all_errors(self) -> tuple[ObjectError, ...]:
        return tuple(self._errors)

    def global_errors(self) -> list[ObjectError]:
        return [error for error in self._errors if error.is_global]

    def field_errors(self, field: str | None = None) -> list[FieldError]:
        """Return field errors in insertion order, optionally for one field."""
        errors = [error for error in self._errors if isinstance(error, FieldError)]
        if field is None:
            return errors
        form_name = self._shape.field(field).form_name
        return [error for error in errors if error.field == form_name]

    def field_error(self, field: str) -> FieldError | None:
        """Return the first error recorded for a field, if any."""
        errors = self.field_errors(field)
        return errors[0] if errors else None

    def has_binding_failure(self, field: str) -> bool:
        return any(error.binding_failure for error in self.field_errors(field))

    def get_field_value(self, field: str) -> Any:
        """Return the value to display for a field.

        When the field was rejected this is the rejected value, so a value
        that failed conversion comes back exactly as submitted.
        """
        error = self.field_error(field)
        if error is not None:
            return error.rejected_value
        return self.get_target_value(field)

    def _rejected_value(self, spec: FieldSpec) -> Any:
        # A blank submission binds to None; keep the submitted text for redisplay.
        value = self.get_field_value(spec.form_name)
        if value is None:
            for key in (spec.form_name, spec.attribute):
                if key in self._raw_values:
                    return self._raw_values[key]
        return value

    def get_target_value(self, field: str) -> Any:
        spec: FieldSpec = self._shape.field(field)
        return getattr(self._target, spec.attribute)

    def raw_values(self) -> dict[str, Any]:
        return dict(self._raw_values)

    def form_values(self) -> dict[str, Any]:
        """Return display values for every field, keyed by form name."""
        return {spec.form_name: self.get_field_value(spec.form_name) for spec in self._shape.fields}

    def __repr__(self) -> str:
        summary = f"BindingResult(object_name={self._object_name!r}, errors={len(self._errors)}"
        if not self._errors:
            return summary + ")"
        rendered = "; ".join(_describe(error) for error in self._errors)
        return f"{summary}: {rendered})"


def _describe(error: ObjectError) -> str:
    if isinstance(error, FieldError):
        return (
            f"field {error.field!r} rejected value {error.rejected_value!r}"
            f" codes={list(error.codes)} arguments={list(error.arguments)}"
        )
    return f"object {error.object_name!r} codes={list(error.codes)} arguments={list(error.arguments)}"
