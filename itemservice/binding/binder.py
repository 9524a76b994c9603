"""Populate target models from raw form values without raising on bad input."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any
import logging

from pydantic import BaseModel
from pydantic import TypeAdapter
from pydantic import ValidationError

from itemservice.binding.codes import MessageCodesResolver
from itemservice.binding.errors import FieldError
from itemservice.binding.result import BindingResult
from itemservice.binding.shape import FieldSpec
from itemservice.binding.shape import shape_of
from itemservice.formatting.number import NumberFormatter

logger = logging.getLogger(__name__)

TYPE_MISMATCH_CODE = "typeMismatch"

_NUMERIC_TYPES = (int, float, Decimal)

# Integer fields hold 32-bit signed values, matching the items table columns.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class DataBinder:
    """Bind a mapping of form values onto a fresh instance of a pydantic model.

    Conversion failures are recorded as field errors flagged as binding
    failures; the field keeps its default value and the raw string is kept as
    the rejected value.
    """

    def __init__(
        self,
        target_type: type[BaseModel],
        object_name: str | None = None,
        *,
        locale: str | None = None,
        formatter: NumberFormatter | None = None,
        codes_resolver: MessageCodesResolver | None = None,
    ) -> None:
        self._target_type = target_type
        self._shape = shape_of(target_type)
        self._object_name = object_name
        self._locale = locale
        self._formatter = formatter or NumberFormatter()
        self._codes_resolver = codes_resolver or MessageCodesResolver()

    def bind(self, raw: Mapping[str, Any]) -> BindingResult:
        """Create the target, convert every submitted field and return the result."""
        target = self._target_type.model_construct()
        result = BindingResult(
            target,
            self._object_name,
            raw_values=raw,
            codes_resolver=self._codes_resolver,
        )

        for spec in self._shape.fields:
            present, raw_value = _lookup(raw, spec)
            if not present:
                continue
            try:
                value = self._convert(spec, raw_value)
            except (ValueError, TypeError, ValidationError) as exc:
                logger.debug("Binding failed for field=%s value=%r: %s", spec.form_name, raw_value, exc)
                result.add_error(self._type_mismatch(result, spec, raw_value))
                continue
            setattr(target, spec.attribute, value)

        return result

    def _convert(self, spec: FieldSpec, raw_value: Any) -> Any:
        if raw_value is None:
            return None
        value_type = spec.value_type

        if value_type is str:
            return str(raw_value)

        text = str(raw_value)
        if not text.strip():
            return None

        if value_type in _NUMERIC_TYPES:
            number = self._formatter.parse(text, self._locale)
            if value_type is int:
                if not isinstance(number, int):
                    raise ValueError(f"Expected a whole number, got {text!r}")
                if not INT_MIN <= number <= INT_MAX:
                    raise ValueError(f"Whole number out of range: {text!r}")
                return number
            return value_type(str(number)) if value_type is Decimal else float(number)

        return TypeAdapter(value_type).validate_python(text)

    def _type_mismatch(self, result: BindingResult, spec: FieldSpec, raw_value: Any) -> FieldError:
        return FieldError(
            object_name=result.object_name,
            field=spec.form_name,
            rejected_value=raw_value,
            binding_failure=True,
            codes=self._codes_resolver.resolve_field_codes(
                TYPE_MISMATCH_CODE,
                result.object_name,
                spec.form_name,
                spec.type_name,
            ),
            arguments=(spec.form_name,),
            default_message=f"Failed to convert value {raw_value!r} to required type {spec.type_name}",
        )


def _lookup(raw: Mapping[str, Any], spec: FieldSpec) -> tuple[bool, Any]:
    for key in (spec.form_name, spec.attribute):
        if key in raw:
            return True, raw[key]
    return False, None
