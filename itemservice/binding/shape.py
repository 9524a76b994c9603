"""Field layout of bindable target models."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import NoneType
from types import UnionType
from typing import Any
from typing import Union
from typing import get_args
from typing import get_origin

from pydantic import BaseModel

from itemservice.binding.errors import TargetShapeError


@dataclass(frozen=True)
class FieldSpec:
    """One bindable field: its attribute, its form name and its value type."""

    attribute: str
    form_name: str
    value_type: Any

    @property
    def type_name(self) -> str:
        return getattr(self.value_type, "__name__", str(self.value_type))


@dataclass(frozen=True)
class TargetShape:
    """Bindable fields of a target model, addressable by form name or attribute."""

    target_type: type[BaseModel]
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        """Return the field spec for a form name or attribute name."""
        for spec in self.fields:
            if name in (spec.form_name, spec.attribute):
                return spec
        raise TargetShapeError(self.target_type, name)

    def has_field(self, name: str) -> bool:
        return any(name in (spec.form_name, spec.attribute) for spec in self.fields)


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, UnionType):
        members = [arg for arg in get_args(annotation) if arg is not NoneType]
        if len(members) == 1:
            return members[0]
    return annotation


@lru_cache(maxsize=None)
def shape_of(target_type: type) -> TargetShape:
    """Describe the bindable fields of a pydantic model class."""
    if not (isinstance(target_type, type) and issubclass(target_type, BaseModel)):
        raise TypeError(f"Binding targets must be pydantic models, got {target_type!r}")

    fields = tuple(
        FieldSpec(
            attribute=name,
            form_name=info.alias or name,
            value_type=_unwrap_optional(info.annotation),
        )
        for name, info in target_type.model_fields.items()
    )
    return TargetShape(target_type=target_type, fields=fields)
