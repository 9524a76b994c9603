"""Error records collected during binding and validation, plus fatal binding errors."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, kw_only=True)
class ObjectError:
    """Validation failure attributed to the whole target object."""

    object_name: str
    codes: tuple[str, ...] = ()
    arguments: tuple[Any, ...] = ()
    default_message: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "codes", tuple(self.codes))
        object.__setattr__(self, "arguments", tuple(self.arguments))

    @property
    def code(self) -> str | None:
        """Least specific code of the chain, i.e. the short error code."""
        return self.codes[-1] if self.codes else None

    @property
    def is_global(self) -> bool:
        return True


@dataclass(frozen=True, kw_only=True)
class FieldError(ObjectError):
    """Binding or validation failure attributed to one field of the target."""

    field: str
    rejected_value: Any = None
    binding_failure: bool = False

    @property
    def is_global(self) -> bool:
        return False


class BindingConfigurationError(Exception):
    """Base class for binding errors caused by a defect, not by user input."""


class TargetShapeError(BindingConfigurationError):
    """Raised when a binder or validator references a field the target does not have."""

    def __init__(self, target_type: type, field_name: str) -> None:
        super().__init__(f"{target_type.__name__} has no field named {field_name!r}")
        self.target_type = target_type
        self.field_name = field_name


class MessageResolutionError(BindingConfigurationError):
    """Raised when no catalog entry and no default message exist for an error."""

    def __init__(self, codes: Sequence[str], locale: str | None = None) -> None:
        super().__init__(f"No message found under codes {list(codes)} for locale {locale!r}")
        self.codes = tuple(codes)
        self.locale = locale
