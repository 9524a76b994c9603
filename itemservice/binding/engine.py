"""Bind-then-validate entry point used by the service layer."""

from __future__ import annotations

from collections.abc import Collection
from collections.abc import Mapping
from enum import Enum
from typing import Any
import logging

from pydantic import BaseModel

from itemservice.binding.binder import DataBinder
from itemservice.binding.codes import MessageCodesResolver
from itemservice.binding.result import BindingResult
from itemservice.binding.validators import ValidatorRegistry
from itemservice.formatting.number import NumberFormatter

logger = logging.getLogger(__name__)


class ValidatorMode(str, Enum):
    AUTO = "auto"
    MANUAL = "manual"


class BindingEngine:
    """Bind raw form values and, in ``auto`` mode, run the matching validator.

    In ``manual`` mode :meth:`bind` only converts values and callers run
    :meth:`validate` (or a validator of their choice) themselves.
    """

    def __init__(
        self,
        registry: ValidatorRegistry,
        *,
        mode: ValidatorMode | str = ValidatorMode.AUTO,
        formatter: NumberFormatter | None = None,
        codes_resolver: MessageCodesResolver | None = None,
    ) -> None:
        self._registry = registry
        self._mode = ValidatorMode(mode)
        self._formatter = formatter or NumberFormatter()
        self._codes_resolver = codes_resolver or MessageCodesResolver()

    @property
    def mode(self) -> ValidatorMode:
        return self._mode

    @property
    def registry(self) -> ValidatorRegistry:
        return self._registry

    def bind(
        self,
        raw: Mapping[str, Any],
        target_type: type[BaseModel],
        *,
        object_name: str | None = None,
        groups: Collection[str] = (),
        locale: str | None = None,
    ) -> BindingResult:
        binder = DataBinder(
            target_type,
            object_name,
            locale=locale,
            formatter=self._formatter,
            codes_resolver=self._codes_resolver,
        )
        result = binder.bind(raw)
        if self._mode is ValidatorMode.AUTO:
            self.validate(result, groups=groups)
        return result

    def validate(self, result: BindingResult, *, groups: Collection[str] = ()) -> None:
        """Run the first registered validator supporting the bound target."""
        validator = self._registry.find(type(result.target))
        if validator is None:
            return
        validator.validate(result.target, result, groups)
        logger.debug(
            "Validated %s with groups=%s errors=%d",
            result.object_name,
            sorted(groups),
            result.error_count,
        )
