"""Shared handling of bound forms for the service layer."""

from __future__ import annotations

from collections.abc import Collection
from collections.abc import Mapping
from typing import Any
import logging

from pydantic import BaseModel

from itemservice.binding.engine import BindingEngine
from itemservice.binding.engine import ValidatorMode
from itemservice.binding.errors import FieldError
from itemservice.binding.messages import MessageSource
from itemservice.binding.result import BindingResult
from itemservice.core.errors import FormValidationError
from itemservice.schemas.error import ErrorDetail

logger = logging.getLogger(__name__)

GLOBAL_ERROR_FIELD = "global"


def bind_and_validate(
    engine: BindingEngine,
    raw: Mapping[str, Any],
    target_type: type[BaseModel],
    *,
    groups: Collection[str] = (),
    locale: str | None = None,
) -> BindingResult:
    """Bind a form and make sure its validator ran, whatever the engine mode."""
    result = engine.bind(raw, target_type, groups=groups, locale=locale)
    if engine.mode is ValidatorMode.MANUAL:
        engine.validate(result, groups=groups)
    return result


def error_details(result: BindingResult, messages: MessageSource, locale: str | None) -> list[ErrorDetail]:
    """Resolve every error of a result into envelope details, in insertion order."""
    details: list[ErrorDetail] = []
    for error in result.all_errors():
        field = error.field if isinstance(error, FieldError) else GLOBAL_ERROR_FIELD
        details.append(ErrorDetail(field=field, issue=messages.resolve(error, locale), code=error.code))
    return details


def raise_if_rejected(
    result: BindingResult,
    messages: MessageSource,
    locale: str | None,
    *,
    message: str,
) -> None:
    """Raise a form error carrying resolved messages and the values to redisplay."""
    if not result.has_errors():
        return
    logger.info("errors = %r", result)
    raise FormValidationError(
        message=message,
        details=error_details(result, messages, locale),
        form=result.form_values(),
    )
