"""Validator for the session login form."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from itemservice.binding.result import BindingResult
from itemservice.binding.validators import reject_if_empty_or_whitespace
from itemservice.schemas.session import LoginForm


class LoginFormValidator:
    """Require a login id and a display name. Credentials are not checked here."""

    def supports(self, target_type: type) -> bool:
        return isinstance(target_type, type) and issubclass(target_type, LoginForm)

    def validate(self, target: Any, errors: BindingResult, groups: Collection[str] = ()) -> None:
        reject_if_empty_or_whitespace(errors, "loginId", "required")
        reject_if_empty_or_whitespace(errors, "name", "required")
