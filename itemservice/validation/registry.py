"""Startup registration of every validator the service uses."""

from __future__ import annotations

from itemservice.binding.validators import ValidatorRegistry
from itemservice.validation.items import build_item_validator
from itemservice.validation.login import LoginFormValidator


def build_validator_registry() -> ValidatorRegistry:
    """Register validators and freeze the registry for read-only use."""
    registry = ValidatorRegistry()
    registry.register(build_item_validator())
    registry.register(LoginFormValidator())
    return registry.freeze()
