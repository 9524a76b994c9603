"""Process-wide collaborators exposed as FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache
import logging

from fastapi import Request

from itemservice.binding.engine import BindingEngine
from itemservice.binding.messages import MessageSource
from itemservice.core.config import get_settings
from itemservice.db.base import get_engine
from itemservice.db.base import get_session_factory
from itemservice.db.models.item import Base
from itemservice.db.repository.items import InMemoryItemRepository
from itemservice.db.repository.items import ItemRepository
from itemservice.db.repository.items import SqlItemRepository
from itemservice.formatting.locales import normalize_locale
from itemservice.formatting.locales import parse_accept_language
from itemservice.formatting.number import NumberFormatter
from itemservice.session.manager import SessionManager
from itemservice.session.store import InMemorySessionStore
from itemservice.validation.catalog import CATALOGS
from itemservice.validation.registry import build_validator_registry

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_number_formatter() -> NumberFormatter:
    return NumberFormatter(default_locale=get_settings().default_locale)


@lru_cache(maxsize=1)
def get_message_source() -> MessageSource:
    """Build the read-only message catalog once per process."""
    settings = get_settings()
    return MessageSource(
        CATALOGS,
        default_locale=settings.default_locale,
        formatter=get_number_formatter(),
    )


@lru_cache(maxsize=1)
def get_binding_engine() -> BindingEngine:
    settings = get_settings()
    logger.info("Creating binding engine with settings=%s", settings.safe_for_logging())
    return BindingEngine(
        build_validator_registry(),
        mode=settings.validator_mode,
        formatter=get_number_formatter(),
    )


@lru_cache(maxsize=1)
def get_item_repository() -> ItemRepository:
    settings = get_settings()
    if settings.repository_backend == "sql":
        Base.metadata.create_all(get_engine())
        return SqlItemRepository(get_session_factory())
    return InMemoryItemRepository()


@lru_cache(maxsize=1)
def get_session_manager() -> SessionManager:
    store = InMemorySessionStore(idle_timeout_seconds=get_settings().session_idle_timeout_seconds)
    return SessionManager(store)


def get_request_locale(request: Request) -> str:
    """Pick the locale from Accept-Language, else the configured default."""
    return parse_accept_language(request.headers.get("accept-language")) or (
        normalize_locale(get_settings().default_locale) or "en"
    )
