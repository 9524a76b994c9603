"""Service helpers for item form operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
import logging

from itemservice.binding.engine import BindingEngine
from itemservice.binding.messages import MessageSource
from itemservice.core.errors import NotFoundError
from itemservice.db.repository.items import ItemRepository
from itemservice.schemas.item import Item
from itemservice.services.forms import bind_and_validate
from itemservice.services.forms import raise_if_rejected
from itemservice.validation.items import CREATE
from itemservice.validation.items import UPDATE

logger = logging.getLogger(__name__)


def list_items_service(repository: ItemRepository) -> list[Item]:
    """List stored items."""
    return repository.find_all()


def get_item_service(repository: ItemRepository, item_id: int) -> Item:
    """Fetch an item or raise not found."""
    item = repository.find_by_id(item_id)
    if item is None:
        raise NotFoundError(message="Item not found")
    return item


def add_item_service(
    raw: Mapping[str, Any],
    *,
    repository: ItemRepository,
    engine: BindingEngine,
    messages: MessageSource,
    locale: str | None = None,
) -> Item:
    """Bind and validate a submitted add form, then persist the item."""
    result = bind_and_validate(engine, raw, Item, groups=(CREATE,), locale=locale)
    raise_if_rejected(result, messages, locale, message="Item validation failed")

    saved = repository.save(result.target)
    logger.info("Saved item id=%s", saved.id)
    return saved


def edit_item_service(
    item_id: int,
    raw: Mapping[str, Any],
    *,
    repository: ItemRepository,
    engine: BindingEngine,
    messages: MessageSource,
    locale: str | None = None,
) -> Item:
    """Bind and validate a submitted edit form, then update the stored item."""
    get_item_service(repository, item_id)
    result = bind_and_validate(engine, raw, Item, groups=(UPDATE,), locale=locale)
    raise_if_rejected(result, messages, locale, message="Item validation failed")

    repository.update(item_id, result.target)
    logger.info("Updated item id=%s", item_id)
    return get_item_service(repository, item_id)
