"""Item repositories: the interface, an in-memory default and a SQL implementation."""

from __future__ import annotations

from itertools import count
from threading import Lock
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker

from itemservice.db.base import session_scope
from itemservice.db.models.item import ItemRecord
from itemservice.schemas.item import Item


class ItemNotFoundError(LookupError):
    """Raised when updating an item id the repository does not hold."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class ItemRepository(Protocol):
    def find_all(self) -> list[Item]: ...

    def find_by_id(self, item_id: int) -> Item | None: ...

    def save(self, item: Item) -> Item: ...

    def update(self, item_id: int, item: Item) -> None: ...


class InMemoryItemRepository:
    """Dictionary-backed repository with sequential ids."""

    def __init__(self) -> None:
        self._store: dict[int, Item] = {}
        self._sequence = count(1)
        self._lock = Lock()

    def find_all(self) -> list[Item]:
        with self._lock:
            return [item.model_copy() for item in self._store.values()]

    def find_by_id(self, item_id: int) -> Item | None:
        with self._lock:
            item = self._store.get(item_id)
            return item.model_copy() if item is not None else None

    def save(self, item: Item) -> Item:
        with self._lock:
            saved = item.model_copy(update={"id": next(self._sequence)})
            self._store[saved.id] = saved
            return saved.model_copy()

    def update(self, item_id: int, item: Item) -> None:
        with self._lock:
            if item_id not in self._store:
                raise ItemNotFoundError(item_id)
            self._store[item_id] = self._store[item_id].model_copy(
                update={"item_name": item.item_name, "price": item.price, "quantity": item.quantity}
            )


def create_item(session: Session, *, item_name: str | None, price: int | None, quantity: int | None) -> ItemRecord:
    """Create and return an item row."""
    record = ItemRecord(item_name=item_name, price=price, quantity=quantity)
    session.add(record)
    session.flush()
    session.refresh(record)
    return record


def get_item(session: Session, item_id: int) -> ItemRecord | None:
    """Fetch an item row by id."""
    return session.get(ItemRecord, item_id)


def list_items(session: Session) -> list[ItemRecord]:
    """List item rows in id order."""
    return list(session.scalars(select(ItemRecord).order_by(ItemRecord.id)))


def update_item(
    session: Session,
    record: ItemRecord,
    *,
    item_name: str | None,
    price: int | None,
    quantity: int | None,
) -> ItemRecord:
    """Update mutable item fields."""
    record.item_name = item_name
    record.price = price
    record.quantity = quantity
    session.flush()
    return record


def _to_item(record: ItemRecord) -> Item:
    return Item(id=record.id, item_name=record.item_name, price=record.price, quantity=record.quantity)


class SqlItemRepository:
    """Repository over the ``items`` table; one transaction per call."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_all(self) -> list[Item]:
        with session_scope(self._session_factory) as session:
            return [_to_item(record) for record in list_items(session)]

    def find_by_id(self, item_id: int) -> Item | None:
        with session_scope(self._session_factory) as session:
            record = get_item(session, item_id)
            return _to_item(record) if record is not None else None

    def save(self, item: Item) -> Item:
        with session_scope(self._session_factory) as session:
            record = create_item(session, item_name=item.item_name, price=item.price, quantity=item.quantity)
            return _to_item(record)

    def update(self, item_id: int, item: Item) -> None:
        with session_scope(self._session_factory) as session:
            record = get_item(session, item_id)
            if record is None:
                raise ItemNotFoundError(item_id)
            update_item(session, record, item_name=item.item_name, price=item.price, quantity=item.quantity)
