"""Model module imports for SQLAlchemy metadata registration."""

from itemservice.db.models.item import Base
from itemservice.db.models.item import ItemRecord

__all__ = [
    "Base",
    "ItemRecord",
]
