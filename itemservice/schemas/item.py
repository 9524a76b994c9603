"""Pydantic schemas for item forms and responses."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Item(BaseModel):
    """Item bound from the add/edit forms and stored by the repository.

    Every field may be absent while a submitted form is being bound and
    validated.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int | None = None
    item_name: str | None = Field(default=None, alias="itemName")
    price: int | None = None
    quantity: int | None = None


class ItemListResponse(BaseModel):
    """List response envelope for items."""

    items: list[Item]
