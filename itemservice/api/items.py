"""Item form routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi import status
from fastapi.responses import RedirectResponse

from itemservice.api.forms import read_form
from itemservice.binding.engine import BindingEngine
from itemservice.binding.messages import MessageSource
from itemservice.core.dependencies import get_binding_engine
from itemservice.core.dependencies import get_item_repository
from itemservice.core.dependencies import get_message_source
from itemservice.core.dependencies import get_request_locale
from itemservice.db.repository.items import ItemRepository
from itemservice.schemas.item import Item
from itemservice.schemas.item import ItemListResponse
from itemservice.services.items import add_item_service
from itemservice.services.items import edit_item_service
from itemservice.services.items import get_item_service
from itemservice.services.items import list_items_service

ITEMS_PATH = "/validation/items"

router = APIRouter(prefix=ITEMS_PATH, tags=["items"])


def _item_redirect(item_id: int, *, with_status: bool) -> RedirectResponse:
    url = f"{ITEMS_PATH}/{item_id}"
    if with_status:
        url += "?status=true"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=ItemListResponse)
def list_items_endpoint(
    repository: ItemRepository = Depends(get_item_repository),
) -> ItemListResponse:
    """List items."""
    return ItemListResponse(items=list_items_service(repository))


@router.get("/add", response_model=Item)
def add_form_endpoint() -> Item:
    """Return an empty add form."""
    return Item()


@router.post("/add", status_code=status.HTTP_303_SEE_OTHER)
async def add_item_endpoint(
    request: Request,
    repository: ItemRepository = Depends(get_item_repository),
    engine: BindingEngine = Depends(get_binding_engine),
    messages: MessageSource = Depends(get_message_source),
    locale: str = Depends(get_request_locale),
) -> RedirectResponse:
    """Validate a submitted item and redirect to it once saved."""
    raw = await read_form(request)
    saved = add_item_service(raw, repository=repository, engine=engine, messages=messages, locale=locale)
    return _item_redirect(saved.id, with_status=True)


@router.get("/{item_id}", response_model=Item)
def get_item_endpoint(
    item_id: int,
    repository: ItemRepository = Depends(get_item_repository),
) -> Item:
    """Get a single item by id."""
    return get_item_service(repository, item_id)


@router.get("/{item_id}/edit", response_model=Item)
def edit_form_endpoint(
    item_id: int,
    repository: ItemRepository = Depends(get_item_repository),
) -> Item:
    """Return the edit form for an existing item."""
    return get_item_service(repository, item_id)


@router.post("/{item_id}/edit", status_code=status.HTTP_303_SEE_OTHER)
async def edit_item_endpoint(
    item_id: int,
    request: Request,
    repository: ItemRepository = Depends(get_item_repository),
    engine: BindingEngine = Depends(get_binding_engine),
    messages: MessageSource = Depends(get_message_source),
    locale: str = Depends(get_request_locale),
) -> RedirectResponse:
    """Validate an edited item and redirect back to it."""
    raw = await read_form(request)
    edit_item_service(item_id, raw, repository=repository, engine=engine, messages=messages, locale=locale)
    return _item_redirect(item_id, with_status=False)
