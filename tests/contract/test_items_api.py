"""Contract tests for the item form endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from itemservice.binding.engine import BindingEngine
from itemservice.core import dependencies
from itemservice.db.repository.items import InMemoryItemRepository
from itemservice.formatting.number import NumberFormatter
from itemservice.main import app
from itemservice.schemas.item import Item
from itemservice.validation.registry import build_validator_registry

ITEMS = "/validation/items"


def _assert_error_envelope(payload: dict) -> None:
    assert "error" in payload
    error = payload["error"]
    assert isinstance(error.get("code"), str) and error["code"]
    assert isinstance(error.get("message"), str) and error["message"]
    for item in error.get("details", []):
        assert isinstance(item.get("field"), str)
        assert isinstance(item.get("issue"), str)


def test_add_form_is_empty(client: TestClient) -> None:
    response = client.get(f"{ITEMS}/add")

    assert response.status_code == 200
    assert response.json() == {"id": None, "itemName": None, "price": None, "quantity": None}


def test_valid_item_is_saved_once_and_redirects_to_its_id(
    client: TestClient,
    item_repository: InMemoryItemRepository,
) -> None:
    response = client.post(
        f"{ITEMS}/add",
        data={"itemName": "Book", "price": "15000", "quantity": "3"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    [saved] = item_repository.find_all()
    assert response.headers["location"] == f"{ITEMS}/{saved.id}?status=true"

    detail = client.get(f"{ITEMS}/{saved.id}")
    assert detail.status_code == 200
    assert detail.json() == {"id": saved.id, "itemName": "Book", "price": 15000, "quantity": 3}


def test_rejected_item_returns_messages_and_redisplays_input(
    client: TestClient,
    item_repository: InMemoryItemRepository,
) -> None:
    response = client.post(
        f"{ITEMS}/add",
        data={"itemName": "", "price": "500", "quantity": "10"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    payload = response.json()
    _assert_error_envelope(payload)
    assert payload["error"]["code"] == "validation_error"
    assert payload["error"]["details"] == [
        {"field": "itemName", "issue": "Item name is required.", "code": "required"},
        {"field": "price", "issue": "Price must be between 1,000 and 1,000,000.", "code": "range"},
        {
            "field": "global",
            "issue": "Price * quantity must be at least 10,000. Current value = 5,000",
            "code": "totalPriceMin",
        },
    ]
    assert payload["form"] == {"id": None, "itemName": "", "price": 500, "quantity": 10}
    assert item_repository.find_all() == []


def test_unconvertible_input_is_kept_for_redisplay(client: TestClient) -> None:
    response = client.post(
        f"{ITEMS}/add",
        data={"itemName": "Book", "price": "12x", "quantity": "3"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"]["details"] == [
        {"field": "price", "issue": "Please enter a number.", "code": "typeMismatch"},
    ]
    assert payload["form"]["price"] == "12x"


def test_messages_follow_accept_language(client: TestClient) -> None:
    response = client.post(
        f"{ITEMS}/add",
        data={"itemName": " ", "price": "15000", "quantity": "3"},
        headers={"Accept-Language": "ko-KR,ko;q=0.9,en;q=0.8"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "itemName", "issue": "상품 이름은 필수입니다.", "code": "required"},
    ]


def test_missing_item_returns_not_found_envelope(client: TestClient) -> None:
    response = client.get(f"{ITEMS}/999")

    assert response.status_code == 404
    assert response.json() == {"error": {"code": "not_found", "message": "Item not found"}}


def test_list_returns_saved_items(client: TestClient, item_repository: InMemoryItemRepository) -> None:
    item_repository.save(Item(item_name="Book", price=15000, quantity=3))
    item_repository.save(Item(item_name="Pen", price=1000, quantity=20))

    response = client.get(ITEMS)

    assert response.status_code == 200
    assert [item["itemName"] for item in response.json()["items"]] == ["Book", "Pen"]


def test_edit_applies_update_rules_and_redirects(
    client: TestClient,
    item_repository: InMemoryItemRepository,
) -> None:
    saved = item_repository.save(Item(item_name="Book", price=15000, quantity=3))

    form = client.get(f"{ITEMS}/{saved.id}/edit")
    assert form.json()["itemName"] == "Book"

    response = client.post(
        f"{ITEMS}/{saved.id}/edit",
        data={"id": str(saved.id), "itemName": "Book", "price": "20000", "quantity": "10000"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == f"{ITEMS}/{saved.id}"
    assert item_repository.find_by_id(saved.id).quantity == 10000


def test_edit_requires_item_id(client: TestClient, item_repository: InMemoryItemRepository) -> None:
    saved = item_repository.save(Item(item_name="Book", price=15000, quantity=3))

    response = client.post(
        f"{ITEMS}/{saved.id}/edit",
        data={"itemName": "Book", "price": "20000", "quantity": "3"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "id", "issue": "This field is required.", "code": "required"},
    ]
    assert item_repository.find_by_id(saved.id).price == 15000


def test_edit_of_missing_item_returns_not_found(client: TestClient) -> None:
    response = client.post(
        f"{ITEMS}/999/edit",
        data={"id": "999", "itemName": "Book", "price": "20000", "quantity": "3"},
        follow_redirects=False,
    )

    assert response.status_code == 404


def test_manual_validator_mode_still_rejects_invalid_items(client: TestClient) -> None:
    manual_engine = BindingEngine(build_validator_registry(), mode="manual", formatter=NumberFormatter())
    app.dependency_overrides[dependencies.get_binding_engine] = lambda: manual_engine

    response = client.post(
        f"{ITEMS}/add",
        data={"itemName": "Book", "price": "1000", "quantity": "5"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert [detail["code"] for detail in response.json()["error"]["details"]] == ["totalPriceMin"]


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_edit_with_oversized_quantity_is_a_type_mismatch(
    client: TestClient,
    item_repository: InMemoryItemRepository,
) -> None:
    saved = item_repository.save(Item(item_name="Book", price=15000, quantity=3))

    response = client.post(
        f"{ITEMS}/{saved.id}/edit",
        data={"id": str(saved.id), "itemName": "Book", "price": "15000", "quantity": "99999999999999999999"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "quantity", "issue": "Please enter a number.", "code": "typeMismatch"},
    ]
    assert item_repository.find_by_id(saved.id).quantity == 3


def test_blank_price_is_redisplayed_as_submitted(client: TestClient) -> None:
    response = client.post(
        f"{ITEMS}/add",
        data={"itemName": "Book", "price": "", "quantity": "3"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    payload = response.json()
    assert [detail["code"] for detail in payload["error"]["details"]] == ["range"]
    assert payload["form"]["price"] == ""
