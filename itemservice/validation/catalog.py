"""Message catalogs for validation errors, one mapping per locale."""

from __future__ import annotations

from collections.abc import Mapping

EN_MESSAGES: Mapping[str, str] = {
    "required.item.itemName": "Item name is required.",
    "range.item.price": "Price must be between {0} and {1}.",
    "max.item.quantity": "Quantity must be at most {0}.",
    "totalPriceMin": "Price * quantity must be at least {0}. Current value = {1}",
    "required.loginForm.loginId": "Login id is required.",
    "required": "This field is required.",
    "range": "Value must be between {0} and {1}.",
    "max": "Value must be at most {0}.",
    "typeMismatch.int": "Please enter a number.",
    "typeMismatch": "The value has an invalid type.",
}

KO_MESSAGES: Mapping[str, str] = {
    "required.item.itemName": "상품 이름은 필수입니다.",
    "range.item.price": "가격은 {0} ~ {1} 까지 허용합니다.",
    "max.item.quantity": "수량은 최대 {0} 까지 허용합니다.",
    "totalPriceMin": "가격 * 수량의 합은 {0}원 이상이어야 합니다. 현재 값 = {1}",
    "required.loginForm.loginId": "로그인 아이디는 필수입니다.",
    "required": "필수 값 입니다.",
    "range": "{0} ~ {1} 범위를 허용합니다.",
    "max": "최대 {0} 까지 허용합니다.",
    "typeMismatch.int": "숫자를 입력해주세요.",
    "typeMismatch": "타입 오류입니다.",
}

CATALOGS: Mapping[str, Mapping[str, str]] = {
    "en": EN_MESSAGES,
    "ko": KO_MESSAGES,
}
