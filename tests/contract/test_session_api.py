"""Contract tests for session-tracked login endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from itemservice.session.manager import SESSION_COOKIE_NAME


def _login(client: TestClient, login_id: str = "test", name: str = "Tester"):
    return client.post("/login", data={"loginId": login_id, "name": name}, follow_redirects=False)


def test_home_is_anonymous_without_session(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"view": "home", "member": None}


def test_login_sets_session_cookie_and_home_shows_member(client: TestClient) -> None:
    response = _login(client)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert client.cookies.get(SESSION_COOKIE_NAME)

    home = client.get("/")
    assert home.json() == {"view": "loginHome", "member": {"loginId": "test", "name": "Tester"}}


def test_login_form_errors_use_form_envelope(client: TestClient) -> None:
    response = _login(client, login_id="", name=" ")

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"]["details"] == [
        {"field": "loginId", "issue": "Login id is required.", "code": "required"},
        {"field": "name", "issue": "This field is required.", "code": "required"},
    ]
    assert payload["form"] == {"loginId": "", "name": " "}
    assert SESSION_COOKIE_NAME not in response.cookies


def test_logout_expires_session(client: TestClient, session_manager) -> None:
    _login(client)
    token = client.cookies.get(SESSION_COOKIE_NAME)

    response = client.post("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert session_manager._store.get(token) is None
    assert client.get("/").json()["view"] == "home"


def test_session_info_reports_current_session(client: TestClient) -> None:
    assert client.get("/session-info").json() == {
        "has_session": False,
        "session_id": None,
        "value": None,
        "max_inactive_interval_seconds": None,
        "creation_time": None,
        "last_accessed_time": None,
        "is_new": None,
    }

    _login(client)
    payload = client.get("/session-info").json()

    assert payload["has_session"] is True
    assert payload["session_id"] == client.cookies.get(SESSION_COOKIE_NAME)
    assert payload["value"]["name"] == "Tester"
    assert payload["max_inactive_interval_seconds"] == 60
    assert payload["creation_time"] is not None
    assert payload["last_accessed_time"] is not None
    assert payload["is_new"] is False
