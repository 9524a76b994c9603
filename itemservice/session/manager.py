"""Cookie-based session tracking on top of a session store."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
import uuid

from starlette.requests import Request
from starlette.responses import Response

from itemservice.session.store import SessionMetadata
from itemservice.session.store import SessionStore

SESSION_COOKIE_NAME = "mySessionId"


def _new_token() -> str:
    return str(uuid.uuid4())


class SessionManager:
    """Create, look up and expire sessions identified by the session cookie."""

    def __init__(
        self,
        store: SessionStore,
        *,
        cookie_name: str = SESSION_COOKIE_NAME,
        token_factory: Callable[[], str] = _new_token,
    ) -> None:
        self._store = store
        self._cookie_name = cookie_name
        self._token_factory = token_factory

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    @property
    def idle_timeout_seconds(self) -> float:
        return self._store.idle_timeout_seconds

    def create_session(self, value: Any, response: Response) -> str:
        """Store a value under a fresh token and send the token as a cookie."""
        token = self._token_factory()
        self._store.set(token, value)
        response.set_cookie(self._cookie_name, token, httponly=True, samesite="lax")
        return token

    def session_token(self, request: Request) -> str | None:
        return request.cookies.get(self._cookie_name) or None

    def get_session(self, request: Request) -> Any | None:
        token = self.session_token(request)
        if token is None:
            return None
        return self._store.get(token)

    def describe(self, request: Request) -> SessionMetadata | None:
        token = self.session_token(request)
        if token is None:
            return None
        return self._store.describe(token)

    def expire(self, request: Request, response: Response) -> None:
        token = self.session_token(request)
        if token is not None:
            self._store.remove(token)
        response.delete_cookie(self._cookie_name)
