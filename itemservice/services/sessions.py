"""Service helpers for session-tracked login state."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from datetime import timezone
from typing import Any
import logging

from starlette.requests import Request
from starlette.responses import Response

from itemservice.binding.engine import BindingEngine
from itemservice.binding.messages import MessageSource
from itemservice.schemas.session import HomeResponse
from itemservice.schemas.session import LoginForm
from itemservice.schemas.session import Member
from itemservice.schemas.session import SessionInfoResponse
from itemservice.services.forms import bind_and_validate
from itemservice.services.forms import raise_if_rejected
from itemservice.session.manager import SessionManager

logger = logging.getLogger(__name__)


def home_service(request: Request, sessions: SessionManager) -> HomeResponse:
    """Show the logged-in member when the session holds one."""
    member = sessions.get_session(request)
    if not isinstance(member, Member):
        return HomeResponse(view="home")
    return HomeResponse(view="loginHome", member=member)


def login_service(
    raw: Mapping[str, Any],
    response: Response,
    *,
    sessions: SessionManager,
    engine: BindingEngine,
    messages: MessageSource,
    locale: str | None = None,
) -> Member:
    """Validate the login form and keep the member in a new session."""
    result = bind_and_validate(engine, raw, LoginForm, locale=locale)
    raise_if_rejected(result, messages, locale, message="Login form validation failed")

    form = result.target
    member = Member(login_id=form.login_id.strip(), name=form.name.strip())
    sessions.create_session(member, response)
    logger.info("Started session for login_id=%s", member.login_id)
    return member


def logout_service(request: Request, response: Response, *, sessions: SessionManager) -> None:
    sessions.expire(request, response)


def _as_datetime(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def session_info_service(request: Request, *, sessions: SessionManager) -> SessionInfoResponse:
    """Log and return what the current session holds."""
    token = sessions.session_token(request)
    value = sessions.get_session(request)
    metadata = sessions.describe(request)
    if token is None or value is None or metadata is None:
        logger.info("No session for request")
        return SessionInfoResponse(has_session=False)

    creation_time = _as_datetime(metadata.created_at)
    last_accessed_time = _as_datetime(metadata.last_accessed_at)
    logger.info("session value=%r", value)
    logger.info("sessionId=%s", token)
    logger.info("maxInactiveInterval=%s", sessions.idle_timeout_seconds)
    logger.info("creationTime=%s", creation_time.isoformat())
    logger.info("lastAccessedTime=%s", last_accessed_time.isoformat())
    logger.info("isNew=%s", metadata.is_new)
    return SessionInfoResponse(
        has_session=True,
        session_id=token,
        value=value,
        max_inactive_interval_seconds=sessions.idle_timeout_seconds,
        creation_time=creation_time,
        last_accessed_time=last_accessed_time,
        is_new=metadata.is_new,
    )
