"""Session-tracked login routes."""

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
from itemservice.core.dependencies import get_message_source
from itemservice.core.dependencies import get_request_locale
from itemservice.core.dependencies import get_session_manager
from itemservice.schemas.session import HomeResponse
from itemservice.schemas.session import SessionInfoResponse
from itemservice.services.sessions import home_service
from itemservice.services.sessions import login_service
from itemservice.services.sessions import logout_service
from itemservice.services.sessions import session_info_service
from itemservice.session.manager import SessionManager

router = APIRouter(tags=["session"])


@router.get("/", response_model=HomeResponse)
def home_endpoint(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> HomeResponse:
    """Home view, personalized when a member is logged in."""
    return home_service(request, sessions)


@router.post("/login", status_code=status.HTTP_303_SEE_OTHER)
async def login_endpoint(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    engine: BindingEngine = Depends(get_binding_engine),
    messages: MessageSource = Depends(get_message_source),
    locale: str = Depends(get_request_locale),
) -> RedirectResponse:
    """Start a session for the submitted member and redirect home."""
    raw = await read_form(request)
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    login_service(raw, response, sessions=sessions, engine=engine, messages=messages, locale=locale)
    return response


@router.post("/logout", status_code=status.HTTP_303_SEE_OTHER)
def logout_endpoint(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> RedirectResponse:
    """Expire the current session."""
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    logout_service(request, response, sessions=sessions)
    return response


@router.get("/session-info", response_model=SessionInfoResponse)
def session_info_endpoint(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionInfoResponse:
    """Inspect the current session."""
    return session_info_service(request, sessions=sessions)
