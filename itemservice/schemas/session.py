"""Pydantic schemas for session-tracked login state."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class LoginForm(BaseModel):
    """Member display data submitted to start a session."""

    model_config = ConfigDict(populate_by_name=True)

    login_id: str | None = Field(default=None, alias="loginId")
    name: str | None = None


class Member(BaseModel):
    """Member snapshot kept in the session store."""

    model_config = ConfigDict(populate_by_name=True)

    login_id: str = Field(alias="loginId")
    name: str


class HomeResponse(BaseModel):
    """Home view for anonymous or logged-in visitors."""

    view: str
    member: Member | None = None


class SessionInfoResponse(BaseModel):
    """Session inspection payload."""

    has_session: bool
    session_id: str | None = None
    value: Any | None = None
    max_inactive_interval_seconds: float | None = None
    creation_time: datetime | None = None
    last_accessed_time: datetime | None = None
    is_new: bool | None = None
