"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Single field-level validation or domain issue detail."""

    field: str
    issue: str
    code: str | None = None


class ErrorObject(BaseModel):
    """Canonical error payload object."""

    code: str
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Top-level API error response envelope.

    ``form`` carries the submitted values to show again when a form was
    rejected.
    """

    error: ErrorObject
    form: dict[str, Any] | None = None
