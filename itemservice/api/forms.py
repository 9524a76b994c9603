"""Form payload helpers shared by the routers."""

from __future__ import annotations

from fastapi import Request


async def read_form(request: Request) -> dict[str, str]:
    """Return submitted text fields; uploaded files are ignored."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
