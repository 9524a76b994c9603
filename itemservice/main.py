"""FastAPI application entrypoint for the item service."""

from fastapi import FastAPI

from itemservice.api.items import router as items_router
from itemservice.api.session import router as session_router
from itemservice.core.errors import register_error_handlers

app = FastAPI(title="Item Service")
register_error_handlers(app)
app.include_router(items_router)
app.include_router(session_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint for service readiness."""
    return {"status": "ok"}
