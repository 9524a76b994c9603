"""Shared pytest fixtures for item service test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from itemservice.binding.engine import BindingEngine  # noqa: E402
from itemservice.binding.messages import MessageSource  # noqa: E402
from itemservice.db.repository.items import InMemoryItemRepository  # noqa: E402
from itemservice.formatting.number import NumberFormatter  # noqa: E402
from itemservice.session.manager import SessionManager  # noqa: E402
from itemservice.session.store import InMemorySessionStore  # noqa: E402
from itemservice.validation.catalog import CATALOGS  # noqa: E402
from itemservice.validation.registry import build_validator_registry  # noqa: E402


@pytest.fixture
def formatter() -> NumberFormatter:
    return NumberFormatter(default_locale="en")


@pytest.fixture
def message_source(formatter: NumberFormatter) -> MessageSource:
    return MessageSource(CATALOGS, default_locale="en", formatter=formatter)


@pytest.fixture
def engine(formatter: NumberFormatter) -> BindingEngine:
    return BindingEngine(build_validator_registry(), mode="auto", formatter=formatter)


@pytest.fixture
def item_repository() -> InMemoryItemRepository:
    return InMemoryItemRepository()


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager(InMemorySessionStore(idle_timeout_seconds=60))


@pytest.fixture
def client(
    engine: BindingEngine,
    message_source: MessageSource,
    item_repository: InMemoryItemRepository,
    session_manager: SessionManager,
) -> Generator[TestClient, None, None]:
    """Provide an API test client wired to fresh per-test collaborators."""
    from itemservice.core import dependencies
    from itemservice.main import app

    app.dependency_overrides[dependencies.get_binding_engine] = lambda: engine
    app.dependency_overrides[dependencies.get_message_source] = lambda: message_source
    app.dependency_overrides[dependencies.get_item_repository] = lambda: item_repository
    app.dependency_overrides[dependencies.get_session_manager] = lambda: session_manager
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
