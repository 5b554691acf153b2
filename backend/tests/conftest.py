import os
from typing import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Import the real FastAPI app
from backend.app.main import app as real_app
from backend.app.db.deps import get_settings
from backend.app.services.deps import get_plant_manager
from backend.app.services.plant_manager import PlantManager
from backend.tests.fakes import make_manager


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    # Let the anyio pytest plugin know we use asyncio
    return "asyncio"


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """Provide the FastAPI application for tests.

    Dependency overrides can be wired here when needed.
    """
    return real_app


@pytest.fixture(autouse=True)
def _override_test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure DB env vars are set to test values and isolated per test run.

    Also enforce safety rules: tests must never use the runtime database.
    """
    monkeypatch.setenv(
        "PLANTDB_URL", os.getenv("TEST_PLANTDB_URL", "mysql://localhost:3306/PlantDB_test")
    )
    monkeypatch.setenv("PLANTDB_USER", os.getenv("TEST_PLANTDB_USER", "root"))
    monkeypatch.setenv("PLANTDB_PASS", os.getenv("TEST_PLANTDB_PASS", ""))

    # Safety check: fail fast if misconfigured
    test_url = os.getenv("PLANTDB_URL", "")
    assert test_url.rstrip("/").endswith("_test"), (
        "Test DB name must end with '_test' to avoid collisions (got: %r)" % test_url
    )
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def manager() -> PlantManager:
    """PlantManager over in-memory repositories."""
    return make_manager()


@pytest.fixture
def fake_manager(app: FastAPI, manager: PlantManager) -> Iterator[PlantManager]:
    """Route the app's manager dependency to the in-memory manager."""
    app.dependency_overrides[get_plant_manager] = lambda: manager
    yield manager
    app.dependency_overrides.pop(get_plant_manager, None)


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """httpx AsyncClient bound to the ASGI app.

    Prefer this for async endpoint testing.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
