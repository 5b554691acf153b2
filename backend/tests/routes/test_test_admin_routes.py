from contextlib import contextmanager

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from backend.app.db.deps import get_settings
from backend.app.routes import test_admin
from backend.tests.fakes import FakeConn, FakeCursor

RESET_STATEMENTS = ["DELETE FROM location", "DELETE FROM information", "DELETE FROM care", "DELETE FROM plant"]


@pytest.fixture
def admin_client_factory():
    def _make():
        api = FastAPI()
        api.include_router(test_admin.app, prefix="/api")
        return AsyncClient(transport=ASGITransport(app=api), base_url="http://test")

    return _make


@pytest.fixture
def fake_cursor(monkeypatch: pytest.MonkeyPatch) -> FakeCursor:
    cur = FakeCursor(lastrowid=17)
    conn = FakeConn(cur)

    @contextmanager
    def _connect(conn_factory=None):
        yield conn

    monkeypatch.setattr(test_admin, "connect", _connect)
    return cur


@pytest.fixture
def admin_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_MODE", "1")
    get_settings.cache_clear()


@pytest.mark.anyio
@pytest.mark.parametrize("path", ["/api/test/reset", "/api/test/seed-minimal", "/api/test/seed"])
async def test_admin_routes_hidden_outside_test_mode(monkeypatch, admin_client_factory, fake_cursor, path):
    monkeypatch.delenv("TEST_MODE", raising=False)
    get_settings.cache_clear()
    async with admin_client_factory() as client:
        r = await client.post(path)
    assert r.status_code == 404
    assert fake_cursor.executed == []


@pytest.mark.anyio
async def test_admin_routes_follow_loaded_settings_not_live_env(monkeypatch, admin_client_factory, fake_cursor):
    monkeypatch.delenv("TEST_MODE", raising=False)
    get_settings.cache_clear()
    assert get_settings().test_mode is False

    # Flipping the env after settings are loaded does not enable the routes
    monkeypatch.setenv("TEST_MODE", "1")
    async with admin_client_factory() as client:
        r = await client.post("/api/test/reset")
    assert r.status_code == 404
    assert fake_cursor.executed == []


@pytest.mark.anyio
async def test_reset_clears_dependents_before_plants(admin_enabled, admin_client_factory, fake_cursor):
    async with admin_client_factory() as client:
        r = await client.post("/api/test/reset")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert [sql for sql, _ in fake_cursor.executed] == RESET_STATEMENTS


@pytest.mark.anyio
async def test_seed_minimal_inserts_plant_with_generated_id(admin_enabled, admin_client_factory, fake_cursor):
    async with admin_client_factory() as client:
        r = await client.post("/api/test/seed-minimal")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "plant_id": 17}

    assert len(fake_cursor.executed) == 4
    insert_sql, insert_params = fake_cursor.executed[1]
    assert insert_sql.startswith("INSERT INTO plant (name, type, location_name)")
    assert "plant_id" not in insert_sql
    assert insert_params == ("Seed Fern", "Fern", "Living Room")
    assert fake_cursor.executed[2][1] == (17, "Living Room", "Medium")
    assert "INSERT INTO care" in fake_cursor.executed[3][0]
    assert fake_cursor.executed[3][1] == (17,)


@pytest.mark.anyio
async def test_seed_minimal_reuses_existing_seed_plant(admin_enabled, admin_client_factory, fake_cursor):
    fake_cursor.rows = [(5,)]
    async with admin_client_factory() as client:
        r = await client.post("/api/test/seed-minimal")
    assert r.json() == {"status": "ok", "plant_id": 5}
    statements = [sql for sql, _ in fake_cursor.executed]
    assert not any(sql.startswith("INSERT INTO plant") for sql in statements)
    assert fake_cursor.executed[1][1] == ("Fern", "Living Room", 5)


@pytest.mark.anyio
async def test_seed_resets_then_seeds(admin_enabled, admin_client_factory, fake_cursor):
    async with admin_client_factory() as client:
        r = await client.post("/api/test/seed")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "plant_id": 17}
    statements = [sql for sql, _ in fake_cursor.executed]
    assert statements[:4] == RESET_STATEMENTS
    assert len(statements) == 8
