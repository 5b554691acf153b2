import os

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.skipif(os.getenv("TEST_MODE") != "1", reason="needs TEST_MODE=1 and a PlantDB_test database")


@pytest.fixture
async def clean_db(async_client: AsyncClient):
    r = await async_client.post("/api/test/reset")
    assert r.status_code == 200
    yield
    await async_client.post("/api/test/reset")


@pytest.mark.anyio
async def test_list_plants_initially_empty_and_after_create(clean_db, async_client: AsyncClient):
    r = await async_client.get("/api/plants")
    assert r.status_code == 200
    assert r.json() == []

    r = await async_client.post("/api/plants", json={"name": "Alpha", "type": "Fern", "height": 12.5, "date_acquired": "2024-01-01"})
    assert r.status_code == 200
    created = r.json()
    assert created["plant_id"] > 0

    items = (await async_client.get("/api/plants")).json()
    assert [item["name"] for item in items] == ["Alpha"]

    item = (await async_client.get(f"/api/plants/{created['plant_id']}")).json()
    assert item == created


@pytest.mark.anyio
async def test_plant_with_dependents_lifecycle(clean_db, async_client: AsyncClient):
    pid = (await async_client.post("/api/plants", json={"name": "Fern", "height": None})).json()["plant_id"]

    r = await async_client.post(f"/api/plants/{pid}/care", json={"last_watering": "2024-02-01"})
    assert r.status_code == 200
    r = await async_client.put(f"/api/plants/{pid}/care", json={"last_watering": "2024-03-01"})
    assert r.status_code == 200
    assert (await async_client.get(f"/api/plants/{pid}/care")).json()["last_watering"] == "2024-03-01"

    r = await async_client.post(
        f"/api/plants/{pid}/information",
        json={"from_another_plant": True, "soil_type": "mix", "pot_size": "small", "water_globe_required": False},
    )
    assert r.status_code == 200
    info = (await async_client.get(f"/api/plants/{pid}/information")).json()
    assert info["from_another_plant"] is True
    assert info["water_globe_required"] is False

    details = (await async_client.get(f"/api/plants/{pid}/details")).json()
    assert details["plant"]["height"] is None
    assert details["care"]["last_watering"] == "2024-03-01"

    # Deleting the plant removes its dependent rows too
    r = await async_client.delete(f"/api/plants/{pid}")
    assert r.status_code == 204
    assert (await async_client.get(f"/api/plants/{pid}")).status_code == 404
    assert (await async_client.get(f"/api/plants/{pid}/care")).status_code == 404
    assert (await async_client.get(f"/api/plants/{pid}/information")).status_code == 404


@pytest.mark.anyio
async def test_search_escapes_wildcards(clean_db, async_client: AsyncClient):
    for name in ("100% Cactus", "Boston Fern", "snake_plant"):
        await async_client.post("/api/plants", json={"name": name})

    r = await async_client.get("/api/plants", params={"name": "%"})
    assert [p["name"] for p in r.json()] == ["100% Cactus"]
    r = await async_client.get("/api/plants", params={"name": "_"})
    assert [p["name"] for p in r.json()] == ["snake_plant"]
    r = await async_client.get("/api/plants", params={"name": "FERN"})
    assert [p["name"] for p in r.json()] == ["Boston Fern"]


@pytest.mark.anyio
@pytest.mark.parametrize("height", [12.34, 12.345, 0.1, 2_500_000.75])
async def test_height_round_trips_exactly(clean_db, async_client: AsyncClient, height):
    body = {"name": "Tall One", "height": height}
    created = (await async_client.post("/api/plants", json=body)).json()

    item = (await async_client.get(f"/api/plants/{created['plant_id']}")).json()
    assert item["height"] == height


@pytest.mark.anyio
async def test_name_at_column_limit_round_trips(clean_db, async_client: AsyncClient):
    name = "x" * 100
    created = (await async_client.post("/api/plants", json={"name": name})).json()

    item = (await async_client.get(f"/api/plants/{created['plant_id']}")).json()
    assert item["name"] == name
