from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response
from starlette.concurrency import run_in_threadpool

from ..schemas.plant import Plant, PlantDetails
from ..services.deps import get_plant_manager
from ..services.plant_manager import PlantManager

app = APIRouter()


def _normalize_name(s: str) -> str:
    # Trim and collapse internal whitespace
    return " ".join((s or "").split())


@app.get("/plants", response_model=list[Plant])
async def list_plants(
    name: str | None = Query(None, description="Case-insensitive substring filter on plant name"),
    manager: PlantManager = Depends(get_plant_manager),
) -> list[Plant]:
    if name:
        return await run_in_threadpool(manager.search_plants, name)
    return await run_in_threadpool(manager.get_all_plants)


@app.get("/plants/{plant_id}", response_model=Plant)
async def get_plant(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Plant:
    plant = await run_in_threadpool(manager.get_plant, plant_id)
    if plant is None:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant


@app.get("/plants/{plant_id}/details", response_model=PlantDetails)
async def get_plant_details(
    plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> PlantDetails:
    details = await run_in_threadpool(manager.get_plant_details, plant_id)
    if details is None:
        raise HTTPException(status_code=404, detail="Plant not found")
    return details


@app.post("/plants", response_model=Plant)
async def create_plant(payload: Plant, manager: PlantManager = Depends(get_plant_manager)) -> Plant:
    name = _normalize_name(payload.name)
    if not name:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    # POST always creates; any client-supplied id is ignored
    plant = payload.model_copy(update={"plant_id": 0, "name": name})
    return await run_in_threadpool(manager.save_plant, plant)


@app.put("/plants/{plant_id}", response_model=Plant)
async def update_plant(
    payload: Plant, plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> Plant:
    name = _normalize_name(payload.name)
    if not name:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    plant = payload.model_copy(update={"plant_id": plant_id, "name": name})
    return await run_in_threadpool(manager.save_plant, plant)


@app.delete("/plants/{plant_id}", status_code=204)
async def delete_plant(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Response:
    # Idempotent: deleting a missing plant is still 204
    await run_in_threadpool(manager.delete_plant, plant_id)
    return Response(status_code=204)
