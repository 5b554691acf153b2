import pymysql
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response
from starlette.concurrency import run_in_threadpool

from ..errors import ConnectivityFailure
from ..schemas.location import Location, LocationRenameRequest
from ..services.deps import get_plant_manager
from ..services.plant_manager import PlantManager

app = APIRouter()


def normalize(s: str | None) -> str:
    return " ".join((s or "").split())


@app.get("/plants/{plant_id}/location", response_model=Location)
async def get_location(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Location:
    loc = await run_in_threadpool(manager.get_location, plant_id)
    if loc is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return loc


@app.post("/plants/{plant_id}/location", response_model=Location)
@app.put("/plants/{plant_id}/location", response_model=Location)
async def save_location(
    payload: Location, plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> Location:
    name = normalize(payload.location_name)
    if not name:
        raise HTTPException(status_code=400, detail="Location name cannot be empty")
    loc = payload.model_copy(update={"plant_id": plant_id, "location_name": name})
    return await run_in_threadpool(manager.save_location, loc)


@app.delete("/plants/{plant_id}/location", status_code=204)
async def delete_location(
    plant_id: int = Path(..., ge=1),
    name: str | None = Query(None, description="Location to delete; all of the plant's locations when omitted"),
    manager: PlantManager = Depends(get_plant_manager),
) -> Response:
    await run_in_threadpool(manager.delete_location, plant_id, name)
    return Response(status_code=204)


@app.get("/plants/{plant_id}/locations", response_model=list[Location])
async def list_locations(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> list[Location]:
    return await run_in_threadpool(manager.get_locations, plant_id)


@app.get("/plants/{plant_id}/locations/{name}", response_model=Location)
async def get_location_by_name(
    name: str, plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> Location:
    loc = await run_in_threadpool(manager.get_location, plant_id, name)
    if loc is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return loc


@app.put("/plants/{plant_id}/locations/{name}", response_model=dict)
async def rename_location(
    name: str,
    payload: LocationRenameRequest,
    plant_id: int = Path(..., ge=1),
    manager: PlantManager = Depends(get_plant_manager),
):
    new_name = normalize(payload.name)
    if not new_name:
        raise HTTPException(status_code=400, detail="Location name cannot be empty")
    try:
        affected = await run_in_threadpool(manager.rename_location, plant_id, name, new_name)
    except ConnectivityFailure as e:
        if isinstance(e.__cause__, pymysql.err.IntegrityError):
            # Unique constraint violation on (plant_id, location_name)
            raise HTTPException(status_code=409, detail="Location name already exists")
        raise
    return {"ok": True, "rows_affected": affected, "name": new_name}


@app.delete("/plants/{plant_id}/locations/{name}", status_code=204)
async def delete_location_by_name(
    name: str, plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> Response:
    await run_in_threadpool(manager.delete_location, plant_id, name)
    return Response(status_code=204)
