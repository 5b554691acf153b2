from fastapi import APIRouter, Depends, HTTPException, Path, Response
from starlette.concurrency import run_in_threadpool

from ..schemas.care import Care
from ..services.deps import get_plant_manager
from ..services.plant_manager import PlantManager

app = APIRouter()


@app.get("/plants/{plant_id}/care", response_model=Care)
async def get_care(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Care:
    care = await run_in_threadpool(manager.get_care, plant_id)
    if care is None:
        raise HTTPException(status_code=404, detail="Care record not found")
    return care


# POST and PUT share upsert semantics: create when missing, overwrite otherwise
@app.post("/plants/{plant_id}/care", response_model=Care)
@app.put("/plants/{plant_id}/care", response_model=Care)
async def save_care(payload: Care, plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Care:
    care = payload.model_copy(update={"plant_id": plant_id})
    return await run_in_threadpool(manager.save_care, care)


@app.delete("/plants/{plant_id}/care", status_code=204)
async def delete_care(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Response:
    await run_in_threadpool(manager.delete_care, plant_id)
    return Response(status_code=204)
