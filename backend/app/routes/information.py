from fastapi import APIRouter, Depends, HTTPException, Path, Response
from starlette.concurrency import run_in_threadpool

from ..schemas.information import Information
from ..services.deps import get_plant_manager
from ..services.plant_manager import PlantManager

app = APIRouter()


@app.get("/plants/{plant_id}/information", response_model=Information)
async def get_information(
    plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> Information:
    info = await run_in_threadpool(manager.get_information, plant_id)
    if info is None:
        raise HTTPException(status_code=404, detail="Information record not found")
    return info


@app.post("/plants/{plant_id}/information", response_model=Information)
@app.put("/plants/{plant_id}/information", response_model=Information)
async def save_information(
    payload: Information, plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)
) -> Information:
    info = payload.model_copy(update={"plant_id": plant_id})
    return await run_in_threadpool(manager.save_information, info)


@app.delete("/plants/{plant_id}/information", status_code=204)
async def delete_information(plant_id: int = Path(..., ge=1), manager: PlantManager = Depends(get_plant_manager)) -> Response:
    await run_in_threadpool(manager.delete_information, plant_id)
    return Response(status_code=204)
