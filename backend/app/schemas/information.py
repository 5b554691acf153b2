from typing import Optional
from pydantic import BaseModel, Field


class Information(BaseModel):
    plant_id: Optional[int] = Field(default=0, ge=0)
    from_another_plant: bool = False
    soil_type: Optional[str] = Field(default=None, max_length=100)
    pot_size: Optional[str] = Field(default=None, max_length=50)
    water_globe_required: bool = False
