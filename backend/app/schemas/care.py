from typing import Optional
from datetime import date
from pydantic import BaseModel, Field


class Care(BaseModel):
    plant_id: Optional[int] = Field(default=0, ge=0)
    last_soil_change: Optional[date] = None
    last_watering: Optional[date] = None
