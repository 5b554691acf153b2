from typing import Optional
from pydantic import BaseModel, Field


class Location(BaseModel):
    plant_id: Optional[int] = Field(default=0, ge=0)
    location_name: Optional[str] = Field(default=None, max_length=100)
    light_level: Optional[str] = Field(default=None, max_length=50)


class LocationRenameRequest(BaseModel):
    name: str = Field(max_length=100)
