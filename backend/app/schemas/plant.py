from typing import Optional
from datetime import date
from pydantic import BaseModel, Field

from .care import Care
from .information import Information
from .location import Location


class Plant(BaseModel):
    # 0 means "not yet persisted"; the store assigns the real id on first save
    plant_id: Optional[int] = Field(default=0, ge=0)
    name: str = Field(max_length=100)
    type: Optional[str] = Field(default=None, max_length=100)
    height: Optional[float] = None
    date_acquired: Optional[date] = None
    # Denormalized label, independent of the plant's Location rows
    location_name: Optional[str] = Field(default=None, max_length=100)

    @property
    def is_new(self) -> bool:
        return not self.plant_id


class PlantDetails(BaseModel):
    plant: Plant
    care: Optional[Care] = None
    information: Optional[Information] = None
    locations: list[Location] = Field(default_factory=list)
