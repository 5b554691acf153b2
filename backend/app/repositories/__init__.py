from .care import CareRepository
from .information import InformationRepository
from .locations import LocationRepository
from .plants import PlantRepository

__all__ = [
    "PlantRepository",
    "CareRepository",
    "InformationRepository",
    "LocationRepository",
]
