from .plant import CareFactory, InformationFactory, LocationFactory, PlantFactory

__all__ = [
    "PlantFactory",
    "CareFactory",
    "InformationFactory",
    "LocationFactory",
]
