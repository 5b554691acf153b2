from typing import Callable

from fastapi import Depends

from ..config import AppSettings
from ..db.deps import get_conn_factory, get_settings
from .plant_manager import PlantManager


def get_plant_manager(
    conn_factory: Callable = Depends(get_conn_factory),
    settings: AppSettings = Depends(get_settings),
) -> PlantManager:
    """FastAPI dependency wiring the manager to the request's connection factory."""
    return PlantManager.from_conn_factory(conn_factory, atomic_upsert=settings.atomic_upsert)
