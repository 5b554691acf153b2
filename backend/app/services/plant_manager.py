"""
Lifecycle coordinator for plants and their dependent records.

Hides the insert-vs-update decision from callers and makes sure dependents
(care, information, locations) always carry the key of a persisted plant.
Every call is synchronous and goes straight to the repositories; nothing is
cached here.

Saves of dependent records are not wrapped in a transaction. A failed
dependent save after a successful plant save leaves the plant persisted and
the dependent absent.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, TypeVar

from ..errors import ConnectivityFailure, InvalidArgument
from ..repositories import CareRepository, InformationRepository, LocationRepository, PlantRepository
from ..schemas.care import Care
from ..schemas.information import Information
from ..schemas.location import Location
from ..schemas.plant import Plant, PlantDetails

logger = logging.getLogger(__name__)

T = TypeVar("T", Care, Information, Location)


class PlantStore(Protocol):
    def insert(self, plant: Plant) -> int: ...
    def update(self, plant: Plant) -> int: ...
    def delete(self, plant_id: int) -> int: ...
    def find_by_id(self, plant_id: int) -> Optional[Plant]: ...
    def find_all(self) -> list[Plant]: ...
    def search_by_name(self, term: str) -> list[Plant]: ...


class DependentStore(Protocol):
    """Care and Information: one row per plant, keyed by plant_id.

    An ``upsert`` method is optional; when present it is used for atomic saves.
    """

    def insert(self, value) -> int: ...
    def update(self, value) -> int: ...
    def delete(self, plant_id: int) -> int: ...
    def find_by_plant_id(self, plant_id: int): ...


class LocationStore(Protocol):
    """Location rows keyed by (plant_id, location_name).

    ``find_by_key`` and ``upsert`` are optional; without ``find_by_key`` the
    plant's rows are scanned by name.
    """

    def insert(self, loc: Location) -> int: ...
    def update(self, loc: Location) -> int: ...
    def rename(self, plant_id: int, old_name: str, new_name: str) -> int: ...
    def delete(self, plant_id: int, location_name: str) -> int: ...
    def delete_for_plant(self, plant_id: int) -> int: ...
    def find_for_plant(self, plant_id: int) -> list[Location]: ...


def _require_parent(value, kind: str) -> None:
    if not value.plant_id:
        raise InvalidArgument(f"{kind} requires the plant_id of a saved plant")


class PlantManager:
    def __init__(
        self,
        plants: PlantStore,
        care: DependentStore,
        information: DependentStore,
        locations: LocationStore,
        *,
        atomic_upsert: bool = True,
    ) -> None:
        self._plants = plants
        self._care = care
        self._information = information
        self._locations = locations
        self._atomic_upsert = atomic_upsert

    @classmethod
    def from_conn_factory(cls, conn_factory: Callable, *, atomic_upsert: bool = True) -> "PlantManager":
        return cls(
            PlantRepository(conn_factory),
            CareRepository(conn_factory),
            InformationRepository(conn_factory),
            LocationRepository(conn_factory),
            atomic_upsert=atomic_upsert,
        )

    # --- Plant ---------------------------------------------------------------

    def save_plant(self, plant: Plant) -> Plant:
        """Insert a new plant (``plant_id`` 0/None) or overwrite an existing one.

        On insert the store-generated id is written into ``plant``. An update
        that matches no row is not an error.
        """
        if plant.is_new:
            plant.plant_id = 0
            self._plants.insert(plant)
            if not plant.plant_id:
                raise ConnectivityFailure("Store did not return a generated plant_id")
            logger.debug("Inserted plant %s", plant.plant_id)
        else:
            affected = self._plants.update(plant)
            logger.debug("Updated plant %s (%s row(s))", plant.plant_id, affected)
        return plant

    def get_plant(self, plant_id: int) -> Optional[Plant]:
        return self._plants.find_by_id(plant_id)

    def get_all_plants(self) -> list[Plant]:
        return self._plants.find_all()

    def search_plants(self, term: str) -> list[Plant]:
        term = (term or "").strip()
        if not term:
            return self.get_all_plants()
        return self._plants.search_by_name(term)

    def delete_plant(self, plant_id: int) -> int:
        """Delete a plant and, first, all of its dependent rows.

        Returns the number of plant rows removed (0 when nothing matched).
        """
        dependents = (
            self._locations.delete_for_plant(plant_id)
            + self._information.delete(plant_id)
            + self._care.delete(plant_id)
        )
        affected = self._plants.delete(plant_id)
        logger.info("Deleted plant %s (%s row(s)) and %s dependent row(s)", plant_id, affected, dependents)
        return affected

    def get_plant_details(self, plant_id: int) -> Optional[PlantDetails]:
        plant = self.get_plant(plant_id)
        if plant is None:
            return None
        return PlantDetails(
            plant=plant,
            care=self.get_care(plant_id),
            information=self.get_information(plant_id),
            locations=self.get_locations(plant_id),
        )

    # --- Care ----------------------------------------------------------------

    def save_care(self, care: Care) -> Care:
        _require_parent(care, "Care")
        return self._save_dependent(self._care, care)

    def get_care(self, plant_id: int) -> Optional[Care]:
        return self._care.find_by_plant_id(plant_id)

    def delete_care(self, plant_id: int) -> int:
        return self._care.delete(plant_id)

    # --- Information ---------------------------------------------------------

    def save_information(self, info: Information) -> Information:
        _require_parent(info, "Information")
        return self._save_dependent(self._information, info)

    def get_information(self, plant_id: int) -> Optional[Information]:
        return self._information.find_by_plant_id(plant_id)

    def delete_information(self, plant_id: int) -> int:
        return self._information.delete(plant_id)

    # --- Location ------------------------------------------------------------

    def save_location(self, loc: Location) -> Location:
        _require_parent(loc, "Location")
        return self._upsert(self._locations, loc, lambda: self._location_exists(loc))

    def get_location(self, plant_id: int, location_name: Optional[str] = None) -> Optional[Location]:
        """Location by composite key, or the plant's first location when no name is given."""
        if location_name is None:
            rows = self._locations.find_for_plant(plant_id)
            return rows[0] if rows else None
        find_by_key = getattr(self._locations, "find_by_key", None)
        if find_by_key is not None:
            return find_by_key(plant_id, location_name)
        return next((row for row in self._locations.find_for_plant(plant_id) if (row.location_name or "") == location_name), None)

    def get_locations(self, plant_id: int) -> list[Location]:
        return self._locations.find_for_plant(plant_id)

    def rename_location(self, plant_id: int, old_name: str, new_name: str) -> int:
        if not plant_id:
            raise InvalidArgument("Location requires the plant_id of a saved plant")
        return self._locations.rename(plant_id, old_name, new_name)

    def delete_location(self, plant_id: int, location_name: Optional[str] = None) -> int:
        """Delete one location by name, or all of the plant's locations when no name is given."""
        if location_name is None:
            return self._locations.delete_for_plant(plant_id)
        return self._locations.delete(plant_id, location_name)

    # --- Internals -----------------------------------------------------------

    def _save_dependent(self, repo: DependentStore, value: T) -> T:
        return self._upsert(repo, value, lambda: repo.find_by_plant_id(value.plant_id) is not None)

    def _upsert(self, repo, value: T, exists: Callable[[], bool]) -> T:
        upsert = getattr(repo, "upsert", None)
        if self._atomic_upsert and upsert is not None:
            upsert(value)
            logger.debug("Upserted %s for plant %s", type(value).__name__, value.plant_id)
        # Check-then-act: two statements, racy under concurrent saves of the same key
        elif exists():
            repo.update(value)
            logger.debug("Updated %s for plant %s", type(value).__name__, value.plant_id)
        else:
            repo.insert(value)
            logger.debug("Inserted %s for plant %s", type(value).__name__, value.plant_id)
        return value

    def _location_exists(self, loc: Location) -> bool:
        name = loc.location_name or ""
        find_by_key = getattr(self._locations, "find_by_key", None)
        if find_by_key is not None:
            return find_by_key(loc.plant_id, name) is not None
        return any((row.location_name or "") == name for row in self._locations.find_for_plant(loc.plant_id))
