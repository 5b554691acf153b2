from __future__ import annotations

from typing import Optional

from ..schemas.location import Location
from .base import BaseRepository

_COLUMNS = "plant_id, location_name, light_level"


def _row_to_location(row: dict) -> Location:
    return Location(
        plant_id=int(row["plant_id"]),
        location_name=row["location_name"],
        light_level=row["light_level"],
    )


class LocationRepository(BaseRepository):
    """
    Rows of the ``location`` table, keyed by (plant_id, location_name).
    A plant may have several locations distinguished by name.
    """

    def insert(self, loc: Location) -> int:
        return self._execute(
            "INSERT INTO location (plant_id, location_name, light_level) VALUES (%s, %s, %s)",
            (loc.plant_id, loc.location_name or "", loc.light_level),
        )

    def update(self, loc: Location) -> int:
        return self._execute(
            "UPDATE location SET light_level=%s WHERE plant_id=%s AND location_name=%s",
            (loc.light_level, loc.plant_id, loc.location_name or ""),
        )

    def upsert(self, loc: Location) -> int:
        return self._execute(
            """
            INSERT INTO location (plant_id, location_name, light_level)
            VALUES (%s, %s, %s)
            ON DUPLICATE KEY UPDATE light_level = VALUES(light_level)
            """,
            (loc.plant_id, loc.location_name or "", loc.light_level),
        )

    def rename(self, plant_id: int, old_name: str, new_name: str) -> int:
        return self._execute(
            "UPDATE location SET location_name=%s WHERE plant_id=%s AND location_name=%s",
            (new_name, plant_id, old_name),
        )

    def delete(self, plant_id: int, location_name: str) -> int:
        return self._execute(
            "DELETE FROM location WHERE plant_id=%s AND location_name=%s",
            (plant_id, location_name),
        )

    def delete_for_plant(self, plant_id: int) -> int:
        return self._execute("DELETE FROM location WHERE plant_id=%s", (plant_id,))

    def find_by_key(self, plant_id: int, location_name: str) -> Optional[Location]:
        row = self._fetchone(
            f"SELECT {_COLUMNS} FROM location WHERE plant_id=%s AND location_name=%s",
            (plant_id, location_name),
        )
        return _row_to_location(row) if row else None

    def find_for_plant(self, plant_id: int) -> list[Location]:
        rows = self._fetchall(
            f"SELECT {_COLUMNS} FROM location WHERE plant_id=%s ORDER BY location_name",
            (plant_id,),
        )
        return [_row_to_location(r) for r in rows]

    def find_all(self) -> list[Location]:
        return [_row_to_location(r) for r in self._fetchall(f"SELECT {_COLUMNS} FROM location")]
