from __future__ import annotations

from typing import Optional

from ..schemas.plant import Plant
from .base import BaseRepository, to_date, to_float

_COLUMNS = "plant_id, name, type, height, date_acquired, location_name"


def _row_to_plant(row: dict) -> Plant:
    return Plant(
        plant_id=int(row["plant_id"]),
        name=row["name"] or "",
        type=row["type"],
        height=to_float(row["height"]),
        date_acquired=to_date(row["date_acquired"]),
        location_name=row["location_name"],
    )


class PlantRepository(BaseRepository):
    """Rows of the ``plant`` table. ``plant_id`` is AUTO_INCREMENT."""

    def insert(self, plant: Plant) -> int:
        """Insert a new plant and write the generated id back into ``plant``."""
        affected, new_id = self._execute_insert(
            "INSERT INTO plant (name, type, height, date_acquired, location_name) VALUES (%s, %s, %s, %s, %s)",
            (plant.name, plant.type, plant.height, plant.date_acquired, plant.location_name),
        )
        if affected and new_id:
            plant.plant_id = int(new_id)
        return affected

    def update(self, plant: Plant) -> int:
        return self._execute(
            "UPDATE plant SET name=%s, type=%s, height=%s, date_acquired=%s, location_name=%s WHERE plant_id=%s",
            (plant.name, plant.type, plant.height, plant.date_acquired, plant.location_name, plant.plant_id),
        )

    def delete(self, plant_id: int) -> int:
        return self._execute("DELETE FROM plant WHERE plant_id=%s", (plant_id,))

    def find_by_id(self, plant_id: int) -> Optional[Plant]:
        row = self._fetchone(f"SELECT {_COLUMNS} FROM plant WHERE plant_id=%s", (plant_id,))
        return _row_to_plant(row) if row else None

    def find_all(self) -> list[Plant]:
        return [_row_to_plant(r) for r in self._fetchall(f"SELECT {_COLUMNS} FROM plant")]

    def search_by_name(self, term: str) -> list[Plant]:
        """Case-insensitive substring match on name."""
        # Escape LIKE wildcards so the term matches literally
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        rows = self._fetchall(
            f"SELECT {_COLUMNS} FROM plant WHERE LOWER(name) LIKE %s",
            (f"%{escaped.lower()}%",),
        )
        return [_row_to_plant(r) for r in rows]
