from __future__ import annotations

from typing import Optional

from ..schemas.care import Care
from .base import BaseRepository, to_date

_COLUMNS = "plant_id, last_soil_change, last_watering"


def _row_to_care(row: dict) -> Care:
    return Care(
        plant_id=int(row["plant_id"]),
        last_soil_change=to_date(row["last_soil_change"]),
        last_watering=to_date(row["last_watering"]),
    )


class CareRepository(BaseRepository):
    """Rows of the ``care`` table, at most one per plant (``plant_id`` is the primary key)."""

    def insert(self, care: Care) -> int:
        return self._execute(
            "INSERT INTO care (plant_id, last_soil_change, last_watering) VALUES (%s, %s, %s)",
            (care.plant_id, care.last_soil_change, care.last_watering),
        )

    def update(self, care: Care) -> int:
        return self._execute(
            "UPDATE care SET last_soil_change=%s, last_watering=%s WHERE plant_id=%s",
            (care.last_soil_change, care.last_watering, care.plant_id),
        )

    def upsert(self, care: Care) -> int:
        # MySQL reports 1 for an insert, 2 for an update, 0 when nothing changed
        return self._execute(
            """
            INSERT INTO care (plant_id, last_soil_change, last_watering)
            VALUES (%s, %s, %s)
            ON DUPLICATE KEY UPDATE last_soil_change = VALUES(last_soil_change),
                                    last_watering = VALUES(last_watering)
            """,
            (care.plant_id, care.last_soil_change, care.last_watering),
        )

    def delete(self, plant_id: int) -> int:
        return self._execute("DELETE FROM care WHERE plant_id=%s", (plant_id,))

    def find_by_plant_id(self, plant_id: int) -> Optional[Care]:
        row = self._fetchone(f"SELECT {_COLUMNS} FROM care WHERE plant_id=%s", (plant_id,))
        return _row_to_care(row) if row else None

    def find_all(self) -> list[Care]:
        return [_row_to_care(r) for r in self._fetchall(f"SELECT {_COLUMNS} FROM care")]
