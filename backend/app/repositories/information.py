from __future__ import annotations

from typing import Optional

from ..schemas.information import Information
from .base import BaseRepository, to_bool

_COLUMNS = "plant_id, from_another_plant, soil_type, pot_size, water_globe_required"


def _row_to_information(row: dict) -> Information:
    return Information(
        plant_id=int(row["plant_id"]),
        from_another_plant=to_bool(row["from_another_plant"]),
        soil_type=row["soil_type"],
        pot_size=row["pot_size"],
        water_globe_required=to_bool(row["water_globe_required"]),
    )


class InformationRepository(BaseRepository):
    """Rows of the ``information`` table, at most one per plant."""

    def insert(self, info: Information) -> int:
        return self._execute(
            "INSERT INTO information (plant_id, from_another_plant, soil_type, pot_size, water_globe_required) "
            "VALUES (%s, %s, %s, %s, %s)",
            (info.plant_id, info.from_another_plant, info.soil_type, info.pot_size, info.water_globe_required),
        )

    def update(self, info: Information) -> int:
        return self._execute(
            "UPDATE information SET from_another_plant=%s, soil_type=%s, pot_size=%s, water_globe_required=%s "
            "WHERE plant_id=%s",
            (info.from_another_plant, info.soil_type, info.pot_size, info.water_globe_required, info.plant_id),
        )

    def upsert(self, info: Information) -> int:
        return self._execute(
            """
            INSERT INTO information (plant_id, from_another_plant, soil_type, pot_size, water_globe_required)
            VALUES (%s, %s, %s, %s, %s)
            ON DUPLICATE KEY UPDATE from_another_plant = VALUES(from_another_plant),
                                    soil_type = VALUES(soil_type),
                                    pot_size = VALUES(pot_size),
                                    water_globe_required = VALUES(water_globe_required)
            """,
            (info.plant_id, info.from_another_plant, info.soil_type, info.pot_size, info.water_globe_required),
        )

    def delete(self, plant_id: int) -> int:
        return self._execute("DELETE FROM information WHERE plant_id=%s", (plant_id,))

    def find_by_plant_id(self, plant_id: int) -> Optional[Information]:
        row = self._fetchone(f"SELECT {_COLUMNS} FROM information WHERE plant_id=%s", (plant_id,))
        return _row_to_information(row) if row else None

    def find_all(self) -> list[Information]:
        return [_row_to_information(r) for r in self._fetchall(f"SELECT {_COLUMNS} FROM information")]
