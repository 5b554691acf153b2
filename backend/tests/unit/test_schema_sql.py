import re
from pathlib import Path

import pytest

from backend.app.schemas.information import Information
from backend.app.schemas.location import Location
from backend.app.schemas.plant import Plant

SCHEMA = (Path(__file__).resolve().parents[2] / "app" / "db" / "schema.sql").read_text()


def _column(table: str, column: str) -> str:
    body = re.search(rf"CREATE TABLE IF NOT EXISTS {table} \((.*?)\n\);", SCHEMA, re.S).group(1)
    line = next(ln for ln in body.splitlines() if ln.strip().startswith(column + " "))
    return line.strip().rstrip(",")


def test_location_name_key_compares_exactly():
    assert "COLLATE utf8mb4_bin" in _column("location", "location_name")


def test_height_column_holds_any_float():
    assert _column("plant", "height").split()[1] == "DOUBLE"


@pytest.mark.parametrize(
    "model, field, table, column",
    [
        (Plant, "name", "plant", "name"),
        (Plant, "type", "plant", "type"),
        (Plant, "location_name", "plant", "location_name"),
        (Information, "soil_type", "information", "soil_type"),
        (Information, "pot_size", "information", "pot_size"),
        (Location, "location_name", "location", "location_name"),
        (Location, "light_level", "location", "light_level"),
    ],
)
def test_model_lengths_match_varchar_columns(model, field, table, column):
    size = int(re.search(r"VARCHAR\((\d+)\)", _column(table, column)).group(1))
    limits = [m.max_length for m in model.model_fields[field].metadata if hasattr(m, "max_length")]
    assert limits == [size]
