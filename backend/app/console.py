"""
Console client for the plant store.

    python -m backend.app.console list
    python -m backend.app.console summary
    python -m backend.app.console show 3
    python -m backend.app.console search fern
    python -m backend.app.console add "Boston Fern" --type Fern --height 30 --acquired 2024-01-01
    python -m backend.app.console set-care 3 --watered 2024-02-01
    python -m backend.app.console set-location 3 Desk --light Bright
    python -m backend.app.console delete 3

Talks to the database directly through PlantManager, using the same
PLANTDB_* settings as the API.
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from functools import partial
from typing import Optional, TextIO

from pydantic import ValidationError

from .config import AppSettings
from .db.core import get_conn
from .errors import ConnectivityFailure, InvalidArgument
from .schemas.care import Care
from .schemas.information import Information
from .schemas.location import Location
from .schemas.plant import Plant
from .services.plant_manager import PlantManager

logger = logging.getLogger(__name__)


def _safe(value: Optional[str], width: int) -> str:
    if value is None:
        return "N/A"
    if len(value) <= width:
        return value
    return value[: width - 3] + "..."


def _na(value) -> str:
    return "N/A" if value is None else str(value)


def print_plant(manager: PlantManager, plant: Plant, out: TextIO) -> None:
    """Print a plant followed by its care, information and locations."""
    print(f"Plant ID: {plant.plant_id}", file=out)
    print(f"Name    : {_safe(plant.name, 40)}", file=out)
    print(f"Type    : {_safe(plant.type, 40)}", file=out)
    print(f"Height  : {_na(plant.height)}", file=out)
    print(f"Acquired: {_na(plant.date_acquired)}", file=out)
    print(f"LocName : {_safe(plant.location_name, 40)}", file=out)

    care = manager.get_care(plant.plant_id)
    info = manager.get_information(plant.plant_id)
    locations = manager.get_locations(plant.plant_id)

    print("\n--- Care ---", file=out)
    if care is not None:
        print(f"Last Soil Change: {_na(care.last_soil_change)}", file=out)
        print(f"Last Watering   : {_na(care.last_watering)}", file=out)
    else:
        print("No care record.", file=out)

    print("\n--- Information ---", file=out)
    if info is not None:
        print(f"From Another Plant : {info.from_another_plant}", file=out)
        print(f"Soil Type          : {_safe(info.soil_type, 40)}", file=out)
        print(f"Pot Size           : {_safe(info.pot_size, 20)}", file=out)
        print(f"Water Globe Req.   : {info.water_globe_required}", file=out)
    else:
        print("No information record.", file=out)

    print("\n--- Locations ---", file=out)
    if locations:
        for loc in locations:
            print(f" - {loc.location_name} (Light: {_safe(loc.light_level, 20)})", file=out)
    else:
        print("No locations recorded.", file=out)


def _cmd_list(manager: PlantManager, args, out: TextIO) -> int:
    plants = manager.get_all_plants()
    if not plants:
        print("No plants found.", file=out)
        return 0
    for plant in plants:
        print_plant(manager, plant, out)
        print("-" * 38, file=out)
    print(f"Total: {len(plants)} plants", file=out)
    return 0


def _cmd_summary(manager: PlantManager, args, out: TextIO) -> int:
    plants = manager.get_all_plants()
    if not plants:
        print("No plants found.", file=out)
        return 0
    print(f"{'ID':<6} {'Name':<20} {'Type':<20}", file=out)
    print("-" * 46, file=out)
    for plant in plants:
        print(f"{plant.plant_id:<6} {_safe(plant.name, 20):<20} {_safe(plant.type, 20):<20}", file=out)
    print(f"Total: {len(plants)} plants", file=out)
    return 0


def _cmd_show(manager: PlantManager, args, out: TextIO) -> int:
    plant = manager.get_plant(args.plant_id)
    if plant is None:
        print(f"No plant found with ID {args.plant_id}", file=out)
        return 2
    print_plant(manager, plant, out)
    return 0


def _cmd_search(manager: PlantManager, args, out: TextIO) -> int:
    matches = manager.search_plants(args.term)
    if not matches:
        print(f'No plants match "{args.term}"', file=out)
        return 0
    print(f"Found {len(matches)} matches:", file=out)
    for plant in matches:
        print(f"ID: {plant.plant_id}  Name: {plant.name}  Type: {_na(plant.type)}", file=out)
    return 0


def _normalize_name(s: Optional[str]) -> str:
    return " ".join((s or "").split())


def _plant_fields(args) -> dict:
    """Plant columns given on the command line; omitted options are left out."""
    fields = {}
    for attr, key in (("type", "type"), ("height", "height"), ("acquired", "date_acquired"), ("location", "location_name")):
        value = getattr(args, attr)
        if value is not None:
            fields[key] = value
    return fields


def _missing(plant_id: int, out: TextIO) -> int:
    print(f"No plant found with ID {plant_id}", file=out)
    return 2


def _cmd_add(manager: PlantManager, args, out: TextIO) -> int:
    name = _normalize_name(args.name)
    if not name:
        print("Name cannot be empty", file=out)
        return 2
    plant = manager.save_plant(Plant.model_validate({**_plant_fields(args), "name": name}))
    print(f"Created plant with ID {plant.plant_id}", file=out)
    return 0


def _cmd_update(manager: PlantManager, args, out: TextIO) -> int:
    plant = manager.get_plant(args.plant_id)
    if plant is None:
        return _missing(args.plant_id, out)
    changes = _plant_fields(args)
    if args.name is not None:
        changes["name"] = _normalize_name(args.name)
        if not changes["name"]:
            print("Name cannot be empty", file=out)
            return 2
    manager.save_plant(Plant.model_validate({**plant.model_dump(), **changes}))
    print(f"Updated plant {plant.plant_id}", file=out)
    return 0


def _cmd_delete(manager: PlantManager, args, out: TextIO) -> int:
    if not manager.delete_plant(args.plant_id):
        return _missing(args.plant_id, out)
    print(f"Deleted plant {args.plant_id} and its related records", file=out)
    return 0


def _cmd_set_care(manager: PlantManager, args, out: TextIO) -> int:
    if manager.get_plant(args.plant_id) is None:
        return _missing(args.plant_id, out)
    care = manager.get_care(args.plant_id) or Care(plant_id=args.plant_id)
    if args.soil_change is not None:
        care.last_soil_change = args.soil_change
    if args.watered is not None:
        care.last_watering = args.watered
    manager.save_care(care)
    print(f"Saved care for plant {args.plant_id}", file=out)
    return 0


def _cmd_set_info(manager: PlantManager, args, out: TextIO) -> int:
    if manager.get_plant(args.plant_id) is None:
        return _missing(args.plant_id, out)
    info = manager.get_information(args.plant_id) or Information(plant_id=args.plant_id)
    changes = {
        key: value
        for key, value in (
            ("from_another_plant", args.from_another_plant),
            ("soil_type", args.soil_type),
            ("pot_size", args.pot_size),
            ("water_globe_required", args.water_globe),
        )
        if value is not None
    }
    manager.save_information(Information.model_validate({**info.model_dump(), **changes}))
    print(f"Saved information for plant {args.plant_id}", file=out)
    return 0


def _cmd_set_location(manager: PlantManager, args, out: TextIO) -> int:
    if manager.get_plant(args.plant_id) is None:
        return _missing(args.plant_id, out)
    name = _normalize_name(args.location_name)
    if not name:
        print("Location name cannot be empty", file=out)
        return 2
    manager.save_location(Location(plant_id=args.plant_id, location_name=name, light_level=args.light))
    print(f'Saved location "{name}" for plant {args.plant_id}', file=out)
    return 0


def _add_plant_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--type")
    parser.add_argument("--height", type=float)
    parser.add_argument("--acquired", type=date.fromisoformat, help="Date acquired, YYYY-MM-DD")
    parser.add_argument("--location", help="Location label stored on the plant")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plant-tracker", description="Browse and edit the plant store")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all plants with their related records").set_defaults(handler=_cmd_list)
    sub.add_parser("summary", help="List plants as id, name, type").set_defaults(handler=_cmd_summary)

    show = sub.add_parser("show", help="Show one plant with its care, information and locations")
    show.add_argument("plant_id", type=int)
    show.set_defaults(handler=_cmd_show)

    search = sub.add_parser("search", help="Search plants by partial name")
    search.add_argument("term")
    search.set_defaults(handler=_cmd_search)

    add = sub.add_parser("add", help="Create a plant")
    add.add_argument("name")
    _add_plant_options(add)
    add.set_defaults(handler=_cmd_add)

    update = sub.add_parser("update", help="Change fields of an existing plant")
    update.add_argument("plant_id", type=int)
    update.add_argument("--name")
    _add_plant_options(update)
    update.set_defaults(handler=_cmd_update)

    delete = sub.add_parser("delete", help="Delete a plant and its related records")
    delete.add_argument("plant_id", type=int)
    delete.set_defaults(handler=_cmd_delete)

    care = sub.add_parser("set-care", help="Record soil change and watering dates")
    care.add_argument("plant_id", type=int)
    care.add_argument("--soil-change", type=date.fromisoformat, help="YYYY-MM-DD")
    care.add_argument("--watered", type=date.fromisoformat, help="YYYY-MM-DD")
    care.set_defaults(handler=_cmd_set_care)

    info = sub.add_parser("set-info", help="Record soil, pot and propagation details")
    info.add_argument("plant_id", type=int)
    info.add_argument("--from-another-plant", action=argparse.BooleanOptionalAction, default=None)
    info.add_argument("--soil-type")
    info.add_argument("--pot-size")
    info.add_argument("--water-globe", action=argparse.BooleanOptionalAction, default=None)
    info.set_defaults(handler=_cmd_set_info)

    location = sub.add_parser("set-location", help="Add or update one of a plant's locations")
    location.add_argument("plant_id", type=int)
    location.add_argument("location_name")
    location.add_argument("--light", help="Light level, e.g. Low, Medium, Bright")
    location.set_defaults(handler=_cmd_set_location)
    return parser


def main(argv: list[str] | None = None, manager: PlantManager | None = None, out: TextIO | None = None) -> int:
    if out is None:
        out = sys.stdout
    args = build_parser().parse_args(argv)
    if manager is None:
        settings = AppSettings.from_env()
        logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
        manager = PlantManager.from_conn_factory(partial(get_conn, settings.db), atomic_upsert=settings.atomic_upsert)
    try:
        return args.handler(manager, args, out)
    except (ValidationError, InvalidArgument) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    except ConnectivityFailure as e:
        logger.error("Store failure: %s", e)
        print(f"Error talking to the plant store: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
