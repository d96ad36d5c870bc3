"""Data loading and parsing utilities."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from cargo_dispatch.models import Graph, Location, Road, Shipment, Vehicle
from cargo_dispatch.planning import PlanningSnapshot

logger = logging.getLogger("dispatch.utils")

SNAPSHOT_KEYS = ("locations", "roads", "vehicles", "shipments")


def load_json(filepath: str | Path) -> Dict[str, Any]:
    """
    Load JSON data from a file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)


def save_json(data: Any, filepath: str | Path) -> None:
    """
    Save data to a JSON file.

    Args:
        data: Data to save (must be JSON-serializable)
        filepath: Path to save to
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    logger.debug(f"Saved data to {filepath}")


def parse_locations(records: Iterable[Dict[str, Any]]) -> List[Location]:
    locations = [Location.from_dict(r) for r in records]
    logger.debug(f"Parsed {len(locations)} locations")
    return locations


def parse_roads(records: Iterable[Dict[str, Any]]) -> List[Road]:
    roads = [Road.from_dict(r) for r in records]
    logger.debug(f"Parsed {len(roads)} roads")
    return roads


def parse_vehicles(records: Iterable[Dict[str, Any]]) -> List[Vehicle]:
    vehicles = [Vehicle.from_dict(r) for r in records]
    logger.debug(f"Parsed {len(vehicles)} vehicles")
    return vehicles


def parse_shipments(records: Iterable[Dict[str, Any]]) -> List[Shipment]:
    shipments = [Shipment.from_dict(r) for r in records]
    logger.debug(f"Parsed {len(shipments)} shipments")
    return shipments


def parse_snapshot(data: Dict[str, Any]) -> PlanningSnapshot:
    """
    Parse a planning snapshot from JSON data.

    Raises:
        ValueError: If a top-level section is missing or a record is invalid
    """
    missing = [key for key in SNAPSHOT_KEYS if key not in data]
    if missing:
        raise ValueError(f"Invalid snapshot: missing {', '.join(missing)}")

    try:
        return PlanningSnapshot(
            shipments=parse_shipments(data["shipments"]),
            vehicles=parse_vehicles(data["vehicles"]),
            locations=parse_locations(data["locations"]),
            roads=parse_roads(data["roads"]),
        )
    except KeyError as e:
        raise ValueError(f"Invalid snapshot record: missing field {e}") from e


def load_snapshot(filepath: str | Path) -> PlanningSnapshot:
    """Load and parse a planning snapshot file."""
    return parse_snapshot(load_json(filepath))


def build_graph(
    locations: Iterable[Location],
    roads: Iterable[Road],
    route_strategy: str = "nearest_neighbor"
) -> Graph:
    """
    Build the delivery map from locations and roads.

    Args:
        locations: Locations to register
        roads: Undirected roads between them
        route_strategy: Default multi-destination strategy

    Returns:
        Constructed Graph instance
    """
    return Graph.build_from_data(locations, roads, route_strategy=route_strategy)
