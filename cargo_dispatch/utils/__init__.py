"""Utility functions for dispatch planning."""

from .data_loader import (
    load_json,
    save_json,
    parse_locations,
    parse_roads,
    parse_vehicles,
    parse_shipments,
    parse_snapshot,
    load_snapshot,
    build_graph,
)
from .validators import (
    PlanValidator,
    ValidationResult,
    validate_route,
    route_length,
)

__all__ = [
    "load_json",
    "save_json",
    "parse_locations",
    "parse_roads",
    "parse_vehicles",
    "parse_shipments",
    "parse_snapshot",
    "load_snapshot",
    "build_graph",
    "PlanValidator",
    "ValidationResult",
    "validate_route",
    "route_length",
]
