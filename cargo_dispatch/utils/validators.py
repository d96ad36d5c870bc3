"""Plan validation utilities."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from cargo_dispatch.models import Graph
from cargo_dispatch.planning import PlanningResult

# Allowed drift between reported and recomputed route length
DISTANCE_TOLERANCE = 1e-6


@dataclass
class ValidationResult:
    """Results of plan validation."""
    is_valid: bool = True
    violations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_violation(self, message: str) -> None:
        """Add a validation violation."""
        self.violations.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a validation warning (non-fatal)."""
        self.warnings.append(message)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "violations": self.violations,
            "warnings": self.warnings,
        }


def route_length(route: Sequence[str], graph: Graph) -> Optional[float]:
    """Sum of road distances along a node path, or None if a hop has no road."""
    total = 0.0
    for a, b in zip(route, route[1:]):
        if a == b:
            continue
        hop = graph.neighbors(a).get(b)
        if hop is None:
            return None
        total += hop
    return total


def validate_route(route: Sequence[str], graph: Graph) -> bool:
    """
    Validate that every hop of a route follows a road in the graph.

    Args:
        route: Location ids in travel order
        graph: The delivery map

    Returns:
        True if route is valid, False otherwise
    """
    if not route:
        return True
    if not all(graph.has_node(node) for node in route):
        return False
    return route_length(route, graph) is not None


class PlanValidator:
    """
    Validates a planning result against the vehicle and the map.
    """

    def __init__(self, graph: Graph):
        self.graph = graph

    def validate(self, result: PlanningResult) -> ValidationResult:
        """
        Validate a complete planning result.

        Args:
            result: Planning result to check

        Returns:
            ValidationResult with detailed validation information
        """
        validation = ValidationResult()
        if not result.success or not result.batch:
            return validation

        self._validate_batch(result, validation)
        self._validate_route(result, validation)
        return validation

    def _validate_batch(self, result: PlanningResult, validation: ValidationResult) -> None:
        ids = [s.shipment_id for s in result.batch]
        if len(ids) != len(set(ids)):
            validation.add_violation("Batch contains the same shipment more than once")

        if result.vehicle is None:
            validation.add_violation("Batch has no assigned vehicle")
            return

        if not result.vehicle.can_carry(result.total_weight):
            validation.add_violation(
                f"Vehicle {result.vehicle.vehicle_id} exceeds capacity: "
                f"{result.total_weight:.2f}/{result.vehicle.capacity_kg:.2f} kg"
            )

    def _validate_route(self, result: PlanningResult, validation: ValidationResult) -> None:
        if not validate_route(result.route, self.graph):
            validation.add_violation("Route uses a hop with no road between locations")
            return

        visited = set(result.route)
        for shipment in result.batch:
            if shipment.destination_id not in visited:
                validation.add_violation(
                    f"Route never reaches {shipment.destination_id} "
                    f"(shipment {shipment.shipment_id})"
                )

        length = route_length(result.route, self.graph)
        if length is not None and abs(length - result.total_distance) > DISTANCE_TOLERANCE:
            validation.add_warning(
                f"Reported distance {result.total_distance:.2f} differs from "
                f"road total {length:.2f}"
            )
