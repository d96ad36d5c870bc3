"""Planning cycle orchestration over an in-memory snapshot."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from cargo_dispatch.config import PlannerParams, RoutingParams
from cargo_dispatch.grouping import DispatchStrategy, ShipmentPlanner, TreeStats
from cargo_dispatch.models import Graph, Location, Road, Shipment, Vehicle
from cargo_dispatch.planning.cache import StatsCache

logger = logging.getLogger("dispatch.planning")


@dataclass
class PlanningSnapshot:
    """Shipments, vehicles and map captured at the start of a cycle."""
    shipments: List[Shipment] = field(default_factory=list)
    vehicles: List[Vehicle] = field(default_factory=list)
    locations: List[Location] = field(default_factory=list)
    roads: List[Road] = field(default_factory=list)

    def pending_shipments(self) -> List[Shipment]:
        return [s for s in self.shipments if s.status == "pending"]

    def available_vehicles(self) -> List[Vehicle]:
        return [v for v in self.vehicles if v.status == "available"]


@dataclass
class PlanningResult:
    """Outcome of one planning cycle."""
    success: bool
    message: str
    batch: List[Shipment] = field(default_factory=list)
    vehicle: Optional[Vehicle] = None
    route: List[str] = field(default_factory=list)
    total_distance: float = 0.0
    estimated_duration_minutes: float = 0.0
    efficiency: float = 0.0

    @classmethod
    def failure(cls, message: str) -> "PlanningResult":
        return cls(success=False, message=message)

    @property
    def total_weight(self) -> float:
        return sum(s.weight_kg for s in self.batch)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "message": self.message,
            "batch": [s.to_dict() for s in self.batch],
            "vehicle": self.vehicle.to_dict() if self.vehicle else None,
            "route": list(self.route),
            "total_distance": self.total_distance,
            "estimated_duration_minutes": self.estimated_duration_minutes,
            "efficiency": self.efficiency,
        }


@dataclass
class PlanningAnalysis:
    """Read-only view of the current planning state."""
    total_pending_shipments: int
    available_vehicles: int
    tree_stats: TreeStats
    recommended_batches: List[DispatchStrategy]

    def to_dict(self) -> Dict:
        return {
            "total_pending_shipments": self.total_pending_shipments,
            "available_vehicles": self.available_vehicles,
            "grouping_tree_stats": self.tree_stats.to_dict(),
            "recommended_batches": [s.to_dict() for s in self.recommended_batches],
        }


def estimate_duration(distance_km: float, average_speed_kmh: float = 60.0) -> float:
    """Travel time in minutes at a constant average speed."""
    return (distance_km / average_speed_kmh) * 60


class PlanningService:
    """
    Coordinates one planning cycle.

    Builds the grouping tree, ranks a batch per vehicle, routes the best
    one through the map and reports the result. The service never mutates
    the snapshot; committing the plan is left to the caller.
    """

    def __init__(
        self,
        planner_params: Optional[PlannerParams] = None,
        routing_params: Optional[RoutingParams] = None,
        cache: Optional[StatsCache] = None
    ):
        self.planner = ShipmentPlanner(planner_params)
        self.routing_params = routing_params or RoutingParams()
        self.cache = cache if cache is not None else StatsCache()

    def build_graph(self, snapshot: PlanningSnapshot) -> Graph:
        return Graph.build_from_data(
            snapshot.locations,
            snapshot.roads,
            route_strategy=self.routing_params.strategy,
        )

    def plan_next_shipment(
        self,
        snapshot: PlanningSnapshot,
        graph: Optional[Graph] = None
    ) -> PlanningResult:
        """
        Plan the next dispatch.

        Args:
            snapshot: Current shipments, vehicles and map
            graph: Prebuilt map for the snapshot (built here when omitted)

        Returns:
            PlanningResult; expected failures are reported, not raised
        """
        shipments = snapshot.pending_shipments()
        if not shipments:
            logger.info("No pending shipments to plan")
            return PlanningResult(success=True, message="No pending shipments to plan")

        vehicles = snapshot.available_vehicles()
        if not vehicles:
            logger.info("No available vehicles")
            return PlanningResult.failure("No available vehicles")

        tree = self.planner.build_grouping_tree(shipments)
        strategies = self.planner.analyze_dispatch_strategies(tree, vehicles)
        if not strategies:
            logger.info("No feasible dispatch strategy found")
            return PlanningResult.failure("No feasible dispatch strategy found")

        best = strategies[0]
        batch = best.batch.collect_shipments()
        vehicle = best.vehicle

        start = vehicle.location_id or batch[0].origin_id
        destinations = best.batch.unique_destinations()

        if graph is None:
            graph = self.build_graph(snapshot)
        route = graph.calculate_optimal_route(start, destinations)
        if route is None:
            logger.info(f"Could not route vehicle {vehicle.vehicle_id} from {start} to {destinations}")
            return PlanningResult.failure("Could not compute a feasible route")

        logger.info(
            f"Planned {len(batch)} shipments on {vehicle.vehicle_id}: "
            f"{route.distance:.1f} km, efficiency {best.efficiency:.3f}"
        )
        return PlanningResult(
            success=True,
            message=f"Batch of {len(batch)} shipments planned successfully",
            batch=batch,
            vehicle=vehicle,
            route=route.path,
            total_distance=route.distance,
            estimated_duration_minutes=estimate_duration(
                route.distance, self.routing_params.average_speed_kmh
            ),
            efficiency=best.efficiency,
        )

    def analyze_planning_state(self, snapshot: PlanningSnapshot) -> PlanningAnalysis:
        """Summarize the grouping tree and the top recommended batches."""
        shipments = snapshot.pending_shipments()
        vehicles = snapshot.available_vehicles()

        tree_stats = TreeStats()
        recommended: List[DispatchStrategy] = []

        if shipments:
            tree = self.planner.build_grouping_tree(shipments)
            tree_stats = tree.get_stats()
            strategies = self.planner.analyze_dispatch_strategies(tree, vehicles)
            recommended = strategies[:self.planner.params.max_recommended_batches]

        return PlanningAnalysis(
            total_pending_shipments=len(shipments),
            available_vehicles=len(vehicles),
            tree_stats=tree_stats,
            recommended_batches=recommended,
        )

    def quick_stats(self, snapshot: PlanningSnapshot) -> Dict[str, float]:
        """Headline counts, cached for the cache's TTL."""
        cached = self.cache.get("quick_stats")
        if cached is not None:
            return cached

        pending = snapshot.pending_shipments()
        stats = {
            "pending_shipments": len(pending),
            "available_vehicles": len(snapshot.available_vehicles()),
            "pending_weight_kg": sum(s.weight_kg for s in pending),
        }
        self.cache.set("quick_stats", stats)
        return stats
