"""Shipment grouping and dispatch strategy ranking."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from cargo_dispatch.config import PlannerParams
from cargo_dispatch.grouping.tree import GroupingNode, GroupingTree, InternalNode, LeafNode
from cargo_dispatch.models.shipment import Shipment
from cargo_dispatch.models.vehicle import Vehicle
from cargo_dispatch.structures import PriorityQueue

logger = logging.getLogger("dispatch.grouping")


@dataclass
class DispatchStrategy:
    """One candidate batch for one vehicle."""
    vehicle_id: str
    batch: GroupingNode
    efficiency: float
    description: str
    vehicle: Optional[Vehicle] = None

    def to_dict(self) -> Dict:
        return {
            "vehicle_id": self.vehicle_id,
            "shipment_count": self.batch.shipment_count,
            "total_weight": self.batch.total_weight,
            "efficiency": self.efficiency,
            "description": self.description,
        }


def group_shipments_by_destination(
    shipments: Sequence[Shipment]
) -> Dict[str, List[Shipment]]:
    """
    Group shipments by their delivery destination.

    Args:
        shipments: List of shipments

    Returns:
        Dictionary mapping destination ids to shipments
    """
    groups: Dict[str, List[Shipment]] = {}
    for shipment in shipments:
        groups.setdefault(shipment.destination_id, []).append(shipment)
    return groups


class ShipmentPlanner:
    """
    Builds the grouping tree and ranks candidate batches per vehicle.

    The tree is a weighted take on Huffman construction: every node gets a
    composite score mixing urgency, destination spread, weight fit and
    batch size, and the two lowest-scoring nodes are merged until one
    remains.
    """

    def __init__(self, params: Optional[PlannerParams] = None):
        self.params = params or PlannerParams()

    def build_grouping_tree(self, shipments: Sequence[Shipment]) -> GroupingTree:
        """
        Build the grouping tree for a shipment snapshot.

        Args:
            shipments: Pending shipments

        Returns:
            GroupingTree (empty when there are no shipments)
        """
        if not shipments:
            return GroupingTree()

        if len(shipments) == 1:
            return GroupingTree(LeafNode(shipments[0]))

        queue: PriorityQueue[GroupingNode] = PriorityQueue()
        for shipment in shipments:
            leaf = LeafNode(shipment)
            queue.enqueue(leaf, self.calculate_node_score(leaf))

        while queue.size() > 1:
            left_node = queue.dequeue()
            right_node = queue.dequeue()

            parent = InternalNode(left_node, right_node)
            queue.enqueue(parent, self.calculate_node_score(parent))

        tree = GroupingTree(queue.dequeue())
        logger.debug(
            f"Built grouping tree over {len(shipments)} shipments "
            f"(height {tree.height()})"
        )
        return tree

    def calculate_node_score(self, node: GroupingNode) -> float:
        """
        Composite merge score of a node (lower merges earlier).

        Combines average urgency, grouping efficiency, weight factor and
        size factor with the configured weights.
        """
        p = self.params
        shipments = node.collect_shipments()

        avg_urgency = node.average_priority
        grouping_efficiency = self.calculate_grouping_efficiency(shipments)
        weight_factor = self.calculate_weight_factor(node.total_weight)
        size_factor = self.calculate_size_factor(len(shipments))

        return (
            avg_urgency * p.urgency_weight
            + grouping_efficiency * p.grouping_weight
            + weight_factor * p.weight_fit_weight
            + size_factor * p.size_weight
        )

    @staticmethod
    def calculate_grouping_efficiency(shipments: Sequence[Shipment]) -> float:
        """Distinct destinations per shipment; lower means a tighter batch."""
        if len(shipments) <= 1:
            return 1.0
        unique_destinations = {s.destination_id for s in shipments}
        return len(unique_destinations) / len(shipments)

    def calculate_weight_factor(self, total_weight: float) -> float:
        """
        Weight fit against the reference capacities.

        Uses the best utilization among capacities the load fits in:
        1.0 inside the optimal band, 1.5 when acceptable, 2.0 otherwise.
        """
        best_utilization = 0.0
        for capacity in self.params.reference_capacities:
            if total_weight <= capacity:
                best_utilization = max(best_utilization, total_weight / capacity)

        low, high = self.params.optimal_utilization
        if low <= best_utilization <= high:
            return 1.0
        if best_utilization >= self.params.acceptable_utilization:
            return 1.5
        return 2.0

    @staticmethod
    def calculate_size_factor(shipment_count: int) -> float:
        if 3 <= shipment_count <= 8:
            return 1.0
        if 2 <= shipment_count <= 10:
            return 1.2
        return 1.5

    def analyze_dispatch_strategies(
        self,
        tree: GroupingTree,
        vehicles: Sequence[Vehicle]
    ) -> List[DispatchStrategy]:
        """
        Pick the best batch for each vehicle and rank the results.

        Batches for different vehicles come from the same tree and may
        overlap; only the top-ranked strategy should be committed per cycle.

        Args:
            tree: Grouping tree of pending shipments
            vehicles: Available vehicles

        Returns:
            Strategies sorted by efficiency, best first
        """
        strategies: List[DispatchStrategy] = []
        if tree.is_empty:
            return strategies

        for vehicle in vehicles:
            batch = tree.find_best_batch_for_dispatch(vehicle.capacity_kg)
            if batch is None:
                logger.debug(f"No feasible batch for vehicle {vehicle.vehicle_id}")
                continue

            efficiency = self.calculate_dispatch_efficiency(
                utilization=vehicle.utilization(batch.total_weight),
                avg_priority=batch.average_priority,
                unique_destinations=len(batch.unique_destinations()),
                shipment_count=batch.shipment_count,
            )
            strategies.append(DispatchStrategy(
                vehicle_id=vehicle.vehicle_id,
                batch=batch,
                efficiency=efficiency,
                description=self.describe_batch(batch, vehicle.capacity_kg),
                vehicle=vehicle,
            ))

        strategies.sort(key=lambda s: s.efficiency, reverse=True)
        return strategies

    def calculate_dispatch_efficiency(
        self,
        utilization: float,
        avg_priority: float,
        unique_destinations: int,
        shipment_count: int
    ) -> float:
        """Overall efficiency of sending a batch on a vehicle (higher is better)."""
        p = self.params

        # Priority 1..5 maps to 1.0..0.2
        priority_score = (6 - avg_priority) / 5

        low, high = p.optimal_utilization
        if low <= utilization <= high:
            utilization_score = 1.0
        elif utilization >= p.acceptable_utilization:
            utilization_score = 0.8
        else:
            utilization_score = 0.6

        destination_score = max(0.2, 1 - unique_destinations / shipment_count)
        size_score = 1.0 if 3 <= shipment_count <= 8 else 0.8

        return (
            priority_score * p.efficiency_priority_weight
            + utilization_score * p.efficiency_utilization_weight
            + destination_score * p.efficiency_destination_weight
            + size_score * p.efficiency_size_weight
        )

    @staticmethod
    def describe_batch(batch: GroupingNode, capacity_kg: float) -> str:
        utilization = batch.total_weight / capacity_kg * 100
        destinations = len(batch.unique_destinations())
        return (
            f"Batch of {batch.shipment_count} shipments ({batch.total_weight:g}kg) "
            f"to {destinations} destination(s). Utilization: {utilization:.1f}%. "
            f"Average priority: {batch.average_priority:.1f}"
        )
