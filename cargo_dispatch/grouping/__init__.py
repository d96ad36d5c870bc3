"""Shipment grouping tree and dispatch planning."""

from .tree import (
    GroupingNode,
    LeafNode,
    InternalNode,
    GroupingTree,
    TreeStats,
    find_best_batch_for_dispatch,
)
from .planner import (
    ShipmentPlanner,
    DispatchStrategy,
    group_shipments_by_destination,
)

__all__ = [
    "GroupingNode",
    "LeafNode",
    "InternalNode",
    "GroupingTree",
    "TreeStats",
    "find_best_batch_for_dispatch",
    "ShipmentPlanner",
    "DispatchStrategy",
    "group_shipments_by_destination",
]
