"""Hierarchical grouping tree of shipment batches."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from cargo_dispatch.models.shipment import Shipment


class GroupingNode:
    """
    A batch of shipments in the grouping tree.

    Concrete nodes are either a LeafNode holding exactly one shipment or an
    InternalNode owning exactly two children. Aggregates are fixed at
    construction: an internal node's priority and total weight are the sums
    of its children's.
    """

    __slots__ = ("priority", "total_weight", "shipment_count")

    priority: int
    total_weight: float
    shipment_count: int

    @property
    def is_leaf(self) -> bool:
        return isinstance(self, LeafNode)

    @property
    def average_priority(self) -> float:
        """Average shipment priority (lower is more urgent)."""
        return self.priority / self.shipment_count if self.shipment_count else 0.0

    def children(self) -> Tuple["GroupingNode", ...]:
        return ()

    def collect_shipments(self) -> List[Shipment]:
        """Return the shipments in this subtree, left to right."""
        shipments = []
        stack: List[GroupingNode] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, LeafNode):
                shipments.append(node.shipment)
            else:
                stack.extend(reversed(node.children()))
        return shipments

    def unique_destinations(self) -> List[str]:
        """Distinct destination ids, in first-seen order."""
        return list(dict.fromkeys(s.destination_id for s in self.collect_shipments()))

    def unique_origins(self) -> List[str]:
        return list(dict.fromkeys(s.origin_id for s in self.collect_shipments()))

    def can_fit_in_vehicle(self, capacity_kg: float) -> bool:
        return self.total_weight <= capacity_kg


class LeafNode(GroupingNode):
    """A single shipment."""

    __slots__ = ("shipment",)

    def __init__(self, shipment: Shipment):
        self.shipment = shipment
        self.priority = shipment.priority
        self.total_weight = shipment.weight_kg
        self.shipment_count = 1

    def __repr__(self) -> str:
        return f"Leaf[{self.shipment.shipment_id}] P:{self.priority} W:{self.total_weight}kg"


class InternalNode(GroupingNode):
    """A batch formed by merging two exclusively owned sub-batches."""

    __slots__ = ("left", "right")

    def __init__(self, left: GroupingNode, right: GroupingNode):
        if left is right:
            raise ValueError("An internal node needs two distinct children")
        self.left = left
        self.right = right
        self.priority = left.priority + right.priority
        self.total_weight = left.total_weight + right.total_weight
        self.shipment_count = left.shipment_count + right.shipment_count

    def children(self) -> Tuple[GroupingNode, GroupingNode]:
        return (self.left, self.right)

    def __repr__(self) -> str:
        return f"Node[{self.shipment_count} shipments] P:{self.priority} W:{self.total_weight}kg"


@dataclass
class TreeStats:
    """Summary of a grouping tree."""
    total_shipments: int = 0
    total_weight: float = 0.0
    average_priority: float = 0.0
    tree_height: int = 0

    def to_dict(self) -> Dict:
        return {
            "total_shipments": self.total_shipments,
            "total_weight": self.total_weight,
            "average_priority": self.average_priority,
            "tree_height": self.tree_height,
        }


class GroupingTree:
    """
    Binary tree of progressively larger shipment batches.

    Built fresh for each planning cycle and discarded afterwards. Every
    traversal is iterative, so heavily skewed trees are fine.
    """

    def __init__(self, root: Optional[GroupingNode] = None):
        self.root = root

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def find_best_batch_for_dispatch(
        self,
        capacity_kg: float,
        max_shipments: Optional[int] = None
    ) -> Optional[GroupingNode]:
        """
        Find the most urgent batch a vehicle can take.

        A node is feasible when its total weight fits the capacity and, if
        max_shipments is given, it holds no more than that many shipments.
        Among feasible nodes the lowest average priority wins; on ties the
        node found first (parent before left before right) is kept.

        Args:
            capacity_kg: Vehicle capacity
            max_shipments: Optional cap on the batch size

        Returns:
            The best feasible node, or None
        """
        if max_shipments is not None and max_shipments < 1:
            raise ValueError(f"max_shipments must be at least 1, got {max_shipments}")
        if self.root is None:
            return None

        def feasible(node: GroupingNode) -> bool:
            return node.can_fit_in_vehicle(capacity_kg) and (
                max_shipments is None or node.shipment_count <= max_shipments
            )

        # Post-order walk; best[id(node)] holds the answer for that subtree
        best: Dict[int, Optional[GroupingNode]] = {}
        stack: List[Tuple[GroupingNode, bool]] = [(self.root, False)]

        while stack:
            node, expanded = stack.pop()

            if isinstance(node, LeafNode):
                best[id(node)] = node if feasible(node) else None
                continue

            if not expanded:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue

            candidate = node if feasible(node) else None
            for child in node.children():
                child_best = best.pop(id(child))
                if child_best is None:
                    continue
                if candidate is None or child_best.average_priority < candidate.average_priority:
                    candidate = child_best
            best[id(node)] = candidate

        return best[id(self.root)]

    def height(self) -> int:
        """Maximum leaf depth, with the root at depth 1."""
        if self.root is None:
            return 0

        height = 0
        stack = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            height = max(height, depth)
            stack.extend((child, depth + 1) for child in node.children())
        return height

    def leaves(self) -> List[LeafNode]:
        if self.root is None:
            return []
        result = []
        stack: List[GroupingNode] = [self.root]
        while stack:
            node = stack.pop()
            if isinstance(node, LeafNode):
                result.append(node)
            else:
                stack.extend(reversed(node.children()))
        return result

    def get_stats(self) -> TreeStats:
        if self.root is None:
            return TreeStats()

        return TreeStats(
            total_shipments=self.root.shipment_count,
            total_weight=self.root.total_weight,
            average_priority=self.root.average_priority,
            tree_height=self.height(),
        )

    def pre_order_traversal(self) -> List[str]:
        """Indented one-line description per node, for debugging."""
        if self.root is None:
            return []

        lines = []
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append(f"{'  ' * depth}{node!r}")
            stack.extend((child, depth + 1) for child in reversed(node.children()))
        return lines


def find_best_batch_for_dispatch(
    tree: GroupingTree,
    capacity_kg: float,
    max_shipments: Optional[int] = None
) -> Optional[GroupingNode]:
    """Module-level entry point for GroupingTree.find_best_batch_for_dispatch."""
    return tree.find_best_batch_for_dispatch(capacity_kg, max_shipments)
