"""Delivery map graph with shortest-path and multi-stop routing."""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from cargo_dispatch.config import ROUTE_STRATEGIES
from cargo_dispatch.models.location import Location, Road
from cargo_dispatch.optimization.route_optimizer import (
    calculate_route_distance,
    nearest_neighbor,
    two_opt_improvement,
)
from cargo_dispatch.structures import PriorityQueue

logger = logging.getLogger("dispatch.network")


@dataclass
class ShortestPath:
    """Distance and node sequence of a computed route."""
    distance: float
    path: List[str]

    def to_dict(self) -> Dict:
        return {"distance": self.distance, "path": list(self.path)}


@dataclass
class DistanceMatrix:
    """
    Pre-computed shortest paths between a fixed set of points.

    Each pair is solved once; the reverse direction reuses the result
    since the graph is undirected.
    """
    legs: Dict[Tuple[str, str], ShortestPath] = field(default_factory=dict)

    def get(self, source: str, target: str) -> float:
        """Get cached distance, or infinity if not found."""
        if source == target:
            return 0.0
        leg = self.legs.get((source, target))
        return leg.distance if leg is not None else math.inf

    def path(self, source: str, target: str) -> Optional[List[str]]:
        if source == target:
            return [source]
        leg = self.legs.get((source, target))
        return leg.path if leg is not None else None

    def set(self, source: str, target: str, leg: ShortestPath) -> None:
        """Store a leg in both directions."""
        self.legs[(source, target)] = leg
        self.legs[(target, source)] = ShortestPath(leg.distance, list(reversed(leg.path)))

    @classmethod
    def from_graph(cls, graph: "Graph", points: Sequence[str]) -> "DistanceMatrix":
        """Build the matrix by running one shortest-path search per unordered pair."""
        matrix = cls()
        for i, source in enumerate(points):
            for target in points[i + 1:]:
                if source == target:
                    continue
                leg = graph.dijkstra(source, target)
                if leg is not None:
                    matrix.set(source, target, leg)
        logger.debug(f"Pre-computed {len(matrix.legs)} distance pairs")
        return matrix


class Graph:
    """
    Undirected weighted graph of locations and roads.

    Adjacency is stored in a networkx graph so every road is visible from
    both of its endpoints. Shortest paths are computed here with a lazy
    deletion Dijkstra on top of PriorityQueue.
    """

    def __init__(self, route_strategy: str = "nearest_neighbor"):
        if route_strategy not in ROUTE_STRATEGIES:
            raise ValueError(f"Unknown route strategy: {route_strategy}")
        self.graph = nx.Graph()
        self.route_strategy = route_strategy

    def add_node(self, location_id: str, name: Optional[str] = None) -> None:
        """Register a location. Re-adding an existing id only updates its name."""
        self.graph.add_node(location_id, name=name if name is not None else location_id)

    def add_location(self, location: Location) -> None:
        self.add_node(location.location_id, location.name)

    def add_edge(self, from_id: str, to_id: str, weight: float) -> None:
        """
        Add an undirected road.

        Roads touching an unregistered location are skipped. When two roads
        join the same pair of locations the shorter one is kept.
        """
        if weight < 0:
            raise ValueError(f"Road {from_id}-{to_id}: negative distance {weight}")
        if from_id not in self.graph or to_id not in self.graph:
            logger.warning(f"Skipping road {from_id}-{to_id}: unknown location")
            return

        existing = self.graph.get_edge_data(from_id, to_id)
        if existing is not None and existing["distance"] <= weight:
            return
        self.graph.add_edge(from_id, to_id, distance=float(weight))

    def add_road(self, road: Road) -> None:
        self.add_edge(road.from_id, road.to_id, road.distance)

    def has_node(self, location_id: str) -> bool:
        return location_id in self.graph

    def node_name(self, location_id: str) -> str:
        if location_id in self.graph:
            return self.graph.nodes[location_id].get("name", location_id)
        return location_id

    def nodes(self) -> List[Location]:
        return [Location(node_id, data.get("name", node_id)) for node_id, data in self.graph.nodes(data=True)]

    def edges(self) -> List[Road]:
        """Return every road once."""
        return [Road(a, b, data["distance"]) for a, b, data in self.graph.edges(data=True)]

    def neighbors(self, location_id: str) -> Dict[str, float]:
        """Map each adjacent location to the road distance."""
        if location_id not in self.graph:
            return {}
        return {neighbor: data["distance"] for neighbor, data in self.graph.adj[location_id].items()}

    def dijkstra(self, start: str, end: str) -> Optional[ShortestPath]:
        """
        Find the shortest path between two locations.

        A location may sit in the queue several times when its distance
        improves after it was first pushed; the visited set discards those
        stale entries when they are popped.

        Returns:
            ShortestPath, or None if either id is unknown or no path exists
        """
        if start not in self.graph or end not in self.graph:
            return None

        distances = {node: math.inf for node in self.graph}
        previous: Dict[str, Optional[str]] = {node: None for node in self.graph}
        distances[start] = 0.0
        visited = set()

        queue: PriorityQueue[str] = PriorityQueue()
        queue.enqueue(start, 0.0)

        while not queue.is_empty():
            current = queue.dequeue()
            if current in visited:
                continue
            visited.add(current)

            if current == end:
                break

            for neighbor, data in self.graph.adj[current].items():
                if neighbor in visited:
                    continue
                candidate = distances[current] + data["distance"]
                if candidate < distances[neighbor]:
                    distances[neighbor] = candidate
                    previous[neighbor] = current
                    queue.enqueue(neighbor, candidate)

        path = []
        node: Optional[str] = end
        while node is not None:
            path.append(node)
            node = previous[node]
        path.reverse()

        if path[0] != start:
            return None

        return ShortestPath(distance=distances[end], path=path)

    def calculate_optimal_route(
        self,
        start: str,
        destinations: Iterable[str],
        strategy: Optional[str] = None
    ) -> Optional[ShortestPath]:
        """
        Compute a route from start visiting every destination.

        Args:
            start: Starting location id
            destinations: Location ids to visit (duplicates are visited once)
            strategy: 'nearest_neighbor' or 'two_opt' (defaults to the graph's strategy)

        Returns:
            ShortestPath with the full node sequence, or None if some
            destination cannot be reached
        """
        strategy = strategy or self.route_strategy
        if strategy not in ROUTE_STRATEGIES:
            raise ValueError(f"Unknown route strategy: {strategy}")

        stops = list(dict.fromkeys(destinations))

        if not stops:
            return ShortestPath(distance=0.0, path=[start])

        if len(stops) == 1:
            return self.dijkstra(start, stops[0])

        if strategy == "two_opt":
            route = self._route_two_opt(start, stops)
        else:
            route = self._route_nearest_neighbor(start, stops)

        if route is None:
            logger.debug(f"No route from {start} through {stops}")
        return route

    def _route_nearest_neighbor(self, start: str, stops: List[str]) -> Optional[ShortestPath]:
        current = start
        total_distance = 0.0
        full_path = [start]
        remaining = list(stops)

        while remaining:
            closest: Optional[str] = None
            closest_leg: Optional[ShortestPath] = None

            for destination in remaining:
                leg = self.dijkstra(current, destination)
                if leg is not None and (closest_leg is None or leg.distance < closest_leg.distance):
                    closest = destination
                    closest_leg = leg

            if closest_leg is None:
                return None

            full_path.extend(closest_leg.path[1:])
            total_distance += closest_leg.distance
            remaining.remove(closest)
            current = closest

        return ShortestPath(distance=total_distance, path=full_path)

    def _route_two_opt(self, start: str, stops: List[str]) -> Optional[ShortestPath]:
        matrix = DistanceMatrix.from_graph(self, [start] + stops)

        order = nearest_neighbor(start, stops, matrix.get)
        total_distance = calculate_route_distance(start, order, matrix.get)
        if math.isinf(total_distance):
            return None

        if len(order) > 3:
            improved = two_opt_improvement(order, matrix.get, start)
            improved_distance = calculate_route_distance(start, improved, matrix.get)
            if improved_distance < total_distance:
                order, total_distance = improved, improved_distance

        full_path = [start]
        current = start
        for stop in order:
            full_path.extend(matrix.path(current, stop)[1:])
            current = stop

        return ShortestPath(distance=total_distance, path=full_path)

    @classmethod
    def build_from_data(
        cls,
        locations: Iterable[Location],
        roads: Iterable[Road],
        route_strategy: str = "nearest_neighbor"
    ) -> "Graph":
        """
        Build a graph from location and road records.

        Args:
            locations: Locations to register as nodes
            roads: Roads to add as undirected edges
            route_strategy: Default multi-destination strategy

        Returns:
            Constructed Graph instance
        """
        graph = cls(route_strategy=route_strategy)
        for location in locations:
            graph.add_location(location)
        for road in roads:
            graph.add_road(road)
        logger.debug(
            f"Built graph with {graph.graph.number_of_nodes()} locations "
            f"and {graph.graph.number_of_edges()} roads"
        )
        return graph
