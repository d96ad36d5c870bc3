"""Visiting-order heuristics for multi-destination routes."""

import math
from typing import Callable, List, Sequence

# (source, target) -> shortest distance, math.inf when unreachable
DistanceFn = Callable[[str, str], float]

# Ignore 2-opt gains smaller than this to avoid float churn
_MIN_GAIN = 1e-9


def nearest_neighbor(
    origin: str,
    destinations: Sequence[str],
    distance: DistanceFn
) -> List[str]:
    """
    Construct a visiting order using the nearest neighbor heuristic.

    Ties keep the destination listed first.

    Args:
        origin: Starting location id
        destinations: Location ids to visit
        distance: Shortest distance between two locations

    Returns:
        Ordered list of destinations (not including origin)
    """
    if not destinations:
        return []

    route = []
    unvisited = list(destinations)
    current = origin

    while unvisited:
        best_next = None
        best_distance = math.inf

        for dest in unvisited:
            d = distance(current, dest)
            if d < best_distance:
                best_distance = d
                best_next = dest

        if best_next is None:
            # No reachable destinations - add remaining in original order
            route.extend(unvisited)
            break

        route.append(best_next)
        unvisited.remove(best_next)
        current = best_next

    return route


def two_opt_improvement(
    route: Sequence[str],
    distance: DistanceFn,
    origin: str
) -> List[str]:
    """
    Improve an open route (origin fixed, no return leg) with 2-opt.

    Reverses route[i:j] whenever that shortens the route, until no
    reversal helps. A reversal reaching the end of the route only
    changes the edge entering the segment.

    Args:
        route: Current visiting order (not including origin)
        distance: Shortest distance between two locations
        origin: Starting point

    Returns:
        Improved visiting order
    """
    current_route = list(route)
    if len(current_route) < 3:
        return current_route

    n = len(current_route)
    improved = True

    while improved:
        improved = False

        for i in range(n - 1):
            for j in range(i + 2, n + 1):
                prev_i = origin if i == 0 else current_route[i - 1]
                tail = current_route[j] if j < n else None

                # Edges removed by reversing current_route[i:j]
                curr_cost = distance(prev_i, current_route[i])
                new_cost = distance(prev_i, current_route[j - 1])
                if tail is not None:
                    curr_cost += distance(current_route[j - 1], tail)
                    new_cost += distance(current_route[i], tail)

                if new_cost < curr_cost - _MIN_GAIN:
                    current_route[i:j] = reversed(current_route[i:j])
                    improved = True

    return current_route


def calculate_route_distance(
    origin: str,
    route: Sequence[str],
    distance: DistanceFn
) -> float:
    """
    Calculate total distance for a visiting order.

    Args:
        origin: Starting location
        route: Locations to visit in order
        distance: Shortest distance between two locations

    Returns:
        Total distance (math.inf if any leg is unreachable)
    """
    if not route:
        return 0.0

    total = distance(origin, route[0])

    for i in range(len(route) - 1):
        total += distance(route[i], route[i + 1])

    return total
