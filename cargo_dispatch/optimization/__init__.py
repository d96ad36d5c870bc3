"""Route ordering heuristics."""

from .route_optimizer import (
    nearest_neighbor,
    two_opt_improvement,
    calculate_route_distance,
)

__all__ = [
    "nearest_neighbor",
    "two_opt_improvement",
    "calculate_route_distance",
]
