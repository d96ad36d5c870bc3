import math

from cargo_dispatch.optimization import (
    calculate_route_distance,
    nearest_neighbor,
    two_opt_improvement,
)

POSITIONS = {"S": 0, "A": 1, "B": -2, "C": 4, "D": -8}


def line_distance(a, b):
    if a not in POSITIONS or b not in POSITIONS:
        return math.inf
    return abs(POSITIONS[a] - POSITIONS[b])


def test_nearest_neighbor_order():
    assert nearest_neighbor("S", ["A", "B", "C", "D"], line_distance) == ["A", "B", "C", "D"]


def test_nearest_neighbor_empty():
    assert nearest_neighbor("S", [], line_distance) == []


def test_nearest_neighbor_appends_unreachable_in_input_order():
    assert nearest_neighbor("S", ["Z", "A", "Y"], line_distance) == ["A", "Z", "Y"]


def test_calculate_route_distance():
    assert calculate_route_distance("S", [], line_distance) == 0.0
    assert calculate_route_distance("S", ["A", "B", "C", "D"], line_distance) == 22
    assert calculate_route_distance("S", ["A", "Z"], line_distance) == math.inf


def test_two_opt_improves_open_route():
    route = ["A", "B", "C", "D"]
    improved = two_opt_improvement(route, line_distance, "S")

    assert sorted(improved) == sorted(route)
    assert calculate_route_distance("S", improved, line_distance) == 16
    # Input is left untouched
    assert route == ["A", "B", "C", "D"]


def test_two_opt_can_reverse_route_tail():
    # Only reversing the last two stops helps here
    positions = {"S": 0, "P": 1, "Q": 10, "R": 5}

    def distance(a, b):
        return abs(positions[a] - positions[b])

    improved = two_opt_improvement(["P", "Q", "R"], distance, "S")
    assert improved == ["P", "R", "Q"]


def test_two_opt_short_routes_unchanged():
    assert two_opt_improvement(["B", "A"], line_distance, "S") == ["B", "A"]
