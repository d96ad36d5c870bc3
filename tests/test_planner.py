import pytest

from cargo_dispatch.config import PlannerParams
from cargo_dispatch.grouping import LeafNode, ShipmentPlanner, group_shipments_by_destination
from cargo_dispatch.models import Vehicle


@pytest.fixture
def planner():
    return ShipmentPlanner()


@pytest.mark.parametrize(
    "weight,expected",
    [
        (800, 1.0),     # 80% of 1000
        (950, 1.0),     # 95% of 1000
        (1500, 1.0),    # 75% of 2000
        (4000, 1.0),    # 80% of 5000
        (600, 1.5),     # 60% of 1000
        (1960, 1.5),    # 98% of 2000
        (100, 2.0),
        (6000, 2.0),    # exceeds every reference capacity
    ],
)
def test_weight_factor(planner, weight, expected):
    assert planner.calculate_weight_factor(weight) == expected


@pytest.mark.parametrize(
    "count,expected",
    [(1, 1.5), (2, 1.2), (3, 1.0), (8, 1.0), (9, 1.2), (10, 1.2), (11, 1.5)],
)
def test_size_factor(planner, count, expected):
    assert planner.calculate_size_factor(count) == expected


def test_grouping_efficiency(planner, make_shipment):
    assert planner.calculate_grouping_efficiency([]) == 1.0
    assert planner.calculate_grouping_efficiency([make_shipment("A", 1, 1, "X")]) == 1.0
    shipments = [
        make_shipment("A", 1, 1, "X"),
        make_shipment("B", 1, 1, "X"),
        make_shipment("C", 1, 1, "Y"),
        make_shipment("D", 1, 1, "Y"),
    ]
    assert planner.calculate_grouping_efficiency(shipments) == 0.5


def test_leaf_score(planner, make_shipment):
    # 0.4*1 + 0.3*1.0 + 0.2*2.0 + 0.1*1.5
    leaf = LeafNode(make_shipment("A", 5, 1, "X"))
    assert planner.calculate_node_score(leaf) == pytest.approx(1.25)


def test_merged_node_score(planner, abc_shipments):
    tree = planner.build_grouping_tree(abc_shipments)
    # 0.4*1 + 0.3*0.5 + 0.2*2.0 + 0.1*1.2
    assert planner.calculate_node_score(tree.root.left) == pytest.approx(1.07)


def test_build_tree_edge_cases(planner, make_shipment):
    assert planner.build_grouping_tree([]).is_empty

    shipment = make_shipment("A", 5, 1, "X")
    tree = planner.build_grouping_tree([shipment])
    assert tree.root.is_leaf
    assert tree.root.shipment is shipment


def test_custom_weights(make_shipment):
    planner = ShipmentPlanner(PlannerParams(urgency_weight=1.0, reference_capacities=(5.0,)))
    # A full 5 kg reference is above the optimal band, so the weight factor is 1.5
    leaf = LeafNode(make_shipment("A", 5, 1, "X"))
    assert planner.calculate_node_score(leaf) == pytest.approx(1.0 + 0.3 + 0.2 * 1.5 + 0.15)


def test_analyze_dispatch_strategies(planner, abc_shipments):
    tree = planner.build_grouping_tree(abc_shipments)
    vehicles = [
        Vehicle("big", 200),
        Vehicle("tiny", 4),
        Vehicle("exact", 10),
    ]

    strategies = planner.analyze_dispatch_strategies(tree, vehicles)

    assert [s.vehicle_id for s in strategies] == ["exact", "big"]
    assert strategies[0].batch is tree.root.left
    assert strategies[0].vehicle is vehicles[2]
    # 0.4*1.0 + 0.3*0.8 + 0.2*0.5 + 0.1*0.8
    assert strategies[0].efficiency == pytest.approx(0.82)
    # 0.4*1.0 + 0.3*0.6 + 0.2*0.5 + 0.1*0.8
    assert strategies[1].efficiency == pytest.approx(0.76)
    assert strategies[0].description == (
        "Batch of 2 shipments (10kg) to 1 destination(s). "
        "Utilization: 100.0%. Average priority: 1.0"
    )


def test_analyze_dispatch_strategies_empty_tree(planner):
    tree = planner.build_grouping_tree([])
    assert planner.analyze_dispatch_strategies(tree, [Vehicle("V", 100)]) == []


def test_equal_efficiency_keeps_vehicle_order(planner, abc_shipments):
    tree = planner.build_grouping_tree(abc_shipments)
    vehicles = [Vehicle("first", 10), Vehicle("second", 10)]

    strategies = planner.analyze_dispatch_strategies(tree, vehicles)

    assert [s.vehicle_id for s in strategies] == ["first", "second"]
    assert strategies[0].batch is strategies[1].batch


@pytest.mark.parametrize(
    "utilization,expected",
    [
        (0.8, 0.4 * 1.0 + 0.3 * 1.0 + 0.2 * 0.5 + 0.1 * 1.0),
        (0.6, 0.4 * 1.0 + 0.3 * 0.8 + 0.2 * 0.5 + 0.1 * 1.0),
        (0.2, 0.4 * 1.0 + 0.3 * 0.6 + 0.2 * 0.5 + 0.1 * 1.0),
    ],
)
def test_dispatch_efficiency_utilization_bands(planner, utilization, expected):
    efficiency = planner.calculate_dispatch_efficiency(
        utilization=utilization, avg_priority=1, unique_destinations=2, shipment_count=4
    )
    assert efficiency == pytest.approx(expected)


def test_dispatch_efficiency_destination_floor(planner):
    # Every shipment to a different place: 1 - 4/4 = 0 is floored to 0.2
    efficiency = planner.calculate_dispatch_efficiency(
        utilization=0.8, avg_priority=5, unique_destinations=4, shipment_count=4
    )
    assert efficiency == pytest.approx(0.4 * 0.2 + 0.3 * 1.0 + 0.2 * 0.2 + 0.1 * 1.0)


def test_group_shipments_by_destination(make_shipment):
    shipments = [
        make_shipment("A", 1, 1, "X"),
        make_shipment("B", 1, 1, "Y"),
        make_shipment("C", 1, 1, "X"),
    ]
    groups = group_shipments_by_destination(shipments)

    assert list(groups) == ["X", "Y"]
    assert [s.shipment_id for s in groups["X"]] == ["A", "C"]
