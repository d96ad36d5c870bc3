import pytest

from cargo_dispatch.models import Road, Shipment, Vehicle
from cargo_dispatch.utils import (
    build_graph,
    load_json,
    load_snapshot,
    parse_roads,
    parse_shipments,
    parse_snapshot,
    parse_vehicles,
    save_json,
)


def test_load_sample_snapshot(sample_snapshot_path):
    snapshot = load_snapshot(sample_snapshot_path)

    assert len(snapshot.shipments) == 5
    assert len(snapshot.vehicles) == 3
    assert len(snapshot.locations) == 5
    assert len(snapshot.roads) == 5
    assert snapshot.shipments[0] == Shipment("SHP-001", 25.5, 1, "DC-SP", "CL-SP-SOUTH")
    assert snapshot.vehicles[1] == Vehicle("DEF-5678", 3000, location_id="DC-RJ")


def test_camel_case_records():
    shipments = parse_shipments([
        {"id": 7, "weightKg": "12.5", "priority": 2, "originId": "O", "destinationId": "D"}
    ])
    vehicles = parse_vehicles([{"id": "V", "capacityKg": 900, "locationId": "O"}])
    roads = parse_roads([{"fromId": "O", "toId": "D", "distance": 3}])

    assert shipments == [Shipment("7", 12.5, 2, "O", "D")]
    assert vehicles == [Vehicle("V", 900.0, location_id="O")]
    assert roads == [Road("O", "D", 3.0)]


def test_missing_sections():
    with pytest.raises(ValueError, match="roads"):
        parse_snapshot({"locations": [], "vehicles": [], "shipments": []})


def test_missing_record_field():
    data = {
        "locations": [],
        "roads": [],
        "vehicles": [{"id": "V"}],
        "shipments": [],
    }
    with pytest.raises(ValueError):
        parse_snapshot(data)


def test_invalid_records_raise():
    with pytest.raises(ValueError):
        parse_shipments([{"id": "S", "weight_kg": 0, "priority": 1, "origin_id": "O", "destination_id": "D"}])
    with pytest.raises(ValueError):
        parse_shipments([{"id": "S", "weight_kg": 1, "priority": 6, "origin_id": "O", "destination_id": "D"}])
    with pytest.raises(ValueError):
        parse_vehicles([{"id": "V", "capacity_kg": -5}])
    with pytest.raises(ValueError):
        parse_roads([{"from": "A", "to": "B", "distance": -1}])
    with pytest.raises(ValueError):
        parse_roads([{"from": "A", "distance": 1}])


def test_load_json_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(tmp_path / "absent.json")


def test_save_json_creates_directories(tmp_path):
    target = tmp_path / "out" / "result.json"
    save_json({"route": ["A", "B"]}, target)
    assert load_json(target) == {"route": ["A", "B"]}


def test_build_graph(sample_snapshot_path):
    snapshot = load_snapshot(sample_snapshot_path)
    graph = build_graph(snapshot.locations, snapshot.roads, route_strategy="two_opt")

    assert graph.route_strategy == "two_opt"
    assert graph.dijkstra("CL-SP-SOUTH", "CL-RJ-CENTER").distance == 470


@pytest.mark.parametrize("priority", [2.7, 5.9, "1.5", True])
def test_fractional_priority_is_rejected(priority):
    with pytest.raises(ValueError):
        parse_shipments([{"id": "S", "weight_kg": 1, "priority": priority, "origin_id": "O", "destination_id": "D"}])


@pytest.mark.parametrize("priority", [3, 3.0, "3"])
def test_integral_priority_is_accepted(priority):
    shipments = parse_shipments([
        {"id": "S", "weight_kg": 1, "priority": priority, "origin_id": "O", "destination_id": "D"}
    ])
    assert shipments[0].priority == 3
