from pathlib import Path

import pytest

from cargo_dispatch.models import Graph, Location, Road, Shipment, Vehicle
from cargo_dispatch.planning import PlanningSnapshot

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _shipment(sid: str, weight: float, priority: int, dest: str, origin: str = "D", status: str = "pending") -> Shipment:
    return Shipment(
        shipment_id=sid,
        weight_kg=weight,
        priority=priority,
        origin_id=origin,
        destination_id=dest,
        status=status,
    )


@pytest.fixture
def make_shipment():
    return _shipment


@pytest.fixture
def abc_shipments():
    """Two light urgent shipments sharing a destination plus one heavy, low-priority one."""
    return [
        _shipment("A", 5, 1, "X"),
        _shipment("B", 5, 1, "X"),
        _shipment("C", 100, 5, "Y"),
    ]


@pytest.fixture
def triangle_graph():
    graph = Graph()
    for node in ("X", "Y", "Z"):
        graph.add_node(node, f"Location {node}")
    graph.add_edge("X", "Y", 10)
    graph.add_edge("Y", "Z", 10)
    graph.add_edge("X", "Z", 30)
    return graph


@pytest.fixture
def depot_snapshot(abc_shipments):
    """Depot D with customers X and Y; one 10 kg vehicle parked at D."""
    return PlanningSnapshot(
        shipments=list(abc_shipments),
        vehicles=[Vehicle("V1", 10, location_id="D")],
        locations=[Location("D", "Depot"), Location("X", "Customer X"), Location("Y", "Customer Y")],
        roads=[Road("D", "X", 10), Road("X", "Y", 5), Road("D", "Y", 30)],
    )


@pytest.fixture
def sample_snapshot_path():
    return DATA_DIR / "sample_snapshot.json"
