from dataclasses import replace

import pytest

from cargo_dispatch.models import Vehicle
from cargo_dispatch.planning import PlanningResult, PlanningService
from cargo_dispatch.utils import PlanValidator, route_length, validate_route


@pytest.fixture
def planned(depot_snapshot):
    service = PlanningService()
    return service.plan_next_shipment(depot_snapshot), service.build_graph(depot_snapshot)


def test_planned_result_is_valid(planned):
    result, graph = planned
    validation = PlanValidator(graph).validate(result)

    assert validation.is_valid
    assert validation.violations == []
    assert validation.warnings == []


def test_failed_result_is_not_checked(planned):
    _, graph = planned
    validation = PlanValidator(graph).validate(PlanningResult.failure("nothing"))
    assert validation.is_valid


def test_overweight_batch(planned):
    result, graph = planned
    overloaded = replace(result, vehicle=Vehicle("V1", 5, location_id="D"))

    validation = PlanValidator(graph).validate(overloaded)

    assert not validation.is_valid
    assert "exceeds capacity" in validation.violations[0]


def test_route_without_road(planned):
    result, graph = planned
    validation = PlanValidator(graph).validate(replace(result, route=["X", "Q"]))

    assert not validation.is_valid


def test_route_missing_destination(planned):
    result, graph = planned
    validation = PlanValidator(graph).validate(replace(result, route=["D", "Y"], total_distance=30))

    assert not validation.is_valid
    assert any("never reaches X" in v for v in validation.violations)


def test_distance_mismatch_is_a_warning(planned):
    result, graph = planned
    validation = PlanValidator(graph).validate(replace(result, total_distance=11))

    assert validation.is_valid
    assert len(validation.warnings) == 1


def test_validate_route_helpers(triangle_graph):
    assert validate_route([], triangle_graph)
    assert validate_route(["X", "Y", "Z"], triangle_graph)
    assert validate_route(["X", "X", "Y"], triangle_graph)
    assert not validate_route(["X", "missing"], triangle_graph)
    assert route_length(["X", "Y", "Z"], triangle_graph) == 20
    assert route_length(["X", "Z", "Y"], triangle_graph) == 40


def test_exact_capacity_is_allowed(planned):
    result, graph = planned
    exact = replace(result, vehicle=Vehicle("V1", result.total_weight, location_id="D"))

    assert PlanValidator(graph).validate(exact).is_valid
