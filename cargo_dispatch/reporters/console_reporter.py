"""Result reporting utilities."""

from typing import List, Optional

from cargo_dispatch.grouping import DispatchStrategy
from cargo_dispatch.planning import PlanningAnalysis, PlanningResult
from cargo_dispatch.utils import ValidationResult


def print_results(
    result: PlanningResult,
    validation: Optional[ValidationResult] = None
) -> None:
    """
    Print a planning result to console.

    Args:
        result: The planning result to print
        validation: Optional validation of the result
    """
    print("\n" + "=" * 60)
    print("PLANNING RESULT")
    print("=" * 60)

    print(f"\nStatus: {'OK' if result.success else 'FAILED'}")
    print(f"Message: {result.message}")

    if not result.batch:
        print("\n" + "=" * 60)
        return

    if result.vehicle is not None:
        utilization = result.total_weight / result.vehicle.capacity_kg * 100
        print(f"\nVehicle: {result.vehicle.vehicle_id} ({result.vehicle.capacity_kg:,.0f} kg)")
        print(f"Utilization: {utilization:.1f}%")
    print(f"Efficiency: {result.efficiency:.3f}")

    print("\n--- Route ---")
    print(f"  {' -> '.join(result.route)}")
    print(f"  Distance: {result.total_distance:,.2f} km")
    print(f"  Estimated Duration: {result.estimated_duration_minutes:,.0f} min")

    print(f"\n--- Shipments ({len(result.batch)}) ---")
    for s in result.batch:
        print(f"  - {s.shipment_id}: {s.weight_kg:.1f} kg, priority {s.priority} -> {s.destination_id}")

    if validation is not None:
        if validation.violations:
            print("\n--- Violations ---")
            for violation in validation.violations:
                print(f"  ! {violation}")
        for warning in validation.warnings:
            print(f"  ? {warning}")

    print("\n" + "=" * 60)


def print_analysis(analysis: PlanningAnalysis) -> None:
    """Print the planning state analysis to console."""
    stats = analysis.tree_stats

    print("\n" + "=" * 60)
    print("PLANNING ANALYSIS")
    print("=" * 60)
    print(f"\nPending Shipments: {analysis.total_pending_shipments}")
    print(f"Available Vehicles: {analysis.available_vehicles}")

    print("\n--- Grouping Tree ---")
    print(f"Shipments: {stats.total_shipments}")
    print(f"Total Weight: {stats.total_weight:,.1f} kg")
    print(f"Average Priority: {stats.average_priority:.2f}")
    print(f"Height: {stats.tree_height}")

    print("\n--- Recommended Batches ---")
    if analysis.recommended_batches:
        print(format_strategy_summary(analysis.recommended_batches))
    else:
        print("  None")

    print("\n" + "=" * 60)


def format_strategy_summary(strategies: List[DispatchStrategy]) -> str:
    """
    Format ranked strategies, one line each.

    Args:
        strategies: Strategies in rank order

    Returns:
        Formatted string summary
    """
    lines = []
    for rank, strategy in enumerate(strategies, start=1):
        lines.append(
            f"  {rank}. {strategy.vehicle_id} [{strategy.efficiency:.3f}] "
            f"{strategy.description}"
        )
    return "\n".join(lines)
