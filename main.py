#!/usr/bin/env python3
"""
Cargo Dispatch Planner

Groups pending shipments into batches, picks the best batch for the
available fleet and routes it through the delivery map.

Usage:
    python main.py [options]

Options:
    --snapshot FILE          Snapshot JSON filename (default: sample_snapshot.json)
    --results-file FILE      Output results filename (default: planning_results.json)
    --route-strategy NAME    nearest_neighbor or two_opt (default: nearest_neighbor)
    --analyze                Print the planning analysis instead of planning
    --verbose                Enable verbose logging
"""

import argparse
import sys
import logging

from cargo_dispatch import Config, RoutingParams, setup_logging
from cargo_dispatch.config import ROUTE_STRATEGIES
from cargo_dispatch.planning import PlanningService
from cargo_dispatch.utils import load_snapshot, save_json, PlanValidator
from cargo_dispatch.reporters import print_results, print_analysis


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Plan the next cargo dispatch from a snapshot"
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default="sample_snapshot.json",
        help="Filename of the planning snapshot JSON"
    )
    parser.add_argument(
        "--results-file",
        type=str,
        default="planning_results.json",
        help="Filename to save results"
    )
    parser.add_argument(
        "--route-strategy",
        choices=ROUTE_STRATEGIES,
        default="nearest_neighbor",
        help="Multi-destination routing strategy"
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Print the planning analysis instead of planning a dispatch"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(level=log_level)

    try:
        config = Config(
            snapshot_file=args.snapshot,
            results_file=args.results_file,
            routing_params=RoutingParams(strategy=args.route_strategy),
            log_level=log_level,
        )

        logger.info("Loading snapshot...")
        snapshot = load_snapshot(config.snapshot_file)
        logger.info(
            f"Loaded {len(snapshot.shipments)} shipments, {len(snapshot.vehicles)} vehicles, "
            f"{len(snapshot.locations)} locations, {len(snapshot.roads)} roads"
        )

        service = PlanningService(
            planner_params=config.planner_params,
            routing_params=config.routing_params,
        )

        if args.analyze:
            analysis = service.analyze_planning_state(snapshot)
            print_analysis(analysis)
            save_json(analysis.to_dict(), config.results_file)
            logger.info(f"Analysis saved to {config.results_file}")
            return 0

        graph = service.build_graph(snapshot)
        result = service.plan_next_shipment(snapshot, graph)
        validation = PlanValidator(graph).validate(result)

        print_results(result, validation)

        output_data = result.to_dict()
        output_data["validation"] = validation.to_dict()
        save_json(output_data, config.results_file)
        logger.info(f"Results saved to {config.results_file}")

        return 0 if result.success and validation.is_valid else 1

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Data error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
