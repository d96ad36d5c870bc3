"""Configuration module for the dispatch planner."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple
import logging


ROUTE_STRATEGIES = ("nearest_neighbor", "two_opt")


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the application logger."""
    logger = logging.getLogger("dispatch")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


@dataclass
class PlannerParams:
    """Weights and thresholds used to score batches."""
    # Composite score (lower merges first)
    urgency_weight: float = 0.4
    grouping_weight: float = 0.3
    weight_fit_weight: float = 0.2
    size_weight: float = 0.1
    reference_capacities: Tuple[float, ...] = (1000.0, 2000.0, 5000.0)

    # Dispatch efficiency (higher is better)
    efficiency_priority_weight: float = 0.4
    efficiency_utilization_weight: float = 0.3
    efficiency_destination_weight: float = 0.2
    efficiency_size_weight: float = 0.1

    # Utilization band considered a good fit for a vehicle
    optimal_utilization: Tuple[float, float] = (0.70, 0.95)
    acceptable_utilization: float = 0.50

    max_recommended_batches: int = 5


@dataclass
class RoutingParams:
    """Parameters for multi-destination routing."""
    strategy: str = "nearest_neighbor"
    average_speed_kmh: float = 60.0

    def __post_init__(self):
        if self.strategy not in ROUTE_STRATEGIES:
            raise ValueError(f"Unknown route strategy: {self.strategy}")
        if self.average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be positive")


@dataclass
class Config:
    """Configuration class for a planning run."""

    snapshot_file: str = "sample_snapshot.json"
    results_file: str = "planning_results.json"

    planner_params: PlannerParams = field(default_factory=PlannerParams)
    routing_params: RoutingParams = field(default_factory=RoutingParams)

    # Logging
    log_level: int = logging.INFO

    # Base directories (computed)
    _base_dir: Path = field(init=False)
    _data_dir: Path = field(init=False)

    def __post_init__(self):
        self._base_dir = Path(__file__).parent.parent
        self._data_dir = self._base_dir / "data"

        # Resolve relative paths
        if not Path(self.snapshot_file).is_absolute():
            self.snapshot_file = str(self._data_dir / self.snapshot_file)

    @property
    def data_dir(self) -> Path:
        return self._data_dir


def get_default_config() -> Config:
    """Return default configuration."""
    return Config()
