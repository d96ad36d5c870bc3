"""Planning cycle orchestration."""

from .cache import StatsCache
from .service import (
    PlanningSnapshot,
    PlanningResult,
    PlanningAnalysis,
    PlanningService,
    estimate_duration,
)

__all__ = [
    "StatsCache",
    "PlanningSnapshot",
    "PlanningResult",
    "PlanningAnalysis",
    "PlanningService",
    "estimate_duration",
]
