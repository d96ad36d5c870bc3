"""Cargo dispatch planning package."""

from .config import Config, PlannerParams, RoutingParams, setup_logging, get_default_config

__version__ = "0.3.0"

__all__ = [
    "Config",
    "PlannerParams",
    "RoutingParams",
    "setup_logging",
    "get_default_config",
]
