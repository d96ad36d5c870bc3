"""Data models for dispatch planning."""

from .shipment import Shipment, MIN_PRIORITY, MAX_PRIORITY
from .vehicle import Vehicle
from .location import Location, Road
from .network import Graph, ShortestPath, DistanceMatrix

__all__ = [
    "Shipment",
    "MIN_PRIORITY",
    "MAX_PRIORITY",
    "Vehicle",
    "Location",
    "Road",
    "Graph",
    "ShortestPath",
    "DistanceMatrix",
]
