"""Location and road models for the delivery map."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Location:
    """A node of the delivery map (depot, distribution centre or customer)."""
    location_id: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict) -> "Location":
        return cls(location_id=str(data["id"]), name=data.get("name", str(data["id"])))


@dataclass(frozen=True)
class Road:
    """
    A road between two locations.

    Roads are undirected - they represent bidirectional travel.
    """
    from_id: str
    to_id: str
    distance: float  # km

    def __post_init__(self):
        if self.distance < 0:
            raise ValueError(
                f"Road {self.from_id}-{self.to_id}: distance must be >= 0, got {self.distance}"
            )

    @classmethod
    def from_dict(cls, data: Dict) -> "Road":
        """Create a Road from dictionary data."""
        from_id = data["from"] if "from" in data else data.get("from_id", data.get("fromId"))
        to_id = data["to"] if "to" in data else data.get("to_id", data.get("toId"))
        if from_id is None or to_id is None:
            raise ValueError(f"Road is missing an endpoint: {data}")
        return cls(from_id=str(from_id), to_id=str(to_id), distance=float(data["distance"]))
