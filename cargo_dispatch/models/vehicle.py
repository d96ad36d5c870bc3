"""Vehicle model (planning view)."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Vehicle:
    """
    Represents a vehicle available for dispatch.

    The planner only reads the id and capacity. The orchestration layer
    uses location_id as the start of the delivery route.
    """
    vehicle_id: str
    capacity_kg: float
    location_id: Optional[str] = None
    status: str = "available"

    def __post_init__(self):
        if self.capacity_kg <= 0:
            raise ValueError(
                f"Vehicle {self.vehicle_id}: capacity must be positive, got {self.capacity_kg}"
            )

    def utilization(self, weight_kg: float) -> float:
        """Ratio of a load's weight to this vehicle's capacity."""
        return weight_kg / self.capacity_kg

    def can_carry(self, weight_kg: float) -> bool:
        """True if a load of this weight fits within capacity."""
        return weight_kg <= self.capacity_kg

    @classmethod
    def from_dict(cls, data: Dict) -> "Vehicle":
        """Create a Vehicle from dictionary data."""
        capacity = data["capacity_kg"] if "capacity_kg" in data else data["capacityKg"]
        location = data.get("location_id", data.get("locationId"))
        return cls(
            vehicle_id=str(data["id"]),
            capacity_kg=float(capacity),
            location_id=str(location) if location is not None else None,
            status=data.get("status", "available"),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.vehicle_id,
            "capacity_kg": self.capacity_kg,
            "location_id": self.location_id,
            "status": self.status,
        }
