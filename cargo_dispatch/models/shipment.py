"""Shipment model representing cargo waiting to be dispatched."""

from dataclasses import dataclass
from typing import Dict

MIN_PRIORITY = 1  # most urgent
MAX_PRIORITY = 5  # least urgent


def _parse_priority(value) -> int:
    """Read an integral priority from JSON; fractional values are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"priority must be an integer, got {value!r}")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"priority must be an integer, got {value!r}")
    return int(number)


@dataclass(frozen=True)
class Shipment:
    """
    A pending shipment as captured in a planning snapshot.

    Priority is a small closed integer: 1 is the most urgent and 5 the
    least urgent. Lower values are served first.
    """
    shipment_id: str
    weight_kg: float
    priority: int
    origin_id: str
    destination_id: str
    status: str = "pending"

    def __post_init__(self):
        if self.weight_kg <= 0:
            raise ValueError(
                f"Shipment {self.shipment_id}: weight must be positive, got {self.weight_kg}"
            )
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ValueError(
                f"Shipment {self.shipment_id}: priority must be an integer, got {self.priority!r}"
            )
        if not MIN_PRIORITY <= self.priority <= MAX_PRIORITY:
            raise ValueError(
                f"Shipment {self.shipment_id}: priority must be between "
                f"{MIN_PRIORITY} and {MAX_PRIORITY}, got {self.priority}"
            )

    @classmethod
    def from_dict(cls, data: Dict) -> "Shipment":
        """Create a Shipment from dictionary data (snake_case or camelCase keys)."""
        return cls(
            shipment_id=str(data["id"]),
            weight_kg=float(data["weight_kg"] if "weight_kg" in data else data["weightKg"]),
            priority=_parse_priority(data["priority"]),
            origin_id=str(data["origin_id"] if "origin_id" in data else data["originId"]),
            destination_id=str(
                data["destination_id"] if "destination_id" in data else data["destinationId"]
            ),
            status=data.get("status", "pending"),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.shipment_id,
            "weight_kg": self.weight_kg,
            "priority": self.priority,
            "origin_id": self.origin_id,
            "destination_id": self.destination_id,
            "status": self.status,
        }
