"""
WireData - Pure Python data model for circuit wires.

This module contains no Qt dependencies. Waypoints are stored as
tuples (x, y) rather than QPointF.
"""

from dataclasses import dataclass, field


@dataclass
class WireData:
    """
    Pure Python data class representing a wire between two component pins.

    Waypoints are a user-drawn polyline used only for rendering; they carry
    no electrical meaning.
    """

    wire_id: str
    start_component_id: str
    start_pin: str
    end_component_id: str
    end_pin: str

    waypoints: list[tuple[float, float]] = field(default_factory=list)

    def get_terminals(self) -> list[tuple[str, str]]:
        """
        Get both pin keys for this wire.

        Returns:
            List of two (component_id, pin_id) tuples.
        """
        return [(self.start_component_id, self.start_pin), (self.end_component_id, self.end_pin)]

    def connects_component(self, component_id: str) -> bool:
        """Check if this wire connects to the given component."""
        return self.start_component_id == component_id or self.end_component_id == component_id

    def connects_terminal(self, component_id: str, pin_id: str) -> bool:
        """Check if this wire connects to the given pin."""
        return (self.start_component_id == component_id and self.start_pin == pin_id) or (
            self.end_component_id == component_id and self.end_pin == pin_id
        )

    def to_dict(self) -> dict:
        """Serialize wire to dictionary (saved-circuit format)."""
        data = {
            "id": self.wire_id,
            "fromCompId": self.start_component_id,
            "fromPinId": self.start_pin,
            "toCompId": self.end_component_id,
            "toPinId": self.end_pin,
        }
        if self.waypoints:
            data["waypoints"] = [{"x": x, "y": y} for x, y in self.waypoints]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """Deserialize wire from dictionary."""
        return cls(
            wire_id=data["id"],
            start_component_id=data["fromCompId"],
            start_pin=data["fromPinId"],
            end_component_id=data["toCompId"],
            end_pin=data["toPinId"],
            waypoints=[(p["x"], p["y"]) for p in data.get("waypoints") or []],
        )

    def __repr__(self) -> str:
        return (
            f"WireData({self.wire_id}: {self.start_component_id}[{self.start_pin}] -> "
            f"{self.end_component_id}[{self.end_pin}])"
        )
