"""
CircuitModel - Central data store for circuit state.

This module contains no Qt dependencies. It holds the components, wires and
the bench supply voltage. Electrical nets are not stored here; the
simulation layer derives them from the wire list on every analysis call.
"""

from dataclasses import dataclass, field
from typing import Optional

from .component import ComponentData
from .wire import WireData

DEFAULT_SUPPLY_VOLTAGE = 5.0


@dataclass
class CircuitModel:
    """
    Central data store holding all circuit state.

    Components are keyed by ID and kept in insertion order, which is the
    order the solver visits them in (e.g. the first Ground wins).
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: list[WireData] = field(default_factory=list)
    supply_voltage: float = DEFAULT_SUPPLY_VOLTAGE
    component_counter: dict[str, int] = field(default_factory=dict)
    wire_counter: int = 0

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        """Add a component to the circuit."""
        self.components[component.component_id] = component

    def get_component(self, component_id: str) -> Optional[ComponentData]:
        return self.components.get(component_id)

    def component_list(self) -> list[ComponentData]:
        """Components in insertion order, the shape the solvers take."""
        return list(self.components.values())

    def remove_component(self, component_id: str) -> list[str]:
        """
        Remove a component and return the IDs of wires attached to it.

        The caller is responsible for calling remove_wire() for each returned ID.
        """
        if component_id not in self.components:
            return []

        wire_ids = [w.wire_id for w in self.wires if w.connects_component(component_id)]
        del self.components[component_id]
        return wire_ids

    # --- Wire operations ---

    def next_wire_id(self) -> str:
        self.wire_counter += 1
        wire_id = f"w{self.wire_counter}"
        while any(w.wire_id == wire_id for w in self.wires):
            self.wire_counter += 1
            wire_id = f"w{self.wire_counter}"
        return wire_id

    def add_wire(self, wire: WireData) -> None:
        self.wires.append(wire)

    def get_wire(self, wire_id: str) -> Optional[WireData]:
        return next((w for w in self.wires if w.wire_id == wire_id), None)

    def remove_wire(self, wire_id: str) -> bool:
        """Remove a wire by ID. Returns False if no such wire exists."""
        for i, wire in enumerate(self.wires):
            if wire.wire_id == wire_id:
                del self.wires[i]
                return True
        return False

    # --- Circuit operations ---

    def clear(self) -> None:
        """Clear all circuit data."""
        self.components.clear()
        self.wires.clear()
        self.component_counter.clear()
        self.wire_counter = 0
        self.supply_voltage = DEFAULT_SUPPLY_VOLTAGE

    def reset_simulation_state(self) -> None:
        for component in self.components.values():
            component.reset_simulation_state()

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary (saved-circuit JSON format)."""
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires],
            "supplyVoltage": self.supply_voltage,
            "counters": self.component_counter.copy(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """Deserialize circuit from dictionary."""
        model = cls()
        model.supply_voltage = float(data.get("supplyVoltage", DEFAULT_SUPPLY_VOLTAGE))
        model.component_counter = dict(data.get("counters", {}))

        for comp_data in data.get("components", []):
            component = ComponentData.from_dict(comp_data)
            model.components[component.component_id] = component

        for wire_data in data.get("wires", []):
            model.wires.append(WireData.from_dict(wire_data))
        model.wire_counter = len(model.wires)

        return model
