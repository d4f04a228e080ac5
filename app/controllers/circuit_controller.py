"""
CircuitController - Orchestrates component and wire editing operations.

This module contains no Qt dependencies. It manages the CircuitModel
and notifies views of changes through an observer pattern.
"""

import logging
from typing import Any, Callable, Optional

from models.circuit import CircuitModel
from models.component import (
    COMPONENT_SYMBOLS,
    MULTIMETER_MODE_CYCLE,
    ComponentData,
    MultimeterMode,
    normalize_component_type,
)
from models.geometry import snap_point
from models.wire import WireData

logger = logging.getLogger(__name__)


class CircuitController:
    """
    Controller for circuit component and wire operations.

    Manages the CircuitModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events:
        component_added (ComponentData) - A new component was added
        component_removed (str) - A component was removed (by ID)
        component_rotated (ComponentData) - A component was rotated
        component_moved (ComponentData) - A component was moved
        component_properties_changed (ComponentData) - A property was edited
        wire_added (WireData) - A new wire was added
        wire_removed (str) - A wire was removed (by ID)
        circuit_cleared (None) - The entire circuit was cleared
        supply_voltage_changed (float) - The bench supply was adjusted
        simulation_started (None) - Simulation began
        simulation_stopped (None) - Simulation was stopped
        simulation_fault (FaultDiagnosis) - A safety check halted the simulation
        simulation_tick (SimulationResult) - A simulation step finished
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self.model = model or CircuitModel()
        self._observers: list[Callable[[str, Any], None]] = []

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    def _require_component(self, component_id: str, component_type: Optional[str] = None) -> ComponentData:
        component = self.model.components.get(component_id)
        if component is None:
            raise ValueError(f"Unknown component: {component_id!r}")
        if component_type is not None and component.component_type != component_type:
            raise ValueError(f"{component_id} is a {component.component_type}, not a {component_type}")
        return component

    # --- Component operations ---

    def add_component(self, component_type: str,
                      position: tuple[float, float]) -> ComponentData:
        """
        Create and add a new component at a grid-snapped position.

        Generates a unique ID using the component counter (R1, R2, V1, etc.).

        Returns:
            The newly created ComponentData.
        """
        component_type = normalize_component_type(component_type)
        symbol = COMPONENT_SYMBOLS[component_type]
        count = self.model.component_counter.get(symbol, 0) + 1
        while f"{symbol}{count}" in self.model.components:
            count += 1
        self.model.component_counter[symbol] = count

        component = ComponentData(
            component_id=f"{symbol}{count}",
            component_type=component_type,
            position=snap_point(position),
        )
        self.model.add_component(component)
        self._notify('component_added', component)
        return component

    def remove_component(self, component_id: str) -> None:
        """Remove a component and all connected wires."""
        for wire_id in self.model.remove_component(component_id):
            self.model.remove_wire(wire_id)
            self._notify('wire_removed', wire_id)
        self._notify('component_removed', component_id)

    def rotate_component(self, component_id: str) -> None:
        """Rotate a component 90 degrees clockwise."""
        component = self.model.components.get(component_id)
        if component is None:
            return
        component.rotation = (component.rotation + 90) % 360
        self._notify('component_rotated', component)

    def move_component(self, component_id: str,
                       position: tuple[float, float]) -> None:
        """Move a component to a new (grid-snapped) position."""
        component = self.model.components.get(component_id)
        if component is None:
            return
        component.position = snap_point(position)
        self._notify('component_moved', component)

    # --- Property editing ---

    def toggle_switch(self, component_id: str) -> bool:
        """Flip a switch open/closed. Returns the new is_open state."""
        component = self._require_component(component_id, "Switch")
        component.properties.is_open = not component.properties.is_open
        self._notify('component_properties_changed', component)
        return component.properties.is_open

    def set_wiper_position(self, component_id: str, position: float) -> None:
        """Set a potentiometer's wiper, clamped to 0..100 percent."""
        component = self._require_component(component_id, "Potentiometer")
        component.properties.wiper_position = min(100.0, max(0.0, float(position)))
        self._notify('component_properties_changed', component)

    def set_resistor_bands(self, component_id: str, bands: list[str]) -> None:
        if len(bands) not in (4, 5):
            raise ValueError(f"A resistor needs 4 or 5 bands, got {len(bands)}")
        component = self._require_component(component_id, "Resistor")
        component.properties.bands = list(bands)
        self._notify('component_properties_changed', component)

    def set_multimeter_mode(self, component_id: str, mode: MultimeterMode) -> MultimeterMode:
        """Select a meter mode; selecting the active mode again turns the meter off."""
        component = self._require_component(component_id, "Multimeter")
        mode = MultimeterMode(mode)
        props = component.properties
        props.mode = MultimeterMode.OFF if props.mode == mode else mode
        self._notify('component_properties_changed', component)
        return props.mode

    def cycle_multimeter_mode(self, component_id: str) -> MultimeterMode:
        """Advance OFF -> V -> OHM -> A -> OFF."""
        component = self._require_component(component_id, "Multimeter")
        props = component.properties
        idx = MULTIMETER_MODE_CYCLE.index(props.mode)
        props.mode = MULTIMETER_MODE_CYCLE[(idx + 1) % len(MULTIMETER_MODE_CYCLE)]
        self._notify('component_properties_changed', component)
        return props.mode

    def set_supply_voltage(self, voltage: float) -> None:
        self.model.supply_voltage = float(voltage)
        self._notify('supply_voltage_changed', self.model.supply_voltage)

    # --- Wire operations ---

    def add_wire(self, start_comp_id: str, start_pin: str,
                 end_comp_id: str, end_pin: str,
                 waypoints: Optional[list[tuple[float, float]]] = None) -> WireData:
        """
        Create and add a new wire between two existing pins.

        Raises:
            ValueError: If either component or pin does not exist.

        Returns:
            The newly created WireData.
        """
        for comp_id, pin_id in ((start_comp_id, start_pin), (end_comp_id, end_pin)):
            component = self._require_component(comp_id)
            if not component.has_pin(pin_id):
                raise ValueError(f"{comp_id} ({component.component_type}) has no pin {pin_id!r}")

        wire = WireData(
            wire_id=self.model.next_wire_id(),
            start_component_id=start_comp_id,
            start_pin=start_pin,
            end_component_id=end_comp_id,
            end_pin=end_pin,
            waypoints=waypoints or [],
        )
        self.model.add_wire(wire)
        self._notify('wire_added', wire)
        return wire

    def remove_wire(self, wire_id: str) -> None:
        """Remove a wire by ID."""
        if self.model.remove_wire(wire_id):
            self._notify('wire_removed', wire_id)

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        self.model.clear()
        self._notify('circuit_cleared', None)
