"""
FileController - Handles circuit file I/O.

File dialog interaction is the responsibility of the view layer.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.circuit import CircuitModel
from models.component import normalize_component_type

logger = logging.getLogger(__name__)


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")
    if "supplyVoltage" in data and not isinstance(data["supplyVoltage"], (int, float)):
        raise ValueError("'supplyVoltage' must be numeric.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        normalize_component_type(comp["type"])
        for key in ("x", "y"):
            if key in comp and not isinstance(comp[key], (int, float)):
                raise ValueError(f"Component '{comp['id']}' position values must be numeric.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        comp_ids.add(comp["id"])

    wire_ids = set()
    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        for key in ("id", "fromCompId", "fromPinId", "toCompId", "toPinId"):
            if key not in wire:
                raise ValueError(f"Wire #{i + 1} is missing required field '{key}'.")
        if wire["id"] in wire_ids:
            raise ValueError(f"Duplicate wire id '{wire['id']}'.")
        wire_ids.add(wire["id"])
        if wire["fromCompId"] not in comp_ids:
            raise ValueError(f"Wire #{i + 1} references unknown component '{wire['fromCompId']}'.")
        if wire["toCompId"] not in comp_ids:
            raise ValueError(f"Wire #{i + 1} references unknown component '{wire['toCompId']}'.")


def read_circuit_file(filepath) -> CircuitModel:
    """
    Read and validate a circuit JSON file.

    Raises:
        json.JSONDecodeError: If file is not valid JSON.
        ValueError: If file structure is invalid.
        OSError: If the file cannot be read.
    """
    with open(Path(filepath), "r") as f:
        data = json.load(f)
    validate_circuit_data(data)
    return CircuitModel.from_dict(data)


class FileController:
    """
    Manages circuit file I/O.

    Handles saving/loading circuit data as JSON and tracking
    the current file path for quick-save.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.model.clear()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Simulation-derived state (LED brightness, meter readouts) is saved
        as-is; it is recomputed on the next tick after loading.

        Raises:
            OSError: If the file cannot be written.
            TypeError: If model data is not JSON-serializable.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)
        self.current_file = filepath
        logger.info("Saved circuit to %s", filepath)

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_saved", None)

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Validates JSON structure before loading. Updates the model
        in place (preserving the reference so views stay connected).
        """
        filepath = Path(filepath)
        new_model = read_circuit_file(filepath)

        self.model.clear()
        self.model.components = new_model.components
        self.model.wires = new_model.wires
        self.model.supply_voltage = new_model.supply_voltage
        self.model.component_counter = new_model.component_counter
        self.model.wire_counter = new_model.wire_counter

        self.current_file = filepath
        logger.info("Loaded circuit from %s (%d components, %d wires)",
                    filepath, len(self.model.components), len(self.model.wires))

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_loaded", None)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_window_title(self, base: str = "Circuit Lab") -> str:
        """Get window title based on current file."""
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base
