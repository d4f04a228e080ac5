"""
ComponentData - Pure Python data model for circuit components.

This module contains no Qt dependencies. All positions are represented as
tuples (x, y) rather than QPointF.

Component types use display names as canonical identifiers:
'Resistor', 'Potentiometer', 'Voltage Source', 'Ground', '555 Timer',
'Multimeter', ...  Saved circuits use upper-case type tags
('RESISTOR', 'IC_555', ...); both spellings are accepted on load.

Each component type carries its own property dataclass instead of a free-form
dictionary. The dataclasses convert to and from the camelCase property
dictionaries used by the saved-circuit format.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .geometry import rotate_point

# Component type definitions using display names (canonical)
COMPONENT_TYPES = [
    "Voltage Source",
    "AC Source",
    "Ground",
    "Resistor",
    "Potentiometer",
    "Capacitor",
    "NPN Transistor",
    "PNP Transistor",
    "LED",
    "Diode",
    "Zener Diode",
    "555 Timer",
    "Switch",
    "AND Gate",
    "OR Gate",
    "NOT Gate",
    "NAND Gate",
    "NOR Gate",
    "XOR Gate",
    "Microcontroller",
    "Multimeter",
]

# Prefix used when the controller generates component IDs (R1, POT2, ...)
COMPONENT_SYMBOLS = {
    "Voltage Source": "V",
    "AC Source": "AC",
    "Ground": "GND",
    "Resistor": "R",
    "Potentiometer": "POT",
    "Capacitor": "C",
    "NPN Transistor": "Q",
    "PNP Transistor": "Q",
    "LED": "LED",
    "Diode": "D",
    "Zener Diode": "DZ",
    "555 Timer": "U",
    "Switch": "SW",
    "AND Gate": "AND",
    "OR Gate": "OR",
    "NOT Gate": "NOT",
    "NAND Gate": "NAND",
    "NOR Gate": "NOR",
    "XOR Gate": "XOR",
    "Microcontroller": "MCU",
    "Multimeter": "XMM",
}

# Mapping from serialized type tags to canonical display names
_TAG_TO_DISPLAY = {
    "VOLTAGE_SOURCE": "Voltage Source",
    "AC_SOURCE": "AC Source",
    "GROUND": "Ground",
    "RESISTOR": "Resistor",
    "POTENTIOMETER": "Potentiometer",
    "CAPACITOR": "Capacitor",
    "TRANSISTOR_NPN": "NPN Transistor",
    "TRANSISTOR_PNP": "PNP Transistor",
    "LED": "LED",
    "DIODE": "Diode",
    "ZENER_DIODE": "Zener Diode",
    "IC_555": "555 Timer",
    "SWITCH": "Switch",
    "AND_GATE": "AND Gate",
    "OR_GATE": "OR Gate",
    "NOT_GATE": "NOT Gate",
    "NAND_GATE": "NAND Gate",
    "NOR_GATE": "NOR Gate",
    "XOR_GATE": "XOR Gate",
    "MICROCONTROLLER": "Microcontroller",
    "MULTIMETER": "Multimeter",
}

# Mapping from display names to type tags (for serialization)
_DISPLAY_TO_TAG = {display: tag for tag, display in _TAG_TO_DISPLAY.items()}


@dataclass(frozen=True)
class PinDef:
    """A named attachment point, offset from the component's local origin."""

    pin_id: str
    x: float
    y: float
    kind: str = "passive"  # 'input', 'output' or 'passive'


_TWO_INPUT_GATE = [
    PinDef("in1", -40, -15, "input"),
    PinDef("in2", -40, 15, "input"),
    PinDef("out", 40, 0, "output"),
]

_DIODE_PINS = [
    PinDef("anode", -20, 0),
    PinDef("cathode", 20, 0),
]

_TRANSISTOR_PINS = [
    PinDef("c", 20, -20),  # Collector
    PinDef("b", -20, 0, "input"),  # Base
    PinDef("e", 20, 20),  # Emitter
]

# Pin table per component type, in local coordinates (before rotation)
COMPONENT_PINS: dict[str, list[PinDef]] = {
    "Resistor": [PinDef("p1", -40, 0), PinDef("p2", 40, 0)],
    "Potentiometer": [PinDef("p1", -40, 10), PinDef("p2", 40, 10), PinDef("wiper", 0, -20)],
    "Capacitor": [PinDef("p1", -20, 0), PinDef("p2", 20, 0)],
    "LED": _DIODE_PINS,
    "Diode": _DIODE_PINS,
    "Zener Diode": _DIODE_PINS,
    "NPN Transistor": _TRANSISTOR_PINS,
    "PNP Transistor": _TRANSISTOR_PINS,
    "Voltage Source": [PinDef("pos", 0, -30, "output"), PinDef("neg", 0, 30)],
    "AC Source": [PinDef("p1", 0, -30), PinDef("p2", 0, 30)],
    "Ground": [PinDef("gnd", 0, -20)],
    "Switch": [PinDef("in", -30, 0), PinDef("out", 30, 0)],
    "AND Gate": _TWO_INPUT_GATE,
    "OR Gate": _TWO_INPUT_GATE,
    "NOT Gate": [PinDef("in", -40, 0, "input"), PinDef("out", 40, 0, "output")],
    "NAND Gate": _TWO_INPUT_GATE,
    "NOR Gate": _TWO_INPUT_GATE,
    "XOR Gate": _TWO_INPUT_GATE,
    "Microcontroller": [
        PinDef("vcc", -30, -50),
        PinDef("gnd", -30, 50),
        PinDef("p0", 30, -40, "output"),
        PinDef("p1", 30, -20, "output"),
        PinDef("p2", 30, 0, "input"),
        PinDef("p3", 30, 20, "input"),
    ],
    "Multimeter": [PinDef("red", -30, 30, "input"), PinDef("black", 30, 30, "input")],
    "555 Timer": [
        PinDef("gnd", -60, -30),
        PinDef("trig", -60, -10, "input"),
        PinDef("out", -60, 10, "output"),
        PinDef("rst", -60, 30, "input"),
        PinDef("vcc", 60, -30),
        PinDef("dis", 60, -10),
        PinDef("thr", 60, 10, "input"),
        PinDef("ctrl", 60, 30, "input"),
    ],
}


# --- Per-type properties ---


@dataclass
class NoProperties:
    """Placeholder for component types without editable properties."""

    def to_dict(self) -> dict:
        return {}

    @classmethod
    def from_dict(cls, data: dict) -> "NoProperties":
        return cls()


@dataclass
class ResistorProperties:
    # Colour bands, 4 or 5 entries; default is brown-black-red-gold (1k)
    bands: list[str] = field(default_factory=lambda: ["brown", "black", "red", "gold"])

    def to_dict(self) -> dict:
        return {"bands": list(self.bands)}

    @classmethod
    def from_dict(cls, data: dict) -> "ResistorProperties":
        if "bands" not in data:
            return cls()
        return cls(bands=list(data["bands"] or []))


@dataclass
class PotentiometerProperties:
    total_resistance: float = 10000.0
    wiper_position: float = 50.0  # percent, 0 = at p1, 100 = at p2

    def to_dict(self) -> dict:
        return {"totalResistance": self.total_resistance, "wiperPosition": self.wiper_position}

    @classmethod
    def from_dict(cls, data: dict) -> "PotentiometerProperties":
        return cls(
            total_resistance=float(data.get("totalResistance") or 10000.0),
            wiper_position=float(data.get("wiperPosition", 50.0)),
        )


@dataclass
class CapacitorProperties:
    capacitance: float = 10.0  # microfarads; stored but not simulated
    is_electrolytic: bool = False

    def to_dict(self) -> dict:
        return {"capacitance": self.capacitance, "isElectrolytic": self.is_electrolytic}

    @classmethod
    def from_dict(cls, data: dict) -> "CapacitorProperties":
        return cls(
            capacitance=float(data.get("capacitance", 10.0)),
            is_electrolytic=bool(data.get("isElectrolytic", False)),
        )


@dataclass
class SwitchProperties:
    is_open: bool = True

    def to_dict(self) -> dict:
        return {"isOpen": self.is_open}

    @classmethod
    def from_dict(cls, data: dict) -> "SwitchProperties":
        return cls(is_open=bool(data.get("isOpen", True)))


@dataclass
class LEDProperties:
    color: str = "red"
    # Derived each simulation tick
    is_on: bool = False
    brightness: float = 0.0

    def to_dict(self) -> dict:
        return {"color": self.color, "isOn": self.is_on, "brightness": self.brightness}

    @classmethod
    def from_dict(cls, data: dict) -> "LEDProperties":
        return cls(
            color=data.get("color", "red"),
            is_on=bool(data.get("isOn", False)),
            brightness=float(data.get("brightness", 0.0)),
        )


@dataclass
class ZenerProperties:
    breakdown_voltage: float = 4.7

    def to_dict(self) -> dict:
        return {"breakdownVoltage": self.breakdown_voltage}

    @classmethod
    def from_dict(cls, data: dict) -> "ZenerProperties":
        return cls(breakdown_voltage=float(data.get("breakdownVoltage", 4.7)))


@dataclass
class ACSourceProperties:
    peak_voltage: float = 220.0
    frequency: float = 60.0

    def to_dict(self) -> dict:
        return {"peakVoltage": self.peak_voltage, "frequency": self.frequency}

    @classmethod
    def from_dict(cls, data: dict) -> "ACSourceProperties":
        return cls(
            peak_voltage=float(data.get("peakVoltage", 220.0)),
            frequency=float(data.get("frequency", 60.0)),
        )


@dataclass
class TimerProperties:
    # State of the internal flip-flop, advanced by the simulation tick
    output_high: bool = False

    def to_dict(self) -> dict:
        return {"outputHigh": self.output_high}

    @classmethod
    def from_dict(cls, data: dict) -> "TimerProperties":
        return cls(output_high=data.get("outputHigh") is True)


class MultimeterMode(str, Enum):
    OFF = "OFF"
    VOLTS = "V"
    OHMS = "OHM"
    AMPS = "A"


# Order used when the user double-clicks a meter to cycle its mode
MULTIMETER_MODE_CYCLE = [MultimeterMode.OFF, MultimeterMode.VOLTS, MultimeterMode.OHMS, MultimeterMode.AMPS]


@dataclass
class MultimeterProperties:
    mode: MultimeterMode = MultimeterMode.OFF
    display_value: str = ""
    size: str = "standard"  # 'standard' or 'large' (pins at 2x offset)

    def to_dict(self) -> dict:
        return {"mode": self.mode.value, "displayValue": self.display_value, "size": self.size}

    @classmethod
    def from_dict(cls, data: dict) -> "MultimeterProperties":
        try:
            mode = MultimeterMode(data.get("mode") or "OFF")
        except ValueError:
            raise ValueError(f"Unknown multimeter mode: {data.get('mode')!r}")
        return cls(
            mode=mode,
            display_value=data.get("displayValue", ""),
            size=data.get("size", "standard"),
        )


ComponentProperties = Union[
    NoProperties,
    ResistorProperties,
    PotentiometerProperties,
    CapacitorProperties,
    SwitchProperties,
    LEDProperties,
    ZenerProperties,
    ACSourceProperties,
    TimerProperties,
    MultimeterProperties,
]

# Property class per component type; types not listed use NoProperties
PROPERTY_CLASSES: dict[str, type] = {
    "Resistor": ResistorProperties,
    "Potentiometer": PotentiometerProperties,
    "Capacitor": CapacitorProperties,
    "Switch": SwitchProperties,
    "LED": LEDProperties,
    "Zener Diode": ZenerProperties,
    "AC Source": ACSourceProperties,
    "555 Timer": TimerProperties,
    "Multimeter": MultimeterProperties,
}


def normalize_component_type(raw_type: str) -> str:
    """
    Map a serialized type tag or display name to the canonical display name.

    Raises:
        ValueError: If the type is not a known component type.
    """
    component_type = _TAG_TO_DISPLAY.get(raw_type, raw_type)
    if component_type not in COMPONENT_TYPES:
        raise ValueError(f"Unknown component type: {raw_type!r}")
    return component_type


def default_properties(component_type: str) -> ComponentProperties:
    """Return a fresh property object for the given component type."""
    return PROPERTY_CLASSES.get(component_type, NoProperties)()


@dataclass
class ComponentData:
    """
    Pure Python data class representing a circuit component.

    This class stores all component data without any Qt dependencies.
    Positions are stored as (x, y) tuples.
    """

    component_id: str
    component_type: str
    position: tuple[float, float] = (0.0, 0.0)  # (x, y) in scene coordinates
    rotation: int = 0  # degrees: 0, 90, 180, 270
    properties: Any = None

    def __post_init__(self):
        """Normalize the type and coerce the property bag to its dataclass."""
        self.component_type = normalize_component_type(self.component_type)
        prop_cls = PROPERTY_CLASSES.get(self.component_type, NoProperties)
        if self.properties is None:
            self.properties = prop_cls()
        elif isinstance(self.properties, dict):
            self.properties = prop_cls.from_dict(self.properties)
        elif not isinstance(self.properties, prop_cls):
            raise ValueError(
                f"{self.component_type} expects {prop_cls.__name__}, "
                f"got {type(self.properties).__name__}"
            )

    # --- Pins ---

    def get_pins(self) -> list[PinDef]:
        """Return the pin table for this component type."""
        return COMPONENT_PINS.get(self.component_type, [])

    def get_pin_ids(self) -> list[str]:
        return [pin.pin_id for pin in self.get_pins()]

    def has_pin(self, pin_id: str) -> bool:
        """Check whether pin_id exists on this component's pin table."""
        return any(pin.pin_id == pin_id for pin in self.get_pins())

    def _pin_scale(self) -> float:
        if self.component_type == "Multimeter" and self.properties.size == "large":
            return 2.0
        return 1.0

    def get_pin_position(self, pin_id: str) -> tuple[float, float]:
        """
        Return the absolute scene position of a pin.

        Applies the 2x scale of large multimeters, then rotation, then
        translation. An unknown pin resolves to the component origin.
        """
        pin = next((p for p in self.get_pins() if p.pin_id == pin_id), None)
        if pin is None:
            return self.position

        scale = self._pin_scale()
        rx, ry = rotate_point((pin.x * scale, pin.y * scale), self.rotation)
        return (self.position[0] + rx, self.position[1] + ry)

    def get_pin_positions(self) -> dict[str, tuple[float, float]]:
        return {pin.pin_id: self.get_pin_position(pin.pin_id) for pin in self.get_pins()}

    def get_symbol(self) -> str:
        return COMPONENT_SYMBOLS.get(self.component_type, "X")

    def reset_simulation_state(self) -> None:
        """Clear properties that are derived by the simulation tick."""
        if isinstance(self.properties, LEDProperties):
            self.properties.is_on = False
            self.properties.brightness = 0.0
        elif isinstance(self.properties, MultimeterProperties):
            self.properties.display_value = ""
        elif isinstance(self.properties, TimerProperties):
            self.properties.output_high = False

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize component to dictionary using the saved-circuit type tags."""
        return {
            "id": self.component_id,
            "type": _DISPLAY_TO_TAG.get(self.component_type, self.component_type),
            "x": self.position[0],
            "y": self.position[1],
            "rotation": self.rotation,
            "properties": self.properties.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Handles both type tags (IC_555) and display names (555 Timer)
        in the 'type' field.
        """
        return cls(
            component_id=data["id"],
            component_type=data["type"],
            position=(data.get("x", 0.0), data.get("y", 0.0)),
            rotation=data.get("rotation", 0),
            properties=dict(data.get("properties") or {}),
        )

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, type={self.component_type!r}, "
            f"pos={self.position}, rot={self.rotation})"
        )
