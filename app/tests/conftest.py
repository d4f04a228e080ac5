"""
Shared test fixtures for the Circuit Lab test suite.

All fixtures build pure-Python model objects (no GUI dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.circuit import CircuitModel
from models.component import ComponentData
from models.wire import WireData

_wire_ids = iter(range(1, 1_000_000))


def make_component(component_type, component_id, properties=None, position=(0.0, 0.0), rotation=0):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        component_type=component_type,
        position=position,
        rotation=rotation,
        properties=properties,
    )


def make_wire(start_id, start_pin, end_id, end_pin, wire_id=None):
    """Helper to create a WireData; IDs are generated when not given."""
    return WireData(
        wire_id=wire_id or f"w{next(_wire_ids)}",
        start_component_id=start_id,
        start_pin=start_pin,
        end_component_id=end_id,
        end_pin=end_pin,
    )


def make_resistor(component_id, bands=None):
    """Resistor from colour bands; defaults to 1k (brown-black-red-gold)."""
    props = {"bands": bands} if bands is not None else None
    return make_component("Resistor", component_id, props)


def make_model(components, wires, supply_voltage=5.0):
    model = CircuitModel(supply_voltage=supply_voltage)
    for comp in components:
        model.add_component(comp)
    for wire in wires:
        model.add_wire(wire)
    return model


@pytest.fixture
def series_divider():
    """
    BAT(+) -- R1 (1k) -- R2 (1k) -- GND, BAT(-) -- GND

    Returns (components, wires).
    """
    components = [
        make_component("Voltage Source", "BAT"),
        make_resistor("R1"),
        make_resistor("R2"),
        make_component("Ground", "GND"),
    ]
    wires = [
        make_wire("BAT", "pos", "R1", "p1", "w1"),
        make_wire("R1", "p2", "R2", "p1", "w2"),
        make_wire("R2", "p2", "GND", "gnd", "w3"),
        make_wire("BAT", "neg", "GND", "gnd", "w4"),
    ]
    return components, wires


@pytest.fixture
def unequal_divider():
    """BAT -- R1 (1k) -- R2 (2.2k) -- GND."""
    components = [
        make_component("Voltage Source", "BAT"),
        make_resistor("R1"),
        make_resistor("R2", ["red", "red", "red", "gold"]),
        make_component("Ground", "GND"),
    ]
    wires = [
        make_wire("BAT", "pos", "R1", "p1"),
        make_wire("R1", "p2", "R2", "p1"),
        make_wire("R2", "p2", "GND", "gnd"),
        make_wire("BAT", "neg", "GND", "gnd"),
    ]
    return components, wires


@pytest.fixture
def pot_divider():
    """BAT across a 10k pot at 50 %, GND on p2; the wiper is wired to nothing but itself."""
    components = [
        make_component("Voltage Source", "BAT"),
        make_component("Potentiometer", "POT", {"totalResistance": 10000, "wiperPosition": 50}),
        make_component("Ground", "GND"),
        make_component("Multimeter", "XMM", {"mode": "V"}),
    ]
    wires = [
        make_wire("BAT", "pos", "POT", "p1"),
        make_wire("POT", "p2", "GND", "gnd"),
        make_wire("BAT", "neg", "GND", "gnd"),
        make_wire("POT", "wiper", "XMM", "red"),
        make_wire("GND", "gnd", "XMM", "black"),
    ]
    return components, wires


@pytest.fixture
def parallel_pair():
    """Two 1k resistors in parallel between nets A and B, unpowered."""
    components = [make_resistor("R1"), make_resistor("R2")]
    wires = [
        make_wire("R1", "p1", "R2", "p1"),
        make_wire("R1", "p2", "R2", "p2"),
    ]
    return components, wires


@pytest.fixture
def shorted_source():
    """A voltage source with its terminals wired straight together."""
    components = [make_component("Voltage Source", "BAT"), make_component("Ground", "GND")]
    wires = [
        make_wire("BAT", "pos", "BAT", "neg"),
        make_wire("BAT", "neg", "GND", "gnd"),
    ]
    return components, wires


@pytest.fixture
def divider_model(series_divider):
    components, wires = series_divider
    return make_model(components, wires)
