"""Built-in example circuits shipped with the application."""

from typing import Optional

from .circuit import CircuitModel


def _c(comp_id, comp_type, x, y, rotation=0, props=None) -> dict:
    return {"id": comp_id, "type": comp_type, "x": x, "y": y, "rotation": rotation, "properties": props or {}}


def _w(wire_id, from_comp, from_pin, to_comp, to_pin) -> dict:
    return {"id": wire_id, "fromCompId": from_comp, "fromPinId": from_pin, "toCompId": to_comp, "toPinId": to_pin}


_1K = ["brown", "black", "red", "gold"]
_220 = ["red", "red", "brown", "gold"]

BUILTIN_PRESETS = [
    {
        "id": "basic-led",
        "name": "Basic LED Circuit",
        "description": "A DC source lights an LED through a current-limiting 220 ohm resistor.",
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("res", "RESISTOR", 300, 300, 0, {"bands": _220}),
            _c("led", "LED", 500, 300),
            _c("gnd", "GROUND", 100, 400),
        ],
        "wires": [
            _w("w1", "bat", "pos", "res", "p1"),
            _w("w2", "res", "p2", "led", "anode"),
            _w("w3", "led", "cathode", "gnd", "gnd"),
            _w("w4", "bat", "neg", "gnd", "gnd"),
        ],
    },
    {
        "id": "series-resistors",
        "name": "Series Resistors",
        "description": "Two 1k resistors in series with an LED; the same current flows through each part.",
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("r1", "RESISTOR", 250, 270, 0, {"bands": _1K}),
            _c("r2", "RESISTOR", 400, 270, 0, {"bands": _1K}),
            _c("led", "LED", 550, 300),
            _c("gnd", "GROUND", 100, 400),
        ],
        "wires": [
            _w("w1", "bat", "pos", "r1", "p1"),
            _w("w2", "r1", "p2", "r2", "p1"),
            _w("w3", "r2", "p2", "led", "anode"),
            _w("w4", "led", "cathode", "gnd", "gnd"),
            _w("w5", "bat", "neg", "gnd", "gnd"),
        ],
    },
    {
        "id": "parallel-resistors",
        "name": "Parallel Resistors",
        "description": "Two 2.2k resistors in parallel feed an LED; the equivalent resistance is 1.1k.",
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("r1", "RESISTOR", 300, 200, 0, {"bands": ["red", "red", "red", "gold"]}),
            _c("r2", "RESISTOR", 300, 400, 0, {"bands": ["red", "red", "red", "gold"]}),
            _c("led", "LED", 500, 300),
            _c("gnd", "GROUND", 100, 400),
        ],
        "wires": [
            _w("w1", "bat", "pos", "r1", "p1"),
            _w("w2", "bat", "pos", "r2", "p1"),
            _w("w3", "r1", "p2", "led", "anode"),
            _w("w4", "r2", "p2", "led", "anode"),
            _w("w5", "led", "cathode", "gnd", "gnd"),
            _w("w6", "bat", "neg", "gnd", "gnd"),
        ],
    },
    {
        "id": "parallel-leds",
        "name": "Parallel LEDs",
        "description": "One 220 ohm resistor feeds a green and a blue LED wired in parallel; both see the same voltage.",
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("r1", "RESISTOR", 250, 300, 0, {"bands": _220}),
            _c("led1", "LED", 400, 200, 0, {"color": "green"}),
            _c("led2", "LED", 400, 400, 0, {"color": "blue"}),
            _c("gnd", "GROUND", 550, 300),
        ],
        "wires": [
            _w("w1", "bat", "pos", "r1", "p1"),
            _w("w2", "r1", "p2", "led1", "anode"),
            _w("w3", "r1", "p2", "led2", "anode"),
            _w("w4", "led1", "cathode", "gnd", "gnd"),
            _w("w5", "led2", "cathode", "gnd", "gnd"),
            _w("w6", "bat", "neg", "gnd", "gnd"),
        ],
    },
    {
        "id": "voltage-divider",
        "name": "Voltage Divider",
        "description": "Two 1k resistors halve the supply; a voltmeter reads the midpoint.",
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("r1", "RESISTOR", 300, 200, 90, {"bands": _1K}),
            _c("r2", "RESISTOR", 300, 350, 90, {"bands": _1K}),
            _c("gnd", "GROUND", 300, 450),
            _c("meter", "MULTIMETER", 500, 300, 0, {"mode": "V"}),
        ],
        "wires": [
            _w("w1", "bat", "pos", "r1", "p1"),
            _w("w2", "r1", "p2", "r2", "p1"),
            _w("w3", "r2", "p2", "gnd", "gnd"),
            _w("w4", "bat", "neg", "gnd", "gnd"),
            _w("w5", "r1", "p2", "meter", "red"),
            _w("w6", "gnd", "gnd", "meter", "black"),
        ],
    },
    {
        "id": "capacitors-series",
        "name": "Capacitors in Series",
        "description": (
            "Two 100uF capacitors in series behind an AC source. The DC solver does not "
            "simulate the AC source or the capacitors, so this circuit is for layout only."
        ),
        "components": [
            _c("ac", "AC_SOURCE", 100, 300, 0, {"peakVoltage": 10, "frequency": 10}),
            _c("c1", "CAPACITOR", 250, 300, 0, {"capacitance": 100, "isElectrolytic": True}),
            _c("c2", "CAPACITOR", 400, 300, 0, {"capacitance": 100, "isElectrolytic": True}),
            _c("led", "LED", 550, 300),
            _c("gnd", "GROUND", 100, 400),
        ],
        "wires": [
            _w("w1", "ac", "p1", "c1", "p1"),
            _w("w2", "c1", "p2", "c2", "p1"),
            _w("w3", "c2", "p2", "led", "anode"),
            _w("w4", "led", "cathode", "gnd", "gnd"),
            _w("w5", "ac", "p2", "gnd", "gnd"),
        ],
    },
    {
        "id": "capacitors-parallel",
        "name": "Capacitors in Parallel",
        "description": (
            "Two 470uF capacitors in parallel add their capacitance. They block DC, so the "
            "LED stays dark in the DC solve whether the switch is open or closed."
        ),
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("sw", "SWITCH", 200, 300, 0, {"isOpen": True}),
            _c("res", "RESISTOR", 300, 300, 0, {"bands": _1K}),
            _c("c1", "CAPACITOR", 450, 200, 0, {"capacitance": 470, "isElectrolytic": True}),
            _c("c2", "CAPACITOR", 450, 400, 0, {"capacitance": 470, "isElectrolytic": True}),
            _c("led", "LED", 600, 300),
            _c("gnd", "GROUND", 100, 400),
        ],
        "wires": [
            _w("w1", "bat", "pos", "sw", "in"),
            _w("w2", "sw", "out", "res", "p1"),
            _w("w3", "res", "p2", "c1", "p1"),
            _w("w4", "res", "p2", "c2", "p1"),
            _w("w5", "c1", "p2", "led", "anode"),
            _w("w6", "c2", "p2", "led", "anode"),
            _w("w7", "led", "cathode", "gnd", "gnd"),
            _w("w8", "bat", "neg", "gnd", "gnd"),
        ],
    },
    {
        "id": "logic-nand",
        "name": "Logic NAND",
        "description": (
            "Two switches drive the inputs of a NAND gate that feeds a blue LED. "
            "Logic gates are not modeled by the DC solver."
        ),
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("sw1", "SWITCH", 250, 200, 0, {"isOpen": True}),
            _c("sw2", "SWITCH", 250, 400, 0, {"isOpen": True}),
            _c("nand", "NAND_GATE", 450, 300),
            _c("led", "LED", 600, 300, 0, {"color": "blue"}),
            _c("gnd", "GROUND", 600, 400),
        ],
        "wires": [
            _w("w1", "bat", "pos", "sw1", "in"),
            _w("w2", "bat", "pos", "sw2", "in"),
            _w("w3", "sw1", "out", "nand", "in1"),
            _w("w4", "sw2", "out", "nand", "in2"),
            _w("w5", "nand", "out", "led", "anode"),
            _w("w6", "led", "cathode", "gnd", "gnd"),
            _w("w7", "bat", "neg", "gnd", "gnd"),
        ],
    },
    {
        "id": "pot-divider",
        "name": "Potentiometer Divider",
        "description": "A 10k potentiometer across the supply; the wiper voltage follows its position.",
        "components": [
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("pot", "POTENTIOMETER", 250, 300, 0, {"totalResistance": 10000, "wiperPosition": 50}),
            _c("gnd", "GROUND", 100, 450),
            _c("meter", "MULTIMETER", 400, 300, 0, {"mode": "V"}),
        ],
        "wires": [
            _w("w1", "bat", "pos", "pot", "p1"),
            _w("w2", "pot", "p2", "gnd", "gnd"),
            _w("w3", "bat", "neg", "gnd", "gnd"),
            _w("w4", "pot", "wiper", "meter", "red"),
            _w("w5", "gnd", "gnd", "meter", "black"),
        ],
    },
    {
        "id": "555-astable",
        "name": "555 Timer Astable",
        "description": (
            "R1, R2 and the timing capacitor drive the trigger and threshold pins; "
            "the 555 output flips on every comparator crossing and flashes the LED."
        ),
        "components": [
            _c("ic", "IC_555", 400, 300),
            _c("bat", "VOLTAGE_SOURCE", 100, 300),
            _c("gnd", "GROUND", 400, 500),
            _c("r1", "RESISTOR", 300, 150, 90, {"bands": _1K}),
            _c("r2", "RESISTOR", 300, 250, 90, {"bands": ["orange", "orange", "red", "gold"]}),
            _c("cap", "CAPACITOR", 300, 400, 0, {"capacitance": 100, "isElectrolytic": True}),
            _c("led", "LED", 550, 300),
            _c("r_lim", "RESISTOR", 550, 400, 90, {"bands": _220}),
        ],
        "wires": [
            _w("pwr1", "bat", "pos", "ic", "vcc"),
            _w("pwr2", "bat", "pos", "ic", "rst"),
            _w("pwr3", "bat", "neg", "gnd", "gnd"),
            _w("pwr4", "ic", "gnd", "gnd", "gnd"),
            _w("t1", "bat", "pos", "r1", "p1"),
            _w("t2", "r1", "p2", "ic", "dis"),
            _w("t3", "ic", "dis", "r2", "p1"),
            _w("t4", "r2", "p2", "ic", "thr"),
            _w("t5", "ic", "thr", "ic", "trig"),
            _w("t6", "ic", "trig", "cap", "p1"),
            _w("t7", "cap", "p2", "gnd", "gnd"),
            _w("out1", "ic", "out", "led", "anode"),
            _w("out2", "led", "cathode", "r_lim", "p1"),
            _w("out3", "r_lim", "p2", "gnd", "gnd"),
        ],
    },
]


def get_presets() -> list[dict]:
    """Return summary entries (id, name, description) for every preset."""
    return [{"id": p["id"], "name": p["name"], "description": p["description"]} for p in BUILTIN_PRESETS]


def get_preset(preset_id: str) -> Optional[dict]:
    for preset in BUILTIN_PRESETS:
        if preset["id"] == preset_id:
            return preset
    return None


def load_preset(preset_id: str) -> CircuitModel:
    """
    Build a fresh CircuitModel from a built-in preset.

    Raises:
        ValueError: If no preset has the given ID.
    """
    preset = get_preset(preset_id)
    if preset is None:
        raise ValueError(f"Unknown preset: {preset_id!r}")
    return CircuitModel.from_dict({"components": preset["components"], "wires": preset["wires"]})
