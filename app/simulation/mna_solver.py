"""
simulation/mna_solver.py

DC Modified Nodal Analysis of the breadboard circuit.

Each component type has a stamping function that turns it into a list of
``ResistorStamp`` and ``SourceStamp`` records; the matrix assembly only ever
sees those records. Active parts are behavioural stand-ins:

* LED: a fixed linear resistor, used to estimate brightness afterwards.
* 555 timer: an ideal voltage source on OUT (high or low from the stored
  flip-flop state), a 5k-5k-5k bias ladder VCC -> THR -> TRIG -> GND, and a
  discharge path to GND that is open when the output is high and nearly
  shorted when it is low.
* Ammeter-mode multimeter: a 0 V source whose branch current is the reading.

The solver is a pure function of (components, wires, supply voltage,
settings) and is recomputed from scratch every call.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

import numpy as np

from models.component import ComponentData, MultimeterMode

from .format_utils import calculate_resistance
from .linear_solver import solve_linear_system
from .net_resolver import NetMap, resolve_nets
from .solver_config import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)

# Types with a stamping function; everything else is invisible to the solver
UNMODELED_TYPES = {
    "AC Source",
    "Capacitor",
    "Diode",
    "Zener Diode",
    "NPN Transistor",
    "PNP Transistor",
    "AND Gate",
    "OR Gate",
    "NOT Gate",
    "NAND Gate",
    "NOR Gate",
    "XOR Gate",
    "Microcontroller",
}

# Resolves (component_id, pin_id) to a net index, or None if unconnected
NetLookup = Callable[[str, str], Optional[int]]


@dataclass(frozen=True)
class ResistorStamp:
    """A linear resistance between two nets; None marks an unconnected end."""

    node_a: Optional[int]
    node_b: Optional[int]
    ohms: float


@dataclass(frozen=True)
class SourceStamp:
    """An ideal voltage source: V(positive_net) - V(negative_net) = voltage."""

    source_id: str
    positive_net: Optional[int]
    negative_net: Optional[int]
    voltage: float


@dataclass
class ComponentStamps:
    resistors: list[ResistorStamp] = field(default_factory=list)
    sources: list[SourceStamp] = field(default_factory=list)


@dataclass
class CircuitSolution:
    """
    Result of a DC solve.

    source_currents holds the MNA branch unknown of each source: the current
    flowing from the positive net into the source's positive terminal, so a
    source delivering power reads negative.
    """

    net_voltages: dict[int, float]
    source_currents: dict[str, float]
    net_map: NetMap
    ground_net: Optional[int] = None

    def voltage_at(self, component_id: str, pin_id: str) -> Optional[float]:
        """Voltage of the net a pin sits on, or None if the pin is unconnected."""
        net = self.net_map.net_of(component_id, pin_id)
        if net is None:
            return None
        return self.net_voltages.get(net)


# --- Stamping functions ---


def potentiometer_segments(comp: ComponentData, settings: SolverSettings) -> tuple[float, float]:
    """Resistances (p1 -> wiper, wiper -> p2), each floored at pot_min_segment_ohms."""
    total = comp.properties.total_resistance or 10000.0
    fraction = comp.properties.wiper_position / 100.0
    r1 = max(settings.pot_min_segment_ohms, total * fraction)
    r2 = max(settings.pot_min_segment_ohms, total * (1 - fraction))
    return r1, r2


def _stamp_resistor(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    ohms = calculate_resistance(comp.properties.bands)
    if ohms <= 0:
        logger.warning("%s: bands %s decode to %g ohm, not stamped", comp.component_id, comp.properties.bands, ohms)
        return ComponentStamps()
    cid = comp.component_id
    return ComponentStamps(resistors=[ResistorStamp(net(cid, "p1"), net(cid, "p2"), ohms)])


def _stamp_potentiometer(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    cid = comp.component_id
    n1, n2, wiper = net(cid, "p1"), net(cid, "p2"), net(cid, "wiper")
    if wiper is None:
        total = comp.properties.total_resistance or 10000.0
        return ComponentStamps(resistors=[ResistorStamp(n1, n2, total)])

    r1, r2 = potentiometer_segments(comp, settings)
    return ComponentStamps(resistors=[ResistorStamp(n1, wiper, r1), ResistorStamp(wiper, n2, r2)])


def _stamp_switch(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    if comp.properties.is_open:
        return ComponentStamps()
    cid = comp.component_id
    return ComponentStamps(resistors=[ResistorStamp(net(cid, "in"), net(cid, "out"), settings.switch_closed_ohms)])


def _stamp_led(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    cid = comp.component_id
    return ComponentStamps(resistors=[ResistorStamp(net(cid, "anode"), net(cid, "cathode"), settings.led_model_ohms)])


def _stamp_voltage_source(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    cid = comp.component_id
    pos, neg = net(cid, "pos"), net(cid, "neg")
    if pos is None or neg is None:
        return ComponentStamps()
    return ComponentStamps(sources=[SourceStamp(cid, pos, neg, supply_voltage)])


def _stamp_multimeter(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    if comp.properties.mode != MultimeterMode.AMPS:
        return ComponentStamps()
    cid = comp.component_id
    red, black = net(cid, "red"), net(cid, "black")
    if red is None or black is None:
        return ComponentStamps()
    return ComponentStamps(sources=[SourceStamp(cid, red, black, 0.0)])


def _stamp_timer_555(comp, net: NetLookup, supply_voltage, settings) -> ComponentStamps:
    cid = comp.component_id
    output_high = comp.properties.output_high
    gnd = net(cid, "gnd")
    stamps = ComponentStamps()

    discharge = settings.timer_discharge_off_ohms if output_high else settings.timer_discharge_on_ohms
    stamps.resistors.append(ResistorStamp(net(cid, "dis"), gnd, discharge))

    vcc, thr, trig = net(cid, "vcc"), net(cid, "thr"), net(cid, "trig")
    r = settings.timer_divider_ohms
    stamps.resistors.extend([
        ResistorStamp(vcc, thr, r),
        ResistorStamp(thr, trig, r),
        ResistorStamp(trig, gnd, r),
    ])

    out = net(cid, "out")
    if out is not None and gnd is not None:
        voltage = supply_voltage if output_high else settings.timer_low_output_volts
        stamps.sources.append(SourceStamp(f"{cid}_out", out, gnd, voltage))
    return stamps


STAMPERS = {
    "Resistor": _stamp_resistor,
    "Potentiometer": _stamp_potentiometer,
    "Switch": _stamp_switch,
    "LED": _stamp_led,
    "Voltage Source": _stamp_voltage_source,
    "Multimeter": _stamp_multimeter,
    "555 Timer": _stamp_timer_555,
}

# Elements an ohmmeter can see: no sources, no semiconductors
PASSIVE_STAMPERS = {
    "Resistor": _stamp_resistor,
    "Potentiometer": _stamp_potentiometer,
    "Switch": _stamp_switch,
}


def stamp_component(comp: ComponentData, net: NetLookup, supply_voltage: float,
                    settings: SolverSettings = DEFAULT_SETTINGS, stampers=None) -> ComponentStamps:
    """Run the stamping function registered for the component's type."""
    stamper = (stampers if stampers is not None else STAMPERS).get(comp.component_type)
    if stamper is None:
        return ComponentStamps()
    return stamper(comp, net, supply_voltage, settings)


# --- Matrix assembly ---


def stamp_conductance(g_matrix: np.ndarray, node_a: Optional[int], node_b: Optional[int], ohms: float) -> None:
    """
    Add a nodal conductance stamp.

    Entries touching an unconnected end (None) are skipped, so a resistor
    with one dangling end loads the other end towards the 0 V reference.
    """
    if node_a is None and node_b is None:
        return
    g = 1.0 / ohms
    if node_a is not None:
        g_matrix[node_a, node_a] += g
    if node_b is not None:
        g_matrix[node_b, node_b] += g
    if node_a is not None and node_b is not None:
        g_matrix[node_a, node_b] -= g
        g_matrix[node_b, node_a] -= g


def find_ground_net(components: Iterable[ComponentData], net_map: NetMap) -> Optional[int]:
    """Net of the first wired Ground component, or None."""
    for comp in components:
        if comp.component_type == "Ground":
            net = net_map.net_of(comp.component_id, "gnd")
            if net is not None:
                return net
    return None


def assemble_mna(net_count: int, resistors: list[ResistorStamp], sources: list[SourceStamp],
                 ground_net: Optional[int], settings: SolverSettings = DEFAULT_SETTINGS):
    """
    Build the MNA system for the given stamps.

    Row/column ``net_count + i`` holds the branch current of ``sources[i]``.

    Returns:
        (G, rhs) numpy arrays.
    """
    size = net_count + len(sources)
    g_matrix = np.zeros((size, size))
    rhs = np.zeros(size)

    for stamp in resistors:
        stamp_conductance(g_matrix, stamp.node_a, stamp.node_b, stamp.ohms)

    for i, source in enumerate(sources):
        k = net_count + i
        if source.positive_net is not None:
            g_matrix[source.positive_net, k] = 1.0
            g_matrix[k, source.positive_net] = 1.0
        if source.negative_net is not None:
            g_matrix[source.negative_net, k] = -1.0
            g_matrix[k, source.negative_net] = -1.0
        rhs[k] = source.voltage

    if ground_net is not None:
        g_matrix[ground_net, :] = 0.0
        g_matrix[ground_net, ground_net] = 1.0
        rhs[ground_net] = 0.0
    else:
        # No reference: the result floats at an arbitrary offset
        for i in range(net_count):
            g_matrix[i, i] += settings.floating_node_conductance

    return g_matrix, rhs


def solve_circuit(components: Iterable[ComponentData], wires, supply_voltage: float,
                  settings: Optional[SolverSettings] = None) -> CircuitSolution:
    """
    Solve the circuit's DC operating point.

    Args:
        components: Components in placement order.
        wires: The circuit's wires.
        supply_voltage: Voltage applied by every Voltage Source (and by a 555
            output that is high).
        settings: Numeric model constants; defaults to DEFAULT_SETTINGS.

    Returns:
        CircuitSolution with net voltages and source branch currents.
    """
    settings = settings or DEFAULT_SETTINGS
    components = list(components)
    net_map = resolve_nets(wires, components)
    ground_net = find_ground_net(components, net_map)

    resistors: list[ResistorStamp] = []
    sources: list[SourceStamp] = []
    for comp in components:
        if comp.component_type in UNMODELED_TYPES:
            logger.debug("%s (%s) is not modeled by the DC solver", comp.component_id, comp.component_type)
            continue
        stamps = stamp_component(comp, net_map.net_of, supply_voltage, settings)
        resistors.extend(stamps.resistors)
        sources.extend(stamps.sources)

    net_count = net_map.net_count
    g_matrix, rhs = assemble_mna(net_count, resistors, sources, ground_net, settings)
    solution = solve_linear_system(g_matrix, rhs, settings.pivot_epsilon)

    net_voltages = {i: float(solution[i]) for i in range(net_count)}
    source_currents = {s.source_id: float(solution[net_count + i]) for i, s in enumerate(sources)}

    logger.debug(
        "Solved %d nets, %d sources, %d resistive stamps (ground net %s)",
        net_count, len(sources), len(resistors), ground_net,
    )
    return CircuitSolution(
        net_voltages=net_voltages,
        source_currents=source_currents,
        net_map=net_map,
        ground_net=ground_net,
    )
