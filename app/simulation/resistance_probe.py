"""
simulation/resistance_probe.py

Ohmmeter model: the resistance seen between two pins of the passive
network (resistors, potentiometers, closed switches).

A unit test current is injected at probe A with probe B's net as the 0 V
reference; the resulting voltage at A equals the resistance. Pins that no
wire touches get their own synthetic nets, so probing straight across a
bare resistor works without any wiring.

The probe knows nothing about whether the circuit is powered. Refusing to
run an ohmmeter on a live circuit is the caller's job (see
``short_circuit.check_simulation_safety``).
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from models.component import ComponentData

from .linear_solver import solve_linear_system
from .mna_solver import PASSIVE_STAMPERS, ResistorStamp, stamp_component, stamp_conductance
from .net_resolver import resolve_nets
from .solver_config import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbePoint:
    component_id: str
    pin_id: str


def _has_path(start: int, goal: int, resistors: list[ResistorStamp]) -> bool:
    """Union-find check that a chain of resistive stamps joins two nets."""
    parent: dict[int, int] = {}

    def find(n: int) -> int:
        parent.setdefault(n, n)
        while parent[n] != n:
            parent[n] = parent[parent[n]]
            n = parent[n]
        return n

    for stamp in resistors:
        parent[find(stamp.node_a)] = find(stamp.node_b)
    return find(start) == find(goal)


def measure_resistance(components: Iterable[ComponentData], wires, probe_a: ProbePoint, probe_b: ProbePoint,
                       settings: Optional[SolverSettings] = None) -> float:
    """
    Resistance in ohms between two pins.

    Returns:
        0.0 when both probes are on the same net, ``math.inf`` when no
        resistive path joins them (open circuit, shown as "OL"), otherwise
        the solved resistance.
    """
    settings = settings or DEFAULT_SETTINGS
    components = list(components)
    net_map = resolve_nets(wires, components)

    pin_nets = dict(net_map.pin_to_net)
    size = net_map.net_count

    def net(component_id: str, pin_id: str) -> int:
        nonlocal size
        key = (component_id, pin_id)
        if key not in pin_nets:
            pin_nets[key] = size
            size += 1
        return pin_nets[key]

    net_a = net(probe_a.component_id, probe_a.pin_id)
    net_b = net(probe_b.component_id, probe_b.pin_id)
    if net_a == net_b:
        return 0.0

    resistors: list[ResistorStamp] = []
    for comp in components:
        stamps = stamp_component(comp, net, 0.0, settings, stampers=PASSIVE_STAMPERS)
        resistors.extend(stamps.resistors)

    if not _has_path(net_a, net_b, resistors):
        logger.debug("No resistive path between %s and %s", probe_a, probe_b)
        return math.inf

    # Every net except probe B's is an unknown; B is the reference
    index = {}
    for n in range(size):
        if n != net_b:
            index[n] = len(index)

    g_matrix = np.zeros((size - 1, size - 1))
    current = np.zeros(size - 1)
    current[index[net_a]] = 1.0

    for stamp in resistors:
        stamp_conductance(g_matrix, index.get(stamp.node_a), index.get(stamp.node_b), stamp.ohms)

    voltages = solve_linear_system(g_matrix, current, settings.pivot_epsilon)
    return max(0.0, float(voltages[index[net_a]]))
