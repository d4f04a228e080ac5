"""
simulation/net_status.py

Classifies each wire's net voltage so the canvas can colour live wires.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .mna_solver import CircuitSolution, solve_circuit
from .solver_config import DEFAULT_SETTINGS, SolverSettings


class WireStatus(Enum):
    POSITIVE = "positive"
    GROUND = "ground"
    NEUTRAL = "neutral"


@dataclass
class NetInfo:
    net_id: int
    voltage: float
    status: WireStatus


def classify_voltage(voltage: float, supply_voltage: float, settings: SolverSettings = DEFAULT_SETTINGS) -> WireStatus:
    """Near the supply rail is positive, near 0 V is ground, anything else neutral."""
    if voltage > supply_voltage * settings.positive_fraction:
        return WireStatus.POSITIVE
    if voltage < settings.ground_threshold_volts:
        return WireStatus.GROUND
    return WireStatus.NEUTRAL


def classify_wires(solution: CircuitSolution, supply_voltage: float,
                   settings: SolverSettings = DEFAULT_SETTINGS) -> dict[str, NetInfo]:
    """Build wire_id -> NetInfo from an existing solution."""
    result = {}
    for wire_id, net_id in solution.net_map.wire_to_net.items():
        voltage = solution.net_voltages.get(net_id, 0.0)
        result[wire_id] = NetInfo(net_id, voltage, classify_voltage(voltage, supply_voltage, settings))
    return result


def identify_wire_nets(components, wires, supply_voltage: float,
                       settings: Optional[SolverSettings] = None) -> dict[str, NetInfo]:
    """Solve the circuit and classify every wire's net."""
    settings = settings or DEFAULT_SETTINGS
    solution = solve_circuit(components, wires, supply_voltage, settings)
    return classify_wires(solution, supply_voltage, settings)
