"""
simulation/short_circuit.py

Safety checks run before every simulation step: a voltage source whose
terminals sit on the same net, and an ohmmeter left on a powered circuit.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from models.component import ComponentData, MultimeterMode
from models.wire import WireData

from .net_resolver import resolve_nets


class FaultKind(Enum):
    """Conditions that must stop the simulation."""

    SOURCE_SHORT = "source"
    OHMMETER_ON_LIVE_CIRCUIT = "ohmmeter"


@dataclass
class FaultDiagnosis:
    """User-facing description of a fault."""

    kind: FaultKind
    title: str
    message: str


_DIAGNOSES: dict[FaultKind, FaultDiagnosis] = {
    FaultKind.SOURCE_SHORT: FaultDiagnosis(
        kind=FaultKind.SOURCE_SHORT,
        title="Short Circuit Detected!",
        message=(
            "You have connected the voltage source terminals directly without a load. "
            "This causes infinite current, which damages the power supply and wires."
        ),
    ),
    FaultKind.OHMMETER_ON_LIVE_CIRCUIT: FaultDiagnosis(
        kind=FaultKind.OHMMETER_ON_LIVE_CIRCUIT,
        title="Multimeter Misuse!",
        message=(
            "Never use an Ohmmeter on an energized circuit. It injects current to measure "
            "resistance, and external voltage will damage the internal fuse or the device."
        ),
    ),
}


def describe_fault(kind: FaultKind) -> FaultDiagnosis:
    return _DIAGNOSES[kind]


def detect_short_circuit(components: Iterable[ComponentData], wires: list[WireData]) -> Optional[FaultKind]:
    """
    Flag a voltage source whose 'pos' and 'neg' pins resolve to the same net.

    A source with a dangling terminal is an open circuit, not a short, and
    is not flagged.

    Returns:
        FaultKind.SOURCE_SHORT or None.
    """
    components = list(components)
    net_map = resolve_nets(wires, components)

    for comp in components:
        if comp.component_type != "Voltage Source":
            continue
        pos = net_map.net_of(comp.component_id, "pos")
        neg = net_map.net_of(comp.component_id, "neg")
        if pos is not None and neg is not None and pos == neg:
            return FaultKind.SOURCE_SHORT
    return None


def find_live_ohmmeters(components: Iterable[ComponentData]) -> list[str]:
    """IDs of multimeters currently in OHM mode."""
    return [
        c.component_id
        for c in components
        if c.component_type == "Multimeter" and c.properties.mode == MultimeterMode.OHMS
    ]


def check_simulation_safety(components: Iterable[ComponentData], wires: list[WireData]) -> Optional[FaultKind]:
    """
    Caller-level gate run before powering the circuit.

    The resistance probe itself has no notion of a powered circuit; refusing
    to simulate with an ohmmeter attached is enforced here.
    """
    components = list(components)
    fault = detect_short_circuit(components, wires)
    if fault is not None:
        return fault
    if find_live_ohmmeters(components):
        return FaultKind.OHMMETER_ON_LIVE_CIRCUIT
    return None
