from .circuit_validator import validate_circuit
from .mna_solver import CircuitSolution, solve_circuit
from .net_resolver import NetMap, resolve_nets
from .net_status import identify_wire_nets
from .resistance_probe import ProbePoint, measure_resistance
from .short_circuit import FaultKind, check_simulation_safety, detect_short_circuit

__all__ = [
    'CircuitSolution',
    'FaultKind',
    'NetMap',
    'ProbePoint',
    'check_simulation_safety',
    'detect_short_circuit',
    'identify_wire_nets',
    'measure_resistance',
    'resolve_nets',
    'solve_circuit',
    'validate_circuit',
]
