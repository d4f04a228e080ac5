from .circuit_controller import CircuitController
from .file_controller import FileController, read_circuit_file, validate_circuit_data
from .simulation_controller import SimulationController, SimulationResult

__all__ = [
    "CircuitController",
    "FileController",
    "read_circuit_file",
    "validate_circuit_data",
    "SimulationController",
    "SimulationResult",
]
