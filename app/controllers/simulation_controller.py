"""
SimulationController - Orchestrates the simulation loop.

This module contains no Qt dependencies. It coordinates circuit
validation, the safety gate, the MNA solve and the per-tick component
behaviours. The view drives tick() from its own timer.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.circuit import CircuitModel
from simulation.behaviors import apply_behaviors
from simulation.mna_solver import CircuitSolution
from simulation.net_status import NetInfo
from simulation.short_circuit import FaultKind, describe_fault
from simulation.solver_config import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Result of starting the simulation or of a single tick."""

    success: bool
    solution: Optional[CircuitSolution] = None
    net_info: dict[str, NetInfo] = field(default_factory=dict)
    fault: Optional[FaultKind] = None
    changed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str = ""


class SimulationController:
    """
    Controller for the simulation loop.

    Each tick: resolve nets -> check for faults -> solve -> update parts.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None,
                 settings: Optional[SolverSettings] = None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        self.settings = settings or DEFAULT_SETTINGS
        self._simulating = False

    @property
    def is_simulating(self) -> bool:
        return self._simulating

    def _notify(self, event: str, data) -> None:
        if self.circuit_ctrl:
            self.circuit_ctrl._notify(event, data)

    def validate_circuit(self) -> SimulationResult:
        """
        Validate the circuit before simulation.

        Returns a SimulationResult with success=False and errors if invalid.
        """
        from simulation import validate_circuit

        is_valid, errors, warnings = validate_circuit(self.model.components, self.model.wires)
        return SimulationResult(
            success=is_valid,
            errors=errors,
            warnings=warnings,
            error="; ".join(errors) if errors else "",
        )

    def check_safety(self) -> Optional[FaultKind]:
        from simulation import check_simulation_safety

        return check_simulation_safety(self.model.component_list(), self.model.wires)

    def _fault_result(self, fault: FaultKind, warnings: Optional[list[str]] = None) -> SimulationResult:
        diagnosis = describe_fault(fault)
        logger.warning("Simulation halted: %s", diagnosis.title)
        self._notify("simulation_fault", diagnosis)
        return SimulationResult(
            success=False,
            fault=fault,
            warnings=warnings or [],
            error=f"{diagnosis.title} {diagnosis.message}",
        )

    def start(self) -> SimulationResult:
        """
        Power the circuit.

        Refuses to start when validation fails or a fault is present
        (shorted source, ohmmeter on the circuit). On success the first
        tick is run immediately and its result returned.
        """
        if self._simulating:
            return self.tick()

        validation = self.validate_circuit()
        if not validation.success:
            self._notify("simulation_completed", validation)
            return validation

        fault = self.check_safety()
        if fault is not None:
            return self._fault_result(fault, validation.warnings)

        self._simulating = True
        self._notify("simulation_started", None)
        result = self.tick()
        result.warnings = validation.warnings + result.warnings
        return result

    def stop(self) -> None:
        """Power down and clear every simulation-derived property."""
        was_simulating = self._simulating
        self._simulating = False
        self.model.reset_simulation_state()
        apply_behaviors(self.model.component_list(), self.model.wires, None, False, self.settings)
        if was_simulating:
            self._notify("simulation_stopped", None)

    def tick(self) -> SimulationResult:
        """
        Advance the simulation one step.

        When powered off only the multimeter displays are refreshed, so an
        ohmmeter still reads the unpowered circuit.
        """
        from simulation import solve_circuit
        from simulation.net_status import classify_wires

        components = self.model.component_list()
        wires = self.model.wires

        if not self._simulating:
            changed = apply_behaviors(components, wires, None, False, self.settings)
            return SimulationResult(success=True, changed=changed)

        fault = self.check_safety()
        if fault is not None:
            self._simulating = False
            self.model.reset_simulation_state()
            return self._fault_result(fault)

        supply = self.model.supply_voltage
        solution = solve_circuit(components, wires, supply, self.settings)
        net_info = classify_wires(solution, supply, self.settings)
        changed = apply_behaviors(components, wires, solution, True, self.settings)

        result = SimulationResult(
            success=True,
            solution=solution,
            net_info=net_info,
            changed=changed,
        )
        self._notify("simulation_tick", result)
        return result

    def run_ticks(self, count: int) -> list[SimulationResult]:
        """Start (if needed) and run up to count ticks, stopping early on failure."""
        results = [self.start()] if not self._simulating else []
        if results and not results[0].success:
            return results
        while len(results) < count:
            result = self.tick()
            results.append(result)
            if not result.success:
                break
        return results
