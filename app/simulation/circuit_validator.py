"""
simulation/circuit_validator.py

Pre-simulation circuit validation with no Qt dependencies.
"""

from .mna_solver import UNMODELED_TYPES


def validate_circuit(components, wires):
    """
    Validate circuit before simulation.

    Args:
        components: Dict[str, ComponentData] keyed by component ID
        wires: List[WireData]

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool: False if any errors found
            errors: list[str]: problems that block simulation
            warnings: list[str]: non-blocking issues
    """
    errors = []
    warnings = []

    # 1. Circuit must have components (beyond just Ground)
    non_ground = [c for c in components.values() if c.component_type != 'Ground']
    if not non_ground:
        errors.append("Circuit has no components. Add at least one component to simulate.")
        return False, errors, warnings

    # 2. Without a ground the solver picks an arbitrary floating reference
    has_ground = any(c.component_type == 'Ground' for c in components.values())
    if not has_ground:
        warnings.append(
            "Circuit has no ground. Voltages are measured against an arbitrary floating reference."
        )

    # 3. Wire endpoints must exist; missing pins are treated as unconnected
    connected_terminals = set()
    for wire in wires:
        for comp_id, pin_id in wire.get_terminals():
            comp = components.get(comp_id)
            if comp is None:
                errors.append(f"Wire {wire.wire_id} references unknown component '{comp_id}'.")
            elif not comp.has_pin(pin_id):
                warnings.append(
                    f"Wire {wire.wire_id} references pin '{pin_id}' which {comp_id} "
                    f"({comp.component_type}) does not have; it is treated as unconnected."
                )
            else:
                connected_terminals.add((comp_id, pin_id))

    # 4. Check for unconnected parts
    for comp in components.values():
        if comp.component_type == 'Ground':
            continue
        pins = comp.get_pin_ids()
        if not any((comp.component_id, p) in connected_terminals for p in pins):
            warnings.append(f"{comp.component_id} ({comp.component_type}) has no connections.")

    # 5. Parts the DC solver does not model
    for comp in components.values():
        if comp.component_type == 'AC Source':
            warnings.append(
                f"{comp.component_id} (AC Source) is not simulated; only the DC supply drives the circuit."
            )
        elif comp.component_type in UNMODELED_TYPES:
            warnings.append(
                f"{comp.component_id} ({comp.component_type}) is not modeled by the DC solver "
                f"and behaves as an open circuit."
            )

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
