"""
Command-line interface for Circuit Lab batch operations.

Solve circuits, probe resistance and validate files without the GUI.

Usage::

    python -m cli solve circuit.json
    python -m cli solve circuit.json --supply 9V --format json
    python -m cli solve --preset 555-astable --ticks 10
    python -m cli measure circuit.json R1:p1 R2:p2
    python -m cli validate circuit.json
    python -m cli presets
    python -m cli presets --export voltage-divider --output divider.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import read_circuit_file
from controllers.simulation_controller import SimulationController
from models.circuit import CircuitModel
from models.presets import get_preset, get_presets, load_preset
from simulation.format_utils import format_current, format_resistance, format_voltage, parse_value
from simulation.resistance_probe import ProbePoint, measure_resistance
from simulation.solver_config import DEFAULT_SETTINGS, load_settings


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        return read_circuit_file(path), ""
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"
    except ValueError as e:
        return None, f"invalid circuit file: {e}"


def load_circuit(args: argparse.Namespace) -> CircuitModel:
    """Load the circuit named by --preset or the positional path.

    Raises:
        SystemExit: On file read or validation errors.
    """
    if getattr(args, "preset", None):
        try:
            model = load_preset(args.preset)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    elif getattr(args, "circuit", None):
        model, error = try_load_circuit(args.circuit)
        if model is None:
            print(f"Error: {error}", file=sys.stderr)
            sys.exit(1)
    else:
        print("Error: give a circuit file or --preset ID", file=sys.stderr)
        sys.exit(1)

    if getattr(args, "supply", None):
        try:
            model.supply_voltage = parse_value(args.supply)
        except ValueError as e:
            print(f"Error: invalid --supply value: {e}", file=sys.stderr)
            sys.exit(1)
    return model


def load_cli_settings(args: argparse.Namespace):
    if not getattr(args, "settings", None):
        return DEFAULT_SETTINGS
    try:
        return load_settings(args.settings)
    except (OSError, ValueError) as e:
        print(f"Error: cannot load settings: {e}", file=sys.stderr)
        sys.exit(1)


def _parse_probe(text: str) -> ProbePoint:
    comp_id, sep, pin_id = text.partition(":")
    if not sep or not comp_id or not pin_id:
        raise ValueError(f"expected COMPONENT:PIN, got {text!r}")
    return ProbePoint(comp_id, pin_id)


def cmd_solve(args: argparse.Namespace) -> int:
    """Power the circuit, run the requested ticks and print the final state."""
    model = load_circuit(args)
    settings = load_cli_settings(args)
    controller = CircuitController(model)
    sim = SimulationController(model, controller, settings)

    results = sim.run_ticks(max(1, args.ticks))
    last = results[-1]
    warnings = results[0].warnings

    if not last.success:
        print(f"Simulation failed: {last.error}", file=sys.stderr)
        for err in last.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1

    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if args.format == "json":
        print(_result_to_json(model, last))
    else:
        print(_result_to_text(model, last))
    return 0


def _component_state(component) -> dict:
    props = component.properties
    if component.component_type == "LED":
        return {"on": props.is_on, "brightness": round(props.brightness, 4)}
    if component.component_type == "555 Timer":
        return {"output": "high" if props.output_high else "low"}
    if component.component_type == "Multimeter":
        return {"mode": props.mode.value, "display": props.display_value}
    return {}


def _result_to_json(model: CircuitModel, result) -> str:
    """Format simulation result as JSON."""
    solution = result.solution
    nets = []
    for net_id, voltage in sorted(solution.net_voltages.items()):
        nets.append({
            "net": net_id,
            "voltage": voltage,
            "pins": [f"{c}:{p}" for c, p in solution.net_map.pins_on_net(net_id)],
        })
    output = {
        "success": result.success,
        "supplyVoltage": model.supply_voltage,
        "groundNet": solution.ground_net,
        "nets": nets,
        "sourceCurrents": solution.source_currents,
        "wires": {wid: info.status.value for wid, info in result.net_info.items()},
        "components": {
            c.component_id: state
            for c in model.component_list()
            if (state := _component_state(c))
        },
    }
    return json.dumps(output, indent=2, default=str)


def _result_to_text(model: CircuitModel, result) -> str:
    solution = result.solution
    lines = [f"Supply: {format_voltage(model.supply_voltage)}", "", "Nets:"]
    for net_id, voltage in sorted(solution.net_voltages.items()):
        pins = ", ".join(f"{c}:{p}" for c, p in solution.net_map.pins_on_net(net_id))
        marker = " (ground)" if net_id == solution.ground_net else ""
        lines.append(f"  {net_id:>3}  {format_voltage(voltage):>9}{marker}  {pins}")

    if solution.source_currents:
        lines += ["", "Source currents:"]
        for source_id, amps in solution.source_currents.items():
            lines.append(f"  {source_id}: {format_current(abs(amps))}")

    states = [(c.component_id, _component_state(c)) for c in model.component_list()]
    states = [(cid, s) for cid, s in states if s]
    if states:
        lines += ["", "Components:"]
        for cid, state in states:
            text = ", ".join(f"{k}={v}" for k, v in state.items())
            lines.append(f"  {cid}: {text}")
    return "\n".join(lines)


def cmd_measure(args: argparse.Namespace) -> int:
    """Measure resistance between two pins with the circuit unpowered."""
    model = load_circuit(args)
    settings = load_cli_settings(args)
    try:
        probe_a = _parse_probe(args.probe_a)
        probe_b = _parse_probe(args.probe_b)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for probe in (probe_a, probe_b):
        component = model.get_component(probe.component_id)
        if component is None or not component.has_pin(probe.pin_id):
            print(f"Error: no such pin {probe.component_id}:{probe.pin_id}", file=sys.stderr)
            return 1

    ohms = measure_resistance(model.component_list(), model.wires, probe_a, probe_b, settings)
    if args.format == "json":
        value = None if ohms == float("inf") else ohms
        print(json.dumps({"ohms": value, "display": format_resistance(ohms)}, indent=2))
    else:
        print(format_resistance(ohms))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a circuit without simulating."""
    model = load_circuit(args)
    sim = SimulationController(model)
    name = args.preset or args.circuit

    result = sim.validate_circuit()
    fault = sim.check_safety() if result.success else None

    if result.success and fault is None:
        print(f"Circuit is valid: {name}")
        for warning in result.warnings:
            print(f"  Warning: {warning}")
        return 0

    print(f"Circuit has errors: {name}", file=sys.stderr)
    for err in result.errors:
        print(f"  - {err}", file=sys.stderr)
    if fault is not None:
        from simulation.short_circuit import describe_fault

        print(f"  - {describe_fault(fault).title}", file=sys.stderr)
    return 1


def cmd_presets(args: argparse.Namespace) -> int:
    """List built-in circuits, or export one as a circuit file."""
    if not args.export:
        for preset in get_presets():
            print(f"{preset['id']:<20} {preset['name']}")
            print(f"{'':<20} {preset['description']}")
        return 0

    preset = get_preset(args.export)
    if preset is None:
        print(f"Error: unknown preset '{args.export}'", file=sys.stderr)
        return 1

    output_text = json.dumps(load_preset(args.export).to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(output_text)
        print(f"Preset written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def _add_circuit_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("circuit", nargs="?", help="Path to circuit JSON file")
    parser.add_argument("--preset", help="Use a built-in circuit instead of a file")
    parser.add_argument("--settings", help="JSON file overriding solver constants")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="circuit-lab",
        description="Circuit Lab batch operations: solve, measure and validate breadboard circuits.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # solve
    solve_parser = subparsers.add_parser("solve", help="Power the circuit and print the DC operating point")
    _add_circuit_source(solve_parser)
    solve_parser.add_argument("--supply", help="Supply voltage, e.g. 9 or 9V (default: from file)")
    solve_parser.add_argument("--ticks", type=int, default=1, help="Number of simulation ticks to run (default: 1)")
    solve_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")

    # measure
    measure_parser = subparsers.add_parser("measure", help="Measure resistance between two pins (unpowered)")
    measure_parser.add_argument("circuit", nargs="?", help="Path to circuit JSON file")
    measure_parser.add_argument("probe_a", help="First probe as COMPONENT:PIN")
    measure_parser.add_argument("probe_b", help="Second probe as COMPONENT:PIN")
    measure_parser.add_argument("--preset", help="Use a built-in circuit instead of a file")
    measure_parser.add_argument("--settings", help="JSON file overriding solver constants")
    measure_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")

    # validate
    val_parser = subparsers.add_parser("validate", help="Check circuit for errors without simulating")
    _add_circuit_source(val_parser)

    # presets
    presets_parser = subparsers.add_parser("presets", help="List or export built-in circuits")
    presets_parser.add_argument("--export", metavar="ID", help="Print the preset as a circuit JSON file")
    presets_parser.add_argument("--output", "-o", help="Write the exported preset to a file")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "solve": cmd_solve,
        "measure": cmd_measure,
        "validate": cmd_validate,
        "presets": cmd_presets,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
