"""Tests for pre-simulation circuit validation."""

from simulation.circuit_validator import validate_circuit
from tests.conftest import make_component, make_resistor, make_wire


def _by_id(components):
    return {c.component_id: c for c in components}


class TestValidateCircuit:
    def test_valid_divider(self, series_divider):
        components, wires = series_divider
        is_valid, errors, warnings = validate_circuit(_by_id(components), wires)
        assert is_valid
        assert errors == []
        assert warnings == []

    def test_empty_circuit(self):
        is_valid, errors, _ = validate_circuit({}, [])
        assert not is_valid
        assert "no components" in errors[0]

    def test_ground_only(self):
        is_valid, errors, _ = validate_circuit(_by_id([make_component("Ground", "GND")]), [])
        assert not is_valid
        assert len(errors) == 1

    def test_missing_ground_warns(self):
        components = [make_component("Voltage Source", "BAT"), make_resistor("R1")]
        wires = [make_wire("BAT", "pos", "R1", "p1"), make_wire("R1", "p2", "BAT", "neg")]
        is_valid, _, warnings = validate_circuit(_by_id(components), wires)
        assert is_valid
        assert any("no ground" in w for w in warnings)

    def test_unconnected_component_warns(self, series_divider):
        components, wires = series_divider
        components = components + [make_resistor("R9")]
        _, _, warnings = validate_circuit(_by_id(components), wires)
        assert any("R9" in w and "no connections" in w for w in warnings)

    def test_unknown_component_is_an_error(self, series_divider):
        components, wires = series_divider
        wires = wires + [make_wire("R1", "p1", "GHOST", "p1", "wx")]
        is_valid, errors, _ = validate_circuit(_by_id(components), wires)
        assert not is_valid
        assert any("GHOST" in e and "wx" in e for e in errors)

    def test_unknown_pin_is_a_warning(self, series_divider):
        components, wires = series_divider
        wires = wires + [make_wire("R1", "p1", "R2", "p9", "wx")]
        is_valid, _, warnings = validate_circuit(_by_id(components), wires)
        assert is_valid
        assert any("p9" in w for w in warnings)

    def test_ac_source_warns(self, series_divider):
        components, wires = series_divider
        components = components + [make_component("AC Source", "AC1")]
        wires = wires + [make_wire("AC1", "p1", "R1", "p1"), make_wire("AC1", "p2", "GND", "gnd")]
        _, _, warnings = validate_circuit(_by_id(components), wires)
        assert any("AC1" in w and "not simulated" in w for w in warnings)

    def test_unmodeled_part_warns(self, series_divider):
        components, wires = series_divider
        components = components + [make_component("Capacitor", "C1")]
        wires = wires + [make_wire("C1", "p1", "R1", "p2"), make_wire("C1", "p2", "GND", "gnd")]
        _, _, warnings = validate_circuit(_by_id(components), wires)
        assert any("C1" in w and "open circuit" in w for w in warnings)
