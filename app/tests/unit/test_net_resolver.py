"""Tests for grouping wires into electrical nets."""

import itertools

import pytest
from simulation.mna_solver import solve_circuit
from simulation.net_resolver import resolve_nets
from tests.conftest import make_component, make_resistor, make_wire


def _same_net(net_map, a, b):
    na, nb = net_map.net_of(*a), net_map.net_of(*b)
    return na is not None and na == nb


class TestResolveNets:
    def test_empty(self):
        net_map = resolve_nets([])
        assert net_map.net_count == 0
        assert net_map.pin_to_net == {}

    def test_series_divider_has_three_nets(self, series_divider):
        components, wires = series_divider
        net_map = resolve_nets(wires, components)
        assert net_map.net_count == 3
        assert _same_net(net_map, ("BAT", "pos"), ("R1", "p1"))
        assert _same_net(net_map, ("R1", "p2"), ("R2", "p1"))
        assert _same_net(net_map, ("R2", "p2"), ("BAT", "neg"))
        assert not _same_net(net_map, ("R1", "p1"), ("R1", "p2"))

    def test_wires_chain_through_shared_pins(self):
        wires = [
            make_wire("A", "p1", "B", "p1"),
            make_wire("B", "p1", "C", "p1"),
            make_wire("C", "p1", "D", "p1"),
        ]
        net_map = resolve_nets(wires)
        assert net_map.net_count == 1
        assert set(net_map.wire_to_net.values()) == {0}

    def test_same_pin_twice_is_one_net(self):
        wires = [make_wire("A", "p1", "B", "p1"), make_wire("A", "p1", "B", "p1")]
        net_map = resolve_nets(wires)
        assert net_map.net_count == 1

    def test_net_ids_follow_wire_order(self):
        wires = [make_wire("A", "p1", "B", "p1", "first"), make_wire("C", "p1", "D", "p1", "second")]
        net_map = resolve_nets(wires)
        assert net_map.wire_to_net == {"first": 0, "second": 1}

    def test_unwired_pin_has_no_net(self, series_divider):
        components, wires = series_divider
        net_map = resolve_nets(wires, components)
        assert net_map.net_of("R1", "missing") is None
        assert net_map.net_of("R9", "p1") is None

    def test_pins_on_net(self, series_divider):
        components, wires = series_divider
        net_map = resolve_nets(wires, components)
        net = net_map.net_of("GND", "gnd")
        assert set(net_map.pins_on_net(net)) == {("R2", "p2"), ("GND", "gnd"), ("BAT", "neg")}

    def test_partition_matches_wire_connectivity(self, series_divider):
        """Two pins share a net iff some chain of wires joins them."""
        components, wires = series_divider
        net_map = resolve_nets(wires, components)
        adjacency = {}
        for w in wires:
            a, b = w.get_terminals()
            adjacency.setdefault(a, set()).add(b)
            adjacency.setdefault(b, set()).add(a)

        def reachable(start):
            seen, stack = {start}, [start]
            while stack:
                for nxt in adjacency.get(stack.pop(), ()):
                    if nxt not in seen:
                        seen.add(nxt)
                        stack.append(nxt)
            return seen

        for a, b in itertools.combinations(adjacency, 2):
            assert _same_net(net_map, a, b) == (b in reachable(a))


class TestMalformedWires:
    def test_unknown_pin_is_skipped_with_components(self, caplog):
        components = [make_resistor("R1"), make_resistor("R2")]
        wires = [make_wire("R1", "p1", "R2", "p1"), make_wire("R1", "p2", "R2", "bogus", "bad")]
        net_map = resolve_nets(wires, components)
        assert net_map.net_count == 1
        assert "bad" not in net_map.wire_to_net
        assert net_map.net_of("R1", "p2") is None
        assert "Ignoring" in caplog.text

    def test_unknown_component_is_skipped(self):
        components = [make_component("Ground", "GND")]
        net_map = resolve_nets([make_wire("GND", "gnd", "ghost", "p1")], components)
        assert net_map.net_count == 0

    def test_without_components_nothing_is_validated(self):
        net_map = resolve_nets([make_wire("R1", "p2", "R2", "bogus")])
        assert net_map.net_count == 1


class TestSharedWireIds:
    def test_every_wire_joins_a_net(self):
        wires = [make_wire("V1", "pos", "R1", "p1", "w"), make_wire("R1", "p2", "G1", "gnd", "w")]
        net_map = resolve_nets(wires)
        assert net_map.net_count == 2
        assert net_map.net_of("V1", "pos") is not None
        assert net_map.net_of("G1", "gnd") is not None
        assert not _same_net(net_map, ("V1", "pos"), ("G1", "gnd"))

    def test_source_still_stamped(self):
        components = [
            make_component("Voltage Source", "V1"),
            make_resistor("R1"),
            make_component("Ground", "G1"),
        ]
        wires = [
            make_wire("V1", "pos", "R1", "p1", "w"),
            make_wire("R1", "p2", "G1", "gnd", "w"),
            make_wire("V1", "neg", "G1", "gnd", "w3"),
        ]
        solution = solve_circuit(components, wires, 5.0)
        assert "V1" in solution.source_currents
        assert solution.voltage_at("R1", "p1") == pytest.approx(5.0)
