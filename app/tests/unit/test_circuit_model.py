"""Tests for CircuitModel and WireData."""

import pytest
from models.circuit import DEFAULT_SUPPLY_VOLTAGE, CircuitModel
from models.wire import WireData
from tests.conftest import make_component, make_model, make_wire


class TestWireData:
    def test_terminals(self):
        wire = make_wire("R1", "p2", "R2", "p1")
        assert wire.get_terminals() == [("R1", "p2"), ("R2", "p1")]

    def test_connects(self):
        wire = make_wire("R1", "p2", "R2", "p1")
        assert wire.connects_component("R2")
        assert not wire.connects_component("R3")
        assert wire.connects_terminal("R1", "p2")
        assert not wire.connects_terminal("R1", "p1")

    def test_to_dict_uses_saved_format(self):
        wire = make_wire("bat", "pos", "r1", "p1", "w1")
        assert wire.to_dict() == {
            "id": "w1",
            "fromCompId": "bat",
            "fromPinId": "pos",
            "toCompId": "r1",
            "toPinId": "p1",
        }

    def test_waypoints_round_trip(self):
        wire = WireData("w1", "a", "p1", "b", "p2", waypoints=[(10, 20), (30, 20)])
        data = wire.to_dict()
        assert data["waypoints"] == [{"x": 10, "y": 20}, {"x": 30, "y": 20}]
        assert WireData.from_dict(data).waypoints == [(10, 20), (30, 20)]


class TestCircuitModel:
    def test_defaults(self):
        model = CircuitModel()
        assert model.components == {}
        assert model.wires == []
        assert model.supply_voltage == DEFAULT_SUPPLY_VOLTAGE

    def test_component_list_keeps_insertion_order(self):
        model = CircuitModel()
        for cid in ("GND2", "R1", "GND1"):
            model.add_component(make_component("Ground" if cid.startswith("GND") else "Resistor", cid))
        assert [c.component_id for c in model.component_list()] == ["GND2", "R1", "GND1"]

    def test_remove_component_returns_attached_wires(self, divider_model):
        wire_ids = divider_model.remove_component("R1")
        assert sorted(wire_ids) == ["w1", "w2"]
        assert "R1" not in divider_model.components

    def test_remove_missing_component(self):
        assert CircuitModel().remove_component("nope") == []

    def test_next_wire_id_skips_existing(self):
        model = make_model([], [make_wire("a", "p1", "b", "p1", "w1")])
        model.wire_counter = 0
        assert model.next_wire_id() == "w2"

    def test_remove_wire(self, divider_model):
        assert divider_model.remove_wire("w3") is True
        assert divider_model.get_wire("w3") is None
        assert divider_model.remove_wire("w3") is False

    def test_clear(self, divider_model):
        divider_model.supply_voltage = 9.0
        divider_model.clear()
        assert not divider_model.components
        assert not divider_model.wires
        assert divider_model.supply_voltage == DEFAULT_SUPPLY_VOLTAGE

    def test_reset_simulation_state(self):
        led = make_component("LED", "LED1", {"isOn": True, "brightness": 1.0})
        model = make_model([led], [])
        model.reset_simulation_state()
        assert led.properties.is_on is False


class TestCircuitSerialization:
    def test_round_trip(self, divider_model):
        divider_model.supply_voltage = 9.0
        divider_model.component_counter = {"R": 2}
        restored = CircuitModel.from_dict(divider_model.to_dict())
        assert list(restored.components) == ["BAT", "R1", "R2", "GND"]
        assert [w.wire_id for w in restored.wires] == ["w1", "w2", "w3", "w4"]
        assert restored.supply_voltage == 9.0
        assert restored.component_counter == {"R": 2}
        assert restored.components["R2"].properties.bands == ["brown", "black", "red", "gold"]

    def test_from_dict_defaults_supply(self):
        model = CircuitModel.from_dict({"components": [], "wires": []})
        assert model.supply_voltage == DEFAULT_SUPPLY_VOLTAGE

    def test_from_dict_unknown_type_raises(self):
        with pytest.raises(ValueError):
            CircuitModel.from_dict({"components": [{"id": "x", "type": "WARP_CORE"}], "wires": []})
