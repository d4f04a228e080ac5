"""
End-to-end tests of the simulation loop: controller edits, the safety gate,
and per-tick behaviour driven through SimulationController.
"""

import pytest
from controllers.circuit_controller import CircuitController
from controllers.simulation_controller import SimulationController
from models.component import MultimeterMode
from models.presets import load_preset
from simulation.net_status import WireStatus
from simulation.short_circuit import FaultKind


def _controllers(preset_id):
    model = load_preset(preset_id)
    circuit_ctrl = CircuitController(model)
    return model, circuit_ctrl, SimulationController(model, circuit_ctrl)


@pytest.fixture
def recorded():
    return []


class TestStartStop:
    def test_start_lights_led(self, recorded):
        model, circuit_ctrl, sim = _controllers("basic-led")
        circuit_ctrl.add_observer(lambda event, data: recorded.append(event))

        result = sim.start()
        assert result.success
        assert sim.is_simulating
        assert model.components["led"].properties.is_on
        assert recorded == ["simulation_started", "simulation_tick"]

    def test_wire_colours(self):
        _, _, sim = _controllers("voltage-divider")
        result = sim.start()
        assert result.net_info["w1"].status == WireStatus.POSITIVE
        assert result.net_info["w2"].status == WireStatus.NEUTRAL
        assert result.net_info["w3"].status == WireStatus.GROUND

    def test_stop_resets_derived_state(self, recorded):
        model, circuit_ctrl, sim = _controllers("voltage-divider")
        sim.start()
        assert model.components["meter"].properties.display_value == "2.50V"

        circuit_ctrl.add_observer(lambda event, data: recorded.append(event))
        sim.stop()
        assert not sim.is_simulating
        assert model.components["meter"].properties.display_value == "---"
        assert recorded == ["simulation_stopped"]

    def test_stop_when_idle_is_quiet(self, recorded):
        _, circuit_ctrl, sim = _controllers("basic-led")
        circuit_ctrl.add_observer(lambda event, data: recorded.append(event))
        sim.stop()
        assert recorded == []

    def test_invalid_circuit_refused(self):
        _, circuit_ctrl, sim = _controllers("basic-led")
        circuit_ctrl.clear_circuit()
        result = sim.start()
        assert not result.success
        assert result.errors
        assert not sim.is_simulating

    def test_validation_warnings_carried(self):
        _, _, sim = _controllers("555-astable")
        result = sim.start()
        assert result.success
        assert any("cap" in w for w in result.warnings)


class TestSafetyGate:
    def test_short_refuses_to_start(self, recorded):
        model, circuit_ctrl, sim = _controllers("basic-led")
        circuit_ctrl.add_wire("bat", "pos", "bat", "neg")
        circuit_ctrl.add_observer(lambda event, data: recorded.append(event))

        result = sim.start()
        assert not result.success
        assert result.fault == FaultKind.SOURCE_SHORT
        assert "Short Circuit" in result.error
        assert not sim.is_simulating
        assert recorded == ["simulation_fault"]

    def test_short_mid_simulation_halts(self):
        model, circuit_ctrl, sim = _controllers("basic-led")
        assert sim.start().success
        assert model.components["led"].properties.is_on

        circuit_ctrl.add_wire("bat", "pos", "gnd", "gnd")
        result = sim.tick()
        assert result.fault == FaultKind.SOURCE_SHORT
        assert not sim.is_simulating
        assert model.components["led"].properties.is_on is False

    def test_ohmmeter_refuses_to_start(self):
        model, circuit_ctrl, sim = _controllers("voltage-divider")
        circuit_ctrl.set_multimeter_mode("meter", MultimeterMode.OHMS)
        result = sim.start()
        assert result.fault == FaultKind.OHMMETER_ON_LIVE_CIRCUIT
        assert not sim.is_simulating

    def test_switching_to_ohms_mid_simulation_halts(self):
        _, circuit_ctrl, sim = _controllers("voltage-divider")
        assert sim.start().success
        circuit_ctrl.cycle_multimeter_mode("meter")  # V -> OHM
        result = sim.tick()
        assert result.fault == FaultKind.OHMMETER_ON_LIVE_CIRCUIT

    def test_ohmmeter_reads_unpowered_circuit(self):
        model, circuit_ctrl, sim = _controllers("voltage-divider")
        circuit_ctrl.set_multimeter_mode("meter", MultimeterMode.OHMS)
        result = sim.tick()
        assert result.success
        assert result.solution is None
        # r2 between the probes; r1 hangs off the unpowered source
        assert model.components["meter"].properties.display_value == "1kΩ"


class TestLiveEditing:
    def test_wiper_moves_reading(self):
        model, circuit_ctrl, sim = _controllers("pot-divider")
        sim.start()
        assert model.components["meter"].properties.display_value == "2.50V"

        circuit_ctrl.set_wiper_position("pot", 20)
        sim.tick()
        assert model.components["meter"].properties.display_value == "4.00V"

    def test_supply_change_applies_next_tick(self):
        model, circuit_ctrl, sim = _controllers("voltage-divider")
        sim.start()
        circuit_ctrl.set_supply_voltage(9.0)
        result = sim.tick()
        assert result.solution.voltage_at("r1", "p2") == pytest.approx(4.5)
        assert model.components["meter"].properties.display_value == "4.50V"

    def test_opening_a_switch_darkens_led(self):
        model, circuit_ctrl, sim = _controllers("basic-led")
        sw = circuit_ctrl.add_component("Switch", (200, 300))
        circuit_ctrl.toggle_switch(sw.component_id)  # closed
        circuit_ctrl.remove_wire("w1")
        circuit_ctrl.add_wire("bat", "pos", sw.component_id, "in")
        circuit_ctrl.add_wire(sw.component_id, "out", "res", "p1")

        sim.start()
        assert model.components["led"].properties.is_on

        circuit_ctrl.toggle_switch(sw.component_id)  # open
        sim.tick()
        assert model.components["led"].properties.is_on is False

    def test_ammeter_in_series(self):
        model, circuit_ctrl, sim = _controllers("basic-led")
        meter = circuit_ctrl.add_component("Multimeter", (200, 200))
        circuit_ctrl.set_multimeter_mode(meter.component_id, MultimeterMode.AMPS)
        circuit_ctrl.remove_wire("w1")
        circuit_ctrl.add_wire("bat", "pos", meter.component_id, "red")
        circuit_ctrl.add_wire(meter.component_id, "black", "res", "p1")

        result = sim.start()
        assert result.success
        assert result.solution.source_currents[meter.component_id] == pytest.approx(5.0 / 320)
        assert meter.properties.display_value == "15.6mA"


class TestAstable555:
    def test_output_toggles_every_tick(self):
        model, _, sim = _controllers("555-astable")
        timer = model.components["ic"].properties
        led = model.components["led"].properties

        results = sim.run_ticks(4)
        assert all(r.success for r in results)
        assert len(results) == 4

        # low -> high on the first tick, then alternating
        assert timer.output_high is False
        assert [("ic" in r.changed) for r in results] == [True, True, True, True]
        # The last solve ran with the output still high
        assert led.is_on is True

    def test_led_follows_output(self):
        model, _, sim = _controllers("555-astable")
        led = model.components["led"].properties

        sim.start()
        # Behaviours read the solve made before the flip-flop changed
        assert model.components["ic"].properties.output_high is True
        assert led.is_on is False

        sim.tick()
        assert model.components["ic"].properties.output_high is False
        assert led.is_on is True

    def test_threshold_voltages(self):
        model, _, sim = _controllers("555-astable")
        low = sim.start().solution
        high = sim.tick().solution
        assert low.voltage_at("ic", "thr") < 5.0 / 3
        assert high.voltage_at("ic", "thr") > 10.0 / 3

    def test_stop_resets_timer_for_next_start(self):
        model, _, sim = _controllers("555-astable")
        sim.start()
        assert model.components["ic"].properties.output_high is True

        sim.stop()
        assert model.components["ic"].properties.output_high is False

        # Restart solves with the output low, exactly like the first run
        first = sim.start().solution
        assert first.voltage_at("ic", "out") == pytest.approx(0.1)
        assert model.components["ic"].properties.output_high is True
