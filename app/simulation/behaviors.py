"""
simulation/behaviors.py

Per-tick behaviour of the parts the DC solver only approximates: LED
brightness, the 555 flip-flop, and multimeter displays. Each tick reads the
latest CircuitSolution and updates the component properties in place; the
next solve then sees the new 555 output state.
"""

import logging
from typing import Optional

from models.component import ComponentData, MultimeterMode

from .format_utils import format_current, format_resistance, format_voltage
from .mna_solver import CircuitSolution
from .resistance_probe import ProbePoint, measure_resistance
from .solver_config import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)

NO_READING = "---"

# LED colours with the higher forward voltage
_HIGH_VF_COLORS = {"blue", "green", "white"}


def led_state(color: str, v_anode: Optional[float], v_cathode: Optional[float],
              settings: SolverSettings = DEFAULT_SETTINGS) -> tuple[bool, float]:
    """
    Estimate (is_on, brightness) for an LED.

    The solver models the LED as a fixed resistor, so the current estimate
    is simply the forward voltage over that resistance. Full brightness is
    reached at led_full_brightness_amps; a lit LED never drops below
    led_min_brightness.
    """
    if v_anode is None or v_cathode is None:
        return False, 0.0

    v_diff = v_anode - v_cathode
    v_drop = settings.led_forward_volts_high if color in _HIGH_VF_COLORS else settings.led_forward_volts
    if v_diff <= v_drop:
        return False, 0.0

    current = v_diff / settings.led_model_ohms
    brightness = min(1.0, current / settings.led_full_brightness_amps)
    return True, max(brightness, settings.led_min_brightness)


def next_timer_state(output_high: bool, v_vcc: Optional[float], v_gnd: Optional[float],
                     v_trig: Optional[float], v_thr: Optional[float], v_rst: Optional[float],
                     settings: SolverSettings = DEFAULT_SETTINGS) -> bool:
    """
    Advance the 555 flip-flop one tick.

    Unconnected pins read 0 V, except reset, which reads as VCC. Without at
    least timer_min_supply_volts across the chip the state is held.
    """
    vcc = v_vcc or 0.0
    gnd = v_gnd or 0.0
    rst = vcc if v_rst is None else v_rst

    v_supply = vcc - gnd
    if v_supply <= settings.timer_min_supply_volts:
        return output_high

    if rst - gnd < settings.timer_reset_threshold_volts:
        return False
    if (v_trig or 0.0) - gnd < v_supply / 3:
        return True
    if (v_thr or 0.0) - gnd > v_supply * 2 / 3:
        return False
    return output_high


def multimeter_reading(meter: ComponentData, components, wires, solution: Optional[CircuitSolution],
                       simulating: bool, settings: SolverSettings = DEFAULT_SETTINGS) -> str:
    """Display string for a multimeter in its current mode."""
    mode = meter.properties.mode
    cid = meter.component_id

    if mode == MultimeterMode.OHMS:
        # Works with the power off
        ohms = measure_resistance(components, wires, ProbePoint(cid, "red"), ProbePoint(cid, "black"), settings)
        return format_resistance(ohms)

    if not simulating or solution is None:
        return NO_READING

    if mode == MultimeterMode.VOLTS:
        red = solution.voltage_at(cid, "red")
        black = solution.voltage_at(cid, "black")
        if red is None or black is None:
            return format_voltage(0.0)
        return format_voltage(red - black)

    if mode == MultimeterMode.AMPS:
        return format_current(solution.source_currents.get(cid, 0.0))

    return NO_READING


def apply_behaviors(components: list[ComponentData], wires, solution: Optional[CircuitSolution],
                    simulating: bool, settings: SolverSettings = DEFAULT_SETTINGS) -> list[str]:
    """
    Update derived properties of every component for one tick.

    Args:
        solution: The solve for this tick; None when not simulating.

    Returns:
        IDs of components whose properties changed.
    """
    changed = []
    for comp in components:
        ctype = comp.component_type
        props = comp.properties

        if ctype == "LED":
            if simulating and solution is not None:
                is_on, brightness = led_state(
                    props.color,
                    solution.voltage_at(comp.component_id, "anode"),
                    solution.voltage_at(comp.component_id, "cathode"),
                    settings,
                )
            else:
                is_on, brightness = False, 0.0
            if props.is_on != is_on or abs(props.brightness - brightness) > 1e-9:
                props.is_on = is_on
                props.brightness = brightness
                changed.append(comp.component_id)

        elif ctype == "555 Timer" and simulating and solution is not None:
            cid = comp.component_id
            nxt = next_timer_state(
                props.output_high,
                solution.voltage_at(cid, "vcc"),
                solution.voltage_at(cid, "gnd"),
                solution.voltage_at(cid, "trig"),
                solution.voltage_at(cid, "thr"),
                solution.voltage_at(cid, "rst"),
                settings,
            )
            if nxt != props.output_high:
                logger.debug("%s output -> %s", cid, "high" if nxt else "low")
                props.output_high = nxt
                changed.append(cid)

        elif ctype == "Multimeter":
            reading = multimeter_reading(comp, components, wires, solution, simulating, settings)
            if props.display_value != reading:
                props.display_value = reading
                changed.append(comp.component_id)

    return changed
