"""
simulation/solver_config.py

Named numeric constants used by the circuit solvers and the simulation
tick. The defaults reproduce the behavioural models exactly; overrides can
be loaded from a JSON file to probe sensitivity.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverSettings:
    """Tunable constants for the MNA solver, resistance probe and behaviours."""

    # Linear solver: pivots smaller than this are skipped
    pivot_epsilon: float = 1e-10
    # Added to every diagonal when the circuit has no ground
    floating_node_conductance: float = 1e-9

    # Potentiometer segments never drop below this resistance
    pot_min_segment_ohms: float = 0.1
    switch_closed_ohms: float = 0.01
    # LED stand-in resistance; also used for the post-hoc brightness estimate
    led_model_ohms: float = 100.0

    # 555 timer model
    timer_divider_ohms: float = 5000.0
    timer_discharge_off_ohms: float = 1e8
    timer_discharge_on_ohms: float = 10.0
    # Output voltage when low; non-zero so OUT and GND on one net stay solvable
    timer_low_output_volts: float = 0.1
    timer_min_supply_volts: float = 1.0
    timer_reset_threshold_volts: float = 0.5

    # LED behaviour
    led_full_brightness_amps: float = 0.02
    led_min_brightness: float = 0.2
    led_forward_volts: float = 1.5
    led_forward_volts_high: float = 2.5  # blue, green and white LEDs

    # Wire colouring
    positive_fraction: float = 0.9
    ground_threshold_volts: float = 0.5

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SolverSettings":
        """
        Build settings from a partial dictionary; missing keys keep defaults.

        Raises:
            ValueError: On unknown keys or non-numeric values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown solver setting(s): {', '.join(unknown)}")

        overrides = {}
        for key, value in data.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Solver setting '{key}' must be a number, got {value!r}")
            overrides[key] = float(value)
        return replace(cls(), **overrides)


DEFAULT_SETTINGS = SolverSettings()


def load_settings(path: Union[str, Path]) -> SolverSettings:
    """
    Load solver settings overrides from a JSON object file.

    Raises:
        ValueError: If the file is not valid JSON or contains bad settings.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object of settings.")

    settings = SolverSettings.from_dict(data)
    logger.debug("Loaded solver settings from %s: %s", path, data)
    return settings
