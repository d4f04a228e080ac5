"""
simulation/format_utils.py

Resistor colour-band decoding, SI-prefix parsing, and the human-readable
formatting used by the multimeter display and component labels.
"""

import math
import re

# Digit value of each colour band
BAND_VALUES = {
    'black': 0, 'brown': 1, 'red': 2, 'orange': 3, 'yellow': 4,
    'green': 5, 'blue': 6, 'violet': 7, 'gray': 8, 'white': 9,
}

# Multiplier value of each colour band
MULTIPLIER_VALUES = {
    'black': 1, 'brown': 10, 'red': 100, 'orange': 1e3, 'yellow': 1e4,
    'green': 1e5, 'blue': 1e6, 'violet': 1e7, 'gold': 0.1, 'silver': 0.01,
}

# Dictionary of SI prefixes and their multipliers
# Includes common variations like 'u' for 'µ' and 'MEG' for 'M'
SI_PREFIX_MULTIPLIERS = {
    'f': 1e-15,  # Femto
    'p': 1e-12,  # Pico
    'n': 1e-9,   # Nano
    'u': 1e-6,   # Micro
    'µ': 1e-6,   # Micro
    'm': 1e-3,   # Milli
    'k': 1e3,    # Kilo
    'M': 1e6,    # Mega
    'MEG': 1e6,  # Mega (SPICE variant)
    'G': 1e9,    # Giga
    'T': 1e12,   # Tera
}

# Readings above this are shown as open loop
OPEN_LOOP_OHMS = 1e9

OPEN_LOOP = "OL"


def calculate_resistance(bands) -> float:
    """
    Decode a 4- or 5-band resistor colour code into ohms.

    4 bands: digit, digit, multiplier, tolerance.
    5 bands: digit, digit, digit, multiplier, tolerance.
    Fewer than 4 bands decode to 0. Unknown digit colours count as 0 and
    an unknown multiplier as 1.
    """
    if not bands or len(bands) < 4:
        return 0.0

    d1 = BAND_VALUES.get(bands[0], 0)
    d2 = BAND_VALUES.get(bands[1], 0)

    if len(bands) == 5:
        d3 = BAND_VALUES.get(bands[2], 0)
        multiplier = MULTIPLIER_VALUES.get(bands[3], 1)
        return (d1 * 100 + d2 * 10 + d3) * multiplier

    multiplier = MULTIPLIER_VALUES.get(bands[2], 1)
    return (d1 * 10 + d2) * multiplier


def parse_value(s) -> float:
    """
    Parses a string with an optional SI prefix into a float.
    Examples: "10k" -> 10000.0, "25m" -> 0.025, "9V" -> 9.0
    """
    if not isinstance(s, str):
        return float(s)

    s = s.strip()

    # SPICE 'MEG' variant first, so it is not read as milli
    meg = re.match(r'^(-?\d+\.?\d*(?:[eE][-+]?\d+)?)MEG', s, re.IGNORECASE)
    if meg:
        return float(meg.group(1)) * SI_PREFIX_MULTIPLIERS['MEG']

    # Use regex to separate the number from the potential prefix/unit
    match = re.match(r'^(-?\d+\.?\d*(?:[eE][-+]?\d+)?)([a-zA-Zµ]*)', s)
    if not match:
        raise ValueError(f"Invalid number format: {s}")

    num_str, unit_str = match.groups()

    if unit_str and unit_str[0] in SI_PREFIX_MULTIPLIERS:
        return float(num_str) * SI_PREFIX_MULTIPLIERS[unit_str[0]]

    # No prefix (or a bare unit such as 'V'), just return the number
    return float(num_str)


def _trim(text: str, suffix: str) -> str:
    return text[: -len(suffix)] if text.endswith(suffix) else text


def format_resistance(ohms: float) -> str:
    """
    Format an ohmmeter reading.

    Infinite or > 1 GΩ readings show "OL" (open loop).
    Examples: 470 -> "470Ω", 2200 -> "2.20kΩ", 1000 -> "1kΩ", 0.05 -> "0.00Ω"
    """
    if not math.isfinite(ohms) or ohms > OPEN_LOOP_OHMS:
        return OPEN_LOOP
    if ohms < 0.1:
        return "0.00Ω"
    if ohms >= 1e6:
        return f"{_trim(f'{ohms / 1e6:.2f}', '.00')}MΩ"
    if ohms >= 1e3:
        return f"{_trim(f'{ohms / 1e3:.2f}', '.00')}kΩ"
    return f"{_trim(f'{ohms:.2f}', '.00')}Ω"


def format_capacitance(micro_farads: float) -> str:
    """Format a capacitance given in microfarads, e.g. 0.1 -> "100nF"."""
    if micro_farads >= 1000:
        return f"{micro_farads / 1000:.1f}mF"
    if micro_farads >= 1:
        return f"{_trim(f'{micro_farads:.1f}', '.0')}µF"
    if micro_farads >= 0.001:
        return f"{micro_farads * 1000:.0f}nF"
    return f"{micro_farads * 1e6:.0f}pF"


def format_current(amps: float) -> str:
    """Format an ammeter reading; the sign is kept."""
    abs_amps = abs(amps)
    if abs_amps < 1e-6:
        return "0.00A"
    if abs_amps < 1e-3:
        return f"{amps * 1e6:.1f}µA"
    if abs_amps < 1:
        return f"{amps * 1e3:.1f}mA"
    return f"{amps:.2f}A"


def format_voltage(volts: float) -> str:
    return f"{volts:.2f}V"
