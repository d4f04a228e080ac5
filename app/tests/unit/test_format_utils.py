"""Tests for colour-band decoding, value parsing and display formatting."""

import math

import pytest
from simulation.format_utils import (
    calculate_resistance,
    format_capacitance,
    format_current,
    format_resistance,
    format_voltage,
    parse_value,
)


class TestCalculateResistance:
    @pytest.mark.parametrize(
        "bands,expected",
        [
            (["brown", "black", "red", "gold"], 1000),
            (["red", "red", "brown", "gold"], 220),
            (["orange", "orange", "red", "gold"], 3300),
            (["yellow", "violet", "orange", "gold"], 47000),
            (["brown", "black", "gold", "gold"], 1.0),
            (["brown", "black", "black", "red", "brown"], 10000),
        ],
    )
    def test_decodes_bands(self, bands, expected):
        assert calculate_resistance(bands) == pytest.approx(expected)

    def test_too_few_bands(self):
        assert calculate_resistance(["brown", "black", "red"]) == 0

    def test_unknown_digit_reads_zero(self):
        assert calculate_resistance(["pink", "black", "red", "gold"]) == 0

    def test_unknown_multiplier_reads_one(self):
        assert calculate_resistance(["brown", "black", "pink", "gold"]) == 10


class TestParseValue:
    @pytest.mark.parametrize(
        "text,expected",
        [("10k", 10000.0), ("4.7k", 4700.0), ("25m", 0.025), ("9V", 9.0), ("1MEG", 1e6),
         ("2M", 2e6), ("100n", 1e-7), ("5", 5.0), (" 3.3 ", 3.3), ("1e3", 1000.0)],
    )
    def test_parses(self, text, expected):
        assert parse_value(text) == pytest.approx(expected)

    def test_numbers_pass_through(self):
        assert parse_value(12) == 12.0

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_value("volts")


class TestFormatResistance:
    @pytest.mark.parametrize(
        "ohms,expected",
        [(470, "470Ω"), (1000, "1kΩ"), (2200, "2.20kΩ"), (500, "500Ω"), (0.05, "0.00Ω"),
         (0.01, "0.00Ω"), (1.5e6, "1.50MΩ"), (1e6, "1MΩ"), (12.5, "12.50Ω")],
    )
    def test_formats(self, ohms, expected):
        assert format_resistance(ohms) == expected

    def test_infinite_is_open_loop(self):
        assert format_resistance(math.inf) == "OL"

    def test_above_one_gigaohm_is_open_loop(self):
        assert format_resistance(2e9) == "OL"


class TestOtherFormats:
    @pytest.mark.parametrize(
        "micro_farads,expected",
        [(100, "100µF"), (4.7, "4.7µF"), (2200, "2.2mF"), (0.1, "100nF"), (0.0001, "100pF")],
    )
    def test_capacitance(self, micro_farads, expected):
        assert format_capacitance(micro_farads) == expected

    @pytest.mark.parametrize(
        "amps,expected",
        [(0.0, "0.00A"), (5e-7, "0.00A"), (2.5e-4, "250.0µA"), (0.0025, "2.5mA"), (-0.0025, "-2.5mA"), (1.5, "1.50A")],
    )
    def test_current(self, amps, expected):
        assert format_current(amps) == expected

    def test_voltage(self):
        assert format_voltage(2.5) == "2.50V"
        assert format_voltage(-0.004) == "-0.00V"
