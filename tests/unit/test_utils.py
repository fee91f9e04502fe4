"""Unit tests for numeric coercion and display formatting"""

import pytest
from fico_simulator.utils.format_utils import format_number, format_usd
from fico_simulator.utils.numbers import parse_int, round_half_up, safe_number


@pytest.mark.parametrize(
    "value, expected",
    [(30.0, "30"), (24.6912, "24.69"), (2.5, "2.50"), (0, "0"), (None, ""), (float("nan"), "")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(3000, "$3,000.00"), (0, "$0.00"), (1234567.891, "$1,234,567.89"), (-12.5, "-$12.50"), (None, "")],
)
def test_format_usd(value, expected):
    assert format_usd(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("12", 12), ("  -4", -4), ("9 lives", 9), ("x9", 0), (3.99, 3), (-3.5, -3), (True, 0), (float("inf"), 0)],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


def test_safe_number_defaults():
    assert safe_number("1.5") == 1.5
    assert safe_number("n/a") == 0.0
    assert safe_number(float("-inf"), default=7.0) == 7.0
    assert safe_number(None) == 0.0


def test_round_half_up():
    assert round_half_up(712.5) == 713
    assert round_half_up(437.5) == 438
    assert round_half_up(726.25) == 726
    assert round_half_up(-2.5) == -2
