"""Tests for compact number formatting."""

import pytest

from cosmic_battle.sim.formatting import format_number


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (999, "999"),
        (1000, "1.00K"),
        (1500, "1.50K"),
        (2_500_000, "2.50M"),
        (3_000_000_000, "3.00B"),
        (1_250_000_000_000, "1.25T"),
        (-500, "-500"),
        (-2_000_000, "-2000000"),
        (12.0, "12"),
        (12.5, "12.5"),
        (123.456789, "123.46"),
        (-0.004, "0"),
        (1500.0, "1.50K"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected
